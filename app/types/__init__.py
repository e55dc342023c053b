from .lifi import (
    LifiEstimate,
    LifiFeeCost,
    LifiGasCost,
    LifiQuote,
    LifiTokenRef,
    LifiToolDetails,
)

__all__ = [
    "LifiEstimate",
    "LifiFeeCost",
    "LifiGasCost",
    "LifiQuote",
    "LifiTokenRef",
    "LifiToolDetails",
]
