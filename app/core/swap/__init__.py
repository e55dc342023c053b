"""ERC-20 → BTC swap quoting components."""

from typing import TYPE_CHECKING

from .amounts import from_base_units, to_base_units
from .errors import SwapError
from .models import QuoteRequestParams, TokenDescriptor, TokenResolution
from .tokens import TOKEN_REGISTRY, resolve_token

if TYPE_CHECKING:  # pragma: no cover
    from .manager import SwapManager

__all__ = [
    "QuoteRequestParams",
    "SwapError",
    "SwapManager",
    "TOKEN_REGISTRY",
    "TokenDescriptor",
    "TokenResolution",
    "from_base_units",
    "resolve_token",
    "to_base_units",
]


def __getattr__(name: str):  # pragma: no cover - simple thunk
    if name == "SwapManager":
        from .manager import SwapManager as _SwapManager

        return _SwapManager
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
