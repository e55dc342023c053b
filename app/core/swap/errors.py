"""
Swap Error Kinds

Every failure the quote/simulate/status flow can surface to a caller.
Each error carries the HTTP status it maps to, so the API layer renders
all of them through one exception handler.
"""

from enum import Enum
from typing import Any, Dict, Optional


class ErrorCategory(str, Enum):
    """Categories of swap errors."""

    VALIDATION = "validation"     # Bad or missing caller input
    UPSTREAM = "upstream"         # LI.FI answered with a non-2xx status
    TIMEOUT = "timeout"           # LI.FI did not answer in time
    INTERNAL = "internal"         # Anything else


class SwapError(Exception):
    """
    Base class for errors raised while serving a swap request.

    Attributes:
        message: Human-readable message returned as ``error``
        status_code: HTTP status the error maps to
        details: Optional extra payload returned as ``details``
    """

    status_code: int = 400
    category: ErrorCategory = ErrorCategory.VALIDATION

    def __init__(self, message: str, details: Optional[Any] = None):
        super().__init__(message)
        self.message = message
        self.details = details

    def to_dict(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {"error": self.message}
        if self.details is not None:
            body["details"] = self.details
        return body


# Validation errors (400)
class MissingParameter(SwapError):
    """One or more required query parameters are absent."""

    def __init__(self, *names: str):
        self.names = names
        super().__init__(f"{', '.join(names)} required")


class InvalidAmount(SwapError):
    """Amount is not a non-negative decimal string, or rounds to zero base units."""

    def __init__(self, message: str = "amount must be a positive decimal number, e.g. 0.015"):
        super().__init__(message)


class MissingToken(SwapError):
    def __init__(self) -> None:
        super().__init__("fromToken is required (registry key or 0x... address)")


class InvalidDecimals(SwapError):
    def __init__(self) -> None:
        super().__init__(
            "A token given by address needs ?decimals=<integer 0..36> (and ideally ?symbol=XYZ)"
        )


class UnresolvedToken(SwapError):
    def __init__(self, identifier: str, known_aliases: tuple[str, ...] = ()):
        self.identifier = identifier
        aliases = ", ".join(known_aliases) if known_aliases else "a registry key"
        super().__init__(
            f"fromToken must be a registry key ({aliases}) or an ERC-20 address (0x...), got '{identifier}'"
        )


class InvalidSlippage(SwapError):
    def __init__(self, value: str):
        self.value = value
        super().__init__(f"slippage must be a decimal fraction between 0 and 1, got '{value}'")


class MissingTxHash(SwapError):
    def __init__(self) -> None:
        super().__init__("txHash required")


# Upstream errors
class UpstreamError(SwapError):
    """LI.FI returned an unusable response; its status and raw body are passed through."""

    category = ErrorCategory.UPSTREAM

    def __init__(self, status_code: int, details: str, operation: str = "quote"):
        super().__init__(f"LI.FI {operation} failed", details=details)
        self.status_code = status_code
        self.operation = operation


class UpstreamTimeout(SwapError):
    status_code = 504
    category = ErrorCategory.TIMEOUT

    def __init__(self, operation: str, timeout_s: float):
        super().__init__(
            f"LI.FI {operation} timed out",
            details=f"no response within {timeout_s:g}s",
        )
        self.operation = operation


class InternalError(SwapError):
    status_code = 500
    category = ErrorCategory.INTERNAL

    def __init__(self, details: str):
        super().__init__("Internal error", details=details)
