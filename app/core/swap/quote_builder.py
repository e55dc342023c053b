"""Assembly of the canonical LI.FI quote request for the ERC-20 → BTC route."""

from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import Optional, Union

from .errors import InvalidSlippage
from .models import QuoteRequestParams, TokenDescriptor

DEFAULT_SLIPPAGE = Decimal("0.003")  # 0.3%


def normalize_slippage(
    raw: Optional[Union[str, Decimal, float]],
    default: Union[str, Decimal] = DEFAULT_SLIPPAGE,
) -> str:
    """
    Validate a slippage fraction and return the string sent upstream.

    A caller-supplied value is forwarded exactly as written once it parses as
    a decimal within 0..1. Absent or blank values fall back to ``default``.
    """
    if raw is None or (isinstance(raw, str) and not raw.strip()):
        return str(default)

    text = str(raw).strip()
    try:
        value = Decimal(text)
    except InvalidOperation:
        raise InvalidSlippage(text) from None
    if not value.is_finite() or value < 0 or value > 1:
        raise InvalidSlippage(text)
    return text


def build_quote_params(
    token: TokenDescriptor,
    from_amount_units: str,
    from_address: str,
    to_address: str,
    slippage: Optional[Union[str, Decimal, float]] = None,
    default_slippage: Union[str, Decimal] = DEFAULT_SLIPPAGE,
) -> QuoteRequestParams:
    """
    Build the upstream quote request.

    Source chain, destination chain and destination token are fixed by the
    route; only the source token, wallets, amount and slippage vary.
    """
    return QuoteRequestParams(
        from_token=token.address,
        from_address=from_address,
        to_address=to_address,
        from_amount=from_amount_units,
        slippage=normalize_slippage(slippage, default_slippage),
    )
