"""
Amount conversion between human decimal strings and integer base units.

Both directions work on strings and Python ints only. Floats are never used:
an 8-decimal BTC amount such as ``0.00000001`` must survive the round trip exactly.
"""

from __future__ import annotations

import re
from decimal import ROUND_HALF_UP, Decimal, localcontext
from typing import Optional, Union

from .errors import InvalidAmount

_DECIMAL_RE = re.compile(r"^(\d*)(?:\.(\d*))?$")

_TWO_PLACES = Decimal("0.01")

# 2**256 - 1 has 78 digits; no ERC-20 balance can be larger
MAX_BASE_UNIT_DIGITS = 78


def to_base_units(amount_human: str, decimals: int) -> str:
    """
    Convert a human-readable amount into a base-unit integer string.

    The fractional part is right-padded with zeros and truncated to exactly
    ``decimals`` digits, so excess precision is dropped rather than rounded.

    Args:
        amount_human: Decimal string such as ``"0.015"`` or ``"5"``
        decimals: Token decimal count

    Returns:
        Canonical base-10 string of the integer amount, e.g. ``"1500000"``

    Raises:
        InvalidAmount: If the input is not digits with at most one radix point,
            or the result would not fit in a uint256
    """
    text = str(amount_human).strip()
    match = _DECIMAL_RE.match(text)
    if not match or not any(ch.isdigit() for ch in text):
        raise InvalidAmount(f"amount must be a non-negative decimal number, got '{amount_human}'")

    whole, frac = match.group(1), match.group(2) or ""
    frac_padded = (frac + "0" * decimals)[:decimals]
    digits = (whole + frac_padded).lstrip("0") or "0"
    if len(digits) > MAX_BASE_UNIT_DIGITS:
        raise InvalidAmount(
            f"amount is too large: {len(digits)} digits in base units, at most {MAX_BASE_UNIT_DIGITS} allowed"
        )
    return digits


def from_base_units(amount_str: Optional[Union[str, int]], decimals: int) -> str:
    """
    Convert a base-unit integer string into a fixed-point decimal string.

    ``from_base_units("100000000", 8) == "1.00000000"`` and
    ``from_base_units("1", 8) == "0.00000001"``.
    """
    digits = str(amount_str if amount_str is not None else "0").strip() or "0"
    if decimals == 0:
        return digits.lstrip("0") or "0"

    padded = digits.rjust(decimals + 1, "0")
    integer_part, frac_part = padded[:-decimals], padded[-decimals:]
    integer_part = integer_part.lstrip("0") or "0"
    return f"{integer_part}.{frac_part}"


def loss_percent(amount_in: str, amount_out: str) -> str:
    """
    Percentage lost between an input and an output amount, e.g. ``"1.50%"``.

    Rounded half-up to two places. A zero input yields ``"0.00%"``.
    """
    with localcontext() as ctx:
        # Enough digits for the integer part of the ratio plus two places
        ctx.prec = max(28, len(amount_in) + len(amount_out) + 4)
        source = Decimal(amount_in)
        if source == 0:
            return f"{Decimal(0).quantize(_TWO_PLACES)}%"
        pct = (source - Decimal(amount_out)) / source * 100
        return f"{pct.quantize(_TWO_PLACES, rounding=ROUND_HALF_UP)}%"
