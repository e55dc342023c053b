"""
Source-token resolution.

A caller names the token to sell either by registry alias (``wbtc``, ``cbbtc``)
or by raw ERC-20 address plus explicit ``decimals`` (and optionally ``symbol``).
Resolution is a three-way branch returning a tagged ``TokenResolution``.
"""

from __future__ import annotations

from decimal import Decimal, InvalidOperation
from types import MappingProxyType
from typing import Mapping, Optional, Union

from .constants import (
    CUSTOM_TOKEN_NAME,
    CUSTOM_TOKEN_SYMBOL,
    ETHEREUM_CHAIN_ID_INT,
    HEX_ADDRESS_RE,
    MAX_TOKEN_DECIMALS,
)
from .errors import InvalidDecimals, MissingToken, UnresolvedToken
from .models import TokenDescriptor, TokenResolution

DEFAULT_FROM_TOKEN_KEY = "wbtc"

# Read-only, keyed by lowercase alias. Built once at import and never mutated.
TOKEN_REGISTRY: Mapping[str, TokenDescriptor] = MappingProxyType({
    'wbtc': TokenDescriptor(
        address='0x2260FAC5E5542a773Aa44fBCfeDf7C193bc2C599',
        chain_id=ETHEREUM_CHAIN_ID_INT,
        symbol='WBTC',
        name='Wrapped BTC',
        decimals=8,
    ),
    'cbbtc': TokenDescriptor(
        address='0xcbB7C0000aB88B473b1f5aFd9ef808440eed33Bf',
        chain_id=ETHEREUM_CHAIN_ID_INT,
        symbol='cbBTC',
        name='Coinbase Wrapped BTC',
        decimals=8,
    ),
})


def is_hex_address(value: str) -> bool:
    return isinstance(value, str) and bool(HEX_ADDRESS_RE.match(value))


def parse_decimals(raw: Optional[Union[str, int]]) -> Optional[int]:
    """Parse a decimals hint; None unless it is an integer within 0..36."""
    if raw is None or isinstance(raw, bool):
        return None
    try:
        number = Decimal(str(raw).strip())
    except InvalidOperation:
        return None
    if not number.is_finite() or number != number.to_integral_value():
        return None
    value = int(number)
    if not 0 <= value <= MAX_TOKEN_DECIMALS:
        return None
    return value


def resolve_token(
    identifier: Optional[str],
    *,
    decimals: Optional[Union[str, int]] = None,
    symbol: Optional[str] = None,
    default_alias: str = DEFAULT_FROM_TOKEN_KEY,
    registry: Mapping[str, TokenDescriptor] = TOKEN_REGISTRY,
) -> TokenResolution:
    """
    Resolve a caller-supplied token identifier.

    Order:
        1. Normalize (trim, lower case); empty → MissingToken
        2. Registry alias → registry entry verbatim
        3. 0x address → synthesized descriptor, requires decimals in 0..36
        4. Anything else → UnresolvedToken

    Args:
        identifier: Alias or address; ``None`` falls back to ``default_alias``
        decimals: Decimals hint, required for raw addresses
        symbol: Symbol hint for raw addresses
        default_alias: Alias used when ``identifier`` is absent
        registry: Alias → descriptor mapping

    Returns:
        TokenResolution tagged with the branch taken
    """
    raw = identifier if identifier is not None else default_alias
    key = str(raw).strip().lower()

    if not key:
        return TokenResolution.failed(MissingToken())

    entry = registry.get(key)
    if entry is not None:
        return TokenResolution.registry(entry)

    if is_hex_address(key):
        parsed = parse_decimals(decimals)
        if parsed is None:
            return TokenResolution.failed(InvalidDecimals())
        symbol_hint = str(symbol).strip() if symbol is not None else ""
        return TokenResolution.address(
            TokenDescriptor(
                address=key,
                chain_id=ETHEREUM_CHAIN_ID_INT,
                symbol=symbol_hint or CUSTOM_TOKEN_SYMBOL,
                name=symbol_hint or CUSTOM_TOKEN_NAME,
                decimals=parsed,
            )
        )

    return TokenResolution.failed(UnresolvedToken(key, tuple(registry.keys())))
