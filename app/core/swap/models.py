"""Typed models used by the swap subsystem."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional

from .constants import (
    BITCOIN_CHAIN_KEY,
    BTC_SYMBOL,
    ETHEREUM_CHAIN_ID,
    HEX_ADDRESS_RE,
    MAX_TOKEN_DECIMALS,
)
from .errors import SwapError


@dataclass(frozen=True)
class TokenDescriptor:
    """A fully specified source token."""

    address: str
    chain_id: int
    symbol: str
    name: str
    decimals: int

    def __post_init__(self) -> None:
        if not HEX_ADDRESS_RE.match(self.address):
            raise ValueError(f"not a 0x-prefixed 40-hex-digit address: {self.address!r}")
        if isinstance(self.decimals, bool) or not 0 <= self.decimals <= MAX_TOKEN_DECIMALS:
            raise ValueError(f"decimals must be within 0..{MAX_TOKEN_DECIMALS}, got {self.decimals!r}")

    @property
    def label(self) -> str:
        return f"{self.symbol} (ERC-20, {self.decimals} decimals)"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "address": self.address,
            "chainId": self.chain_id,
            "symbol": self.symbol,
            "name": self.name,
            "decimals": self.decimals,
        }


class ResolutionSource(str, Enum):
    """How a caller-supplied token identifier was resolved."""

    REGISTRY = "registry"
    ADDRESS = "address"
    ERROR = "error"


@dataclass(frozen=True)
class TokenResolution:
    """Tagged result of token resolution: a registry hit, a synthesized token, or an error."""

    source: ResolutionSource
    token: Optional[TokenDescriptor] = None
    error: Optional[SwapError] = None

    @classmethod
    def registry(cls, token: TokenDescriptor) -> "TokenResolution":
        return cls(ResolutionSource.REGISTRY, token=token)

    @classmethod
    def address(cls, token: TokenDescriptor) -> "TokenResolution":
        return cls(ResolutionSource.ADDRESS, token=token)

    @classmethod
    def failed(cls, error: SwapError) -> "TokenResolution":
        return cls(ResolutionSource.ERROR, error=error)

    @property
    def ok(self) -> bool:
        return self.token is not None

    def require(self) -> TokenDescriptor:
        """Return the resolved token or raise the carried error."""
        if self.token is None:
            raise self.error or SwapError("token resolution failed")
        return self.token


@dataclass(frozen=True)
class QuoteRequestParams:
    """Canonical upstream quote request for the ERC-20 → BTC route."""

    from_token: str
    from_address: str
    to_address: str
    from_amount: str
    slippage: str
    from_chain: str = ETHEREUM_CHAIN_ID
    to_chain: str = BITCOIN_CHAIN_KEY
    to_token: str = BTC_SYMBOL

    def to_query(self) -> Dict[str, str]:
        return {
            "fromChain": self.from_chain,
            "toChain": self.to_chain,
            "fromToken": self.from_token,
            "toToken": self.to_token,
            "fromAddress": self.from_address,
            "toAddress": self.to_address,
            "fromAmount": self.from_amount,
            "slippage": self.slippage,
        }
