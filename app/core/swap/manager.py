"""SwapManager orchestrates LI.FI-powered ERC-20 → BTC quotes, simulations and status lookups."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Dict, Optional, Union

import structlog

from ...providers.lifi import LifiProvider
from ...types.lifi import LifiQuote
from .amounts import to_base_units
from .constants import BITCOIN_CHAIN_KEY, BTC_SYMBOL, ETHEREUM_CHAIN_ID
from .errors import InvalidAmount, MissingParameter, MissingTxHash
from .models import QuoteRequestParams, TokenDescriptor
from .quote_builder import DEFAULT_SLIPPAGE, build_quote_params
from .simulation import SimulationReport, build_simulation_report
from .tokens import DEFAULT_FROM_TOKEN_KEY, resolve_token

QUOTE_NOTE = (
    "Sign the approve transaction (if required), then sign and broadcast "
    "transactionRequest on Ethereum."
)


@dataclass(frozen=True)
class PreparedQuote:
    """A validated request: the resolved token plus the upstream query."""

    token: TokenDescriptor
    params: QuoteRequestParams


class SwapManager:
    """Validates caller input, calls LI.FI and shapes the response."""

    def __init__(
        self,
        *,
        provider: Optional[LifiProvider] = None,
        default_from_token: str = DEFAULT_FROM_TOKEN_KEY,
        default_slippage: Union[str, Decimal] = DEFAULT_SLIPPAGE,
    ) -> None:
        self._provider = provider or LifiProvider()
        self._default_from_token = default_from_token
        self._default_slippage = default_slippage
        self._logger = structlog.stdlib.get_logger("swap.manager")

    def prepare(
        self,
        *,
        amount: Optional[str],
        from_address: Optional[str],
        btc_address: Optional[str],
        from_token: Optional[str] = None,
        decimals: Optional[str] = None,
        symbol: Optional[str] = None,
        slippage: Optional[str] = None,
    ) -> PreparedQuote:
        missing = [
            name
            for name, value in (("amount", amount), ("fromAddress", from_address), ("btcAddress", btc_address))
            if not value
        ]
        if missing:
            raise MissingParameter(*missing)

        token = resolve_token(
            from_token,
            decimals=decimals,
            symbol=symbol,
            default_alias=self._default_from_token,
        ).require()

        from_amount_units = to_base_units(amount, token.decimals)
        if int(from_amount_units) == 0:
            raise InvalidAmount(
                f"amount must be greater than zero at {token.decimals} decimals, got '{amount}'"
            )

        params = build_quote_params(
            token,
            from_amount_units,
            from_address,
            btc_address,
            slippage,
            default_slippage=self._default_slippage,
        )
        self._logger.debug(
            "swap_prepared",
            token=token.symbol,
            token_address=token.address,
            from_amount=from_amount_units,
            slippage=params.slippage,
        )
        return PreparedQuote(token=token, params=params)

    async def fetch_quote(self, prepared: PreparedQuote) -> Dict[str, Any]:
        return await self._provider.quote(prepared.params.to_query())

    async def quote(self, **query: Optional[str]) -> Dict[str, Any]:
        """Quote the swap and surface the approval and unsigned transaction."""

        prepared = self.prepare(**query)
        step = await self.fetch_quote(prepared)
        return shape_quote_response(prepared.token, step)

    async def simulate(self, **query: Optional[str]) -> SimulationReport:
        """Quote the swap and compute its economics without returning tx data."""

        prepared = self.prepare(**query)
        step = await self.fetch_quote(prepared)
        quote = LifiQuote.model_validate(step or {})
        report = build_simulation_report(
            quote,
            prepared.token,
            prepared.params.from_amount,
            prepared.params.slippage,
        )
        self._logger.info(
            "swap_simulated",
            token=prepared.token.symbol,
            expected=report.expected_amount,
            minimum=report.min_amount,
            loss_expected=report.loss_pct_expected,
            provider=report.provider,
        )
        return report

    async def status(
        self,
        tx_hash: Optional[str],
        from_chain: Optional[str] = None,
        to_chain: Optional[str] = None,
    ) -> Any:
        """Relay a status lookup; the upstream body is returned unmodified."""

        if not tx_hash:
            raise MissingTxHash()
        return await self._provider.status(
            tx_hash,
            str(from_chain or ETHEREUM_CHAIN_ID),
            str(to_chain or BITCOIN_CHAIN_KEY),
        )


def _mapping(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def shape_quote_response(token: TokenDescriptor, step: Dict[str, Any]) -> Dict[str, Any]:
    """Wrap the upstream step with the approval and transaction the wallet needs.

    Only the approval fields and ``transactionRequest`` are read, so odd shapes
    elsewhere in the step never block a quote.
    """
    root = _mapping(step)
    estimate = _mapping(root.get("estimate"))
    approval_address = estimate.get("approvalAddress") or None
    return {
        "meta": {"note": QUOTE_NOTE},
        "tokens": {
            "fromToken": token.label,
            "toToken": f"{BTC_SYMBOL} (native)",
        },
        "step": step,
        "approval": {
            "required": approval_address is not None,
            "spender": approval_address,
            "approvalData": estimate.get("approvalData") or None,
        },
        "transactionRequest": _mapping(root.get("transactionRequest")) or None,
    }
