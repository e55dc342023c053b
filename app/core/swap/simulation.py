"""
Simulation report for an ERC-20 → BTC quote.

Turns a LI.FI quote into human-readable amounts, loss percentages and
normalized fee/gas rows, then renders them as fixed-column text tables.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from tabulate import tabulate

from ...types.lifi import LifiFeeCost, LifiGasCost, LifiQuote
from .amounts import from_base_units, loss_percent
from .constants import BTC_DECIMALS, BTC_SYMBOL
from .models import TokenDescriptor

PLACEHOLDER = "-"
DEFAULT_FEE_DECIMALS = 8

SUMMARY_HEADER = ("Metric", "Value")
FEE_HEADER = ("Fee", "Token", "Amount", "USD")
GAS_HEADER = ("Type", "Token", "Amount (raw)", "USD")


@dataclass
class FeeRow:
    name: Optional[str]
    token: Optional[str]
    amount: str
    amount_usd: Optional[str]

    def cells(self) -> List[str]:
        return [_cell(self.name), _cell(self.token), _cell(self.amount), _cell(self.amount_usd)]


@dataclass
class GasRow:
    type: Optional[str]
    token: Optional[str]
    amount: Optional[str]
    amount_usd: Optional[str]

    def cells(self) -> List[str]:
        return [_cell(self.type), _cell(self.token), _cell(self.amount), _cell(self.amount_usd)]


@dataclass
class SimulationReport:
    """Derived swap economics; built per request and never stored."""

    token: TokenDescriptor
    input_amount: str
    expected_amount: str
    min_amount: str
    loss_pct_expected: str
    loss_pct_min: str
    slippage: str
    provider: Optional[str] = None
    from_amount_usd: Optional[str] = None
    to_amount_usd: Optional[str] = None
    fees: List[FeeRow] = field(default_factory=list)
    gas: List[GasRow] = field(default_factory=list)

    def summary_rows(self) -> List[List[str]]:
        return [
            list(SUMMARY_HEADER),
            ["Input", _with_usd(f"{self.input_amount} {self.token.symbol}", self.from_amount_usd)],
            ["Expected", _with_usd(f"{self.expected_amount} {BTC_SYMBOL}", self.to_amount_usd)],
            ["Min (slippage)", f"{self.min_amount} {BTC_SYMBOL}"],
            ["Loss % (expected)", self.loss_pct_expected],
            ["Loss % (min)", self.loss_pct_min],
            ["Slippage param", _cell(self.slippage)],
            ["Provider", _cell(self.provider)],
        ]

    def fee_rows(self) -> List[List[str]]:
        return [list(FEE_HEADER), *(fee.cells() for fee in self.fees)]

    def gas_rows(self) -> List[List[str]]:
        return [list(GAS_HEADER), *(gas.cells() for gas in self.gas)]

    def render(self) -> str:
        return (
            "=== Simulation Summary ===\n"
            + render_table(self.summary_rows())
            + "\n=== Fees ===\n"
            + render_table(self.fee_rows())
            + "\n=== Gas ===\n"
            + render_table(self.gas_rows())
            + f"\nNotes: estimate only, no approve/execute | fromToken={self.token.symbol} ({self.token.address})\n"
        )


def _cell(value: Optional[str]) -> str:
    return value if value else PLACEHOLDER


def _with_usd(text: str, usd: Optional[str]) -> str:
    return f"{text} (~{usd} USD)" if usd else text


def normalize_fee(fee: LifiFeeCost) -> FeeRow:
    decimals = DEFAULT_FEE_DECIMALS
    if fee.token is not None and fee.token.decimals is not None:
        decimals = fee.token.decimals
    return FeeRow(
        name=fee.name,
        token=fee.token.symbol if fee.token else None,
        amount=from_base_units(fee.amount or "0", decimals),
        amount_usd=fee.amount_usd,
    )


def normalize_gas(gas: LifiGasCost) -> GasRow:
    # Gas amounts are passed through untouched
    return GasRow(
        type=gas.type,
        token=gas.token.symbol if gas.token else None,
        amount=gas.amount,
        amount_usd=gas.amount_usd,
    )


def build_simulation_report(
    quote: LifiQuote,
    token: TokenDescriptor,
    from_amount_units: str,
    slippage: str,
) -> SimulationReport:
    """
    Compute the simulation report for a quote.

    Args:
        quote: Parsed LI.FI quote
        token: Resolved source token
        from_amount_units: Base-unit amount that was requested, used when the
            estimate omits ``fromAmount``
        slippage: Slippage fraction sent upstream, used when the estimate omits it

    Returns:
        SimulationReport ready to render
    """
    estimate = quote.estimate

    input_amount = from_base_units(estimate.from_amount or from_amount_units, token.decimals)
    expected_amount = from_base_units(estimate.to_amount or "0", BTC_DECIMALS)
    min_amount = from_base_units(estimate.to_amount_min or "0", BTC_DECIMALS)

    return SimulationReport(
        token=token,
        input_amount=input_amount,
        expected_amount=expected_amount,
        min_amount=min_amount,
        loss_pct_expected=loss_percent(input_amount, expected_amount),
        loss_pct_min=loss_percent(input_amount, min_amount),
        slippage=estimate.slippage or slippage,
        provider=quote.provider_name,
        from_amount_usd=estimate.from_amount_usd,
        to_amount_usd=estimate.to_amount_usd,
        fees=[normalize_fee(fee) for fee in estimate.fee_costs],
        gas=[normalize_gas(gas) for gas in estimate.gas_costs],
    )


def render_table(rows: Sequence[Sequence[str]]) -> str:
    """Render rows as a grid table; the first row is the header."""
    if not rows:
        return ""
    # Amounts are already formatted strings and must not be reparsed as floats
    return tabulate(rows[1:], headers=rows[0], tablefmt="grid", disable_numparse=True) + "\n"
