"""
LI.FI Response Models

Partial, all-optional views over the LI.FI quote payload. Only the fields the
simulation report reads are declared; every other field is kept as extra data.
Each missing-field default is declared here once.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class _LifiModel(BaseModel):
    model_config = ConfigDict(
        extra="allow",
        populate_by_name=True,
        coerce_numbers_to_str=True,
    )


class LifiTokenRef(_LifiModel):
    """Token reference embedded in fee and gas cost entries."""

    symbol: Optional[str] = Field(None, description="Token symbol")
    decimals: Optional[int] = Field(None, description="Token decimals")
    address: Optional[str] = Field(None, description="Token address")


class LifiFeeCost(_LifiModel):
    name: Optional[str] = Field(None, description="Fee name")
    amount: Optional[str] = Field(None, description="Fee amount in the fee token's base units")
    amount_usd: Optional[str] = Field(None, alias="amountUSD", description="Fee value in USD")
    token: Optional[LifiTokenRef] = None


class LifiGasCost(_LifiModel):
    type: Optional[str] = Field(None, description="Gas cost type (SEND, APPROVE, ...)")
    amount: Optional[str] = Field(None, description="Gas amount as reported upstream")
    amount_usd: Optional[str] = Field(None, alias="amountUSD", description="Gas value in USD")
    token: Optional[LifiTokenRef] = None


class LifiEstimate(_LifiModel):
    """The ``estimate`` object of a LI.FI quote/step."""

    from_amount: Optional[str] = Field(None, alias="fromAmount")
    to_amount: Optional[str] = Field(None, alias="toAmount")
    to_amount_min: Optional[str] = Field(None, alias="toAmountMin")
    from_amount_usd: Optional[str] = Field(None, alias="fromAmountUSD")
    to_amount_usd: Optional[str] = Field(None, alias="toAmountUSD")
    slippage: Optional[str] = None
    fee_costs: List[LifiFeeCost] = Field(default_factory=list, alias="feeCosts")
    gas_costs: List[LifiGasCost] = Field(default_factory=list, alias="gasCosts")
    approval_address: Optional[str] = Field(None, alias="approvalAddress")
    approval_data: Optional[Any] = Field(None, alias="approvalData")

    @field_validator("fee_costs", "gas_costs", mode="before")
    @classmethod
    def _null_as_empty(cls, value: Any) -> Any:
        return [] if value is None else value


class LifiToolDetails(_LifiModel):
    key: Optional[str] = None
    name: Optional[str] = None


class LifiQuote(_LifiModel):
    """A LI.FI quote (a single executable step)."""

    type: Optional[str] = None
    tool: Optional[str] = None
    tool_details: Optional[LifiToolDetails] = Field(None, alias="toolDetails")
    estimate: LifiEstimate = Field(default_factory=LifiEstimate)
    transaction_request: Optional[Dict[str, Any]] = Field(None, alias="transactionRequest")

    @field_validator("estimate", mode="before")
    @classmethod
    def _null_estimate(cls, value: Any) -> Any:
        return {} if value is None else value

    @property
    def provider_name(self) -> Optional[str]:
        if self.tool_details is not None and self.tool_details.name:
            return self.tool_details.name
        return self.tool
