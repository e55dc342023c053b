from typing import Any, Dict, Optional

import structlog
from fastapi import APIRouter, Depends, Query
from fastapi.responses import PlainTextResponse

from ..config import settings
from ..core.swap.constants import BITCOIN_CHAIN_KEY, ETHEREUM_CHAIN_ID
from ..core.swap.errors import InternalError, SwapError
from ..core.swap.manager import SwapManager

logger = structlog.stdlib.get_logger("api.swap")

router = APIRouter()


def get_swap_manager() -> SwapManager:
    return SwapManager(
        default_from_token=settings.default_from_token,
        default_slippage=settings.default_slippage,
    )


def swap_query(
    amount: Optional[str] = Query(None, description="Amount of the source token, decimal string (e.g. 0.015)"),
    fromAddress: Optional[str] = Query(None, description="Ethereum wallet that sends the ERC-20"),
    btcAddress: Optional[str] = Query(None, description="Bitcoin address that receives native BTC"),
    fromToken: Optional[str] = Query(None, description="Registry key (wbtc, cbbtc) or ERC-20 address"),
    decimals: Optional[str] = Query(None, description="Token decimals, required when fromToken is an address"),
    symbol: Optional[str] = Query(None, description="Token symbol hint for address tokens"),
    slippage: Optional[str] = Query(None, description="Slippage fraction, e.g. 0.003 for 0.3%"),
) -> Dict[str, Optional[str]]:
    # Every parameter is optional here so missing ones surface as 400 {error}, not 422
    return {
        "amount": amount,
        "from_address": fromAddress,
        "btc_address": btcAddress,
        "from_token": fromToken,
        "decimals": decimals,
        "symbol": symbol,
        "slippage": slippage,
    }


@router.get("/quote")
async def get_quote(
    query: Dict[str, Optional[str]] = Depends(swap_query),
    manager: SwapManager = Depends(get_swap_manager),
) -> Dict[str, Any]:
    """Quote an ERC-20 → BTC swap and return the unsigned transaction to sign."""
    try:
        return await manager.quote(**query)
    except SwapError:
        raise
    except Exception as exc:
        logger.exception("quote_failed")
        raise InternalError(str(exc)) from exc


@router.get("/simulate", response_class=PlainTextResponse)
async def get_simulation(
    query: Dict[str, Optional[str]] = Depends(swap_query),
    manager: SwapManager = Depends(get_swap_manager),
) -> PlainTextResponse:
    """Estimate only: expected BTC, fees, gas and slippage loss as text tables."""
    try:
        report = await manager.simulate(**query)
    except SwapError:
        raise
    except Exception as exc:
        logger.exception("simulate_failed")
        raise InternalError(str(exc)) from exc
    return PlainTextResponse(report.render())


@router.get("/status")
async def get_status(
    txHash: Optional[str] = Query(None, description="Source-chain transaction hash"),
    fromChain: str = Query(ETHEREUM_CHAIN_ID, description="Source chain"),
    toChain: str = Query(BITCOIN_CHAIN_KEY, description="Destination chain"),
    manager: SwapManager = Depends(get_swap_manager),
) -> Any:
    """Relay the LI.FI transfer status for a submitted transaction."""
    try:
        return await manager.status(txHash, fromChain, toChain)
    except SwapError:
        raise
    except Exception as exc:
        logger.exception("status_failed")
        raise InternalError(str(exc)) from exc
