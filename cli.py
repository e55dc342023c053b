#!/usr/bin/env python3
"""CLI for quoting, simulating and tracking ERC-20 → BTC swaps without running the server"""

import argparse
import asyncio
import json
import sys
from typing import Any, Dict, List, Optional

from app.config import settings
from app.core.swap.errors import SwapError
from app.core.swap.manager import SwapManager
from app.logging_config import setup_logging


def _swap_query(args: argparse.Namespace) -> Dict[str, Optional[str]]:
    return {
        "amount": args.amount,
        "from_address": args.from_address,
        "btc_address": args.btc_address,
        "from_token": args.from_token,
        "decimals": args.decimals,
        "symbol": args.symbol,
        "slippage": args.slippage,
    }


def _print_json(data: Any) -> None:
    print(json.dumps(data, indent=2, ensure_ascii=False))


async def cli_quote(manager: SwapManager, args: argparse.Namespace) -> None:
    result = await manager.quote(**_swap_query(args))
    if args.json:
        _print_json(result)
        return

    approval = result["approval"]
    tx = result["transactionRequest"] or {}
    print(f"🔁 {result['tokens']['fromToken']} → {result['tokens']['toToken']}")
    print("=" * 50)
    if approval["required"]:
        print(f"Approval required for spender {approval['spender']}")
    else:
        print("No approval required")
    print(f"Transaction to: {tx.get('to', '-')}")
    print(f"Value: {tx.get('value', '-')}")
    print(f"\n{result['meta']['note']}")


async def cli_simulate(manager: SwapManager, args: argparse.Namespace) -> None:
    report = await manager.simulate(**_swap_query(args))
    print(report.render(), end="")


async def cli_status(manager: SwapManager, args: argparse.Namespace) -> None:
    _print_json(await manager.status(args.tx_hash, args.from_chain, args.to_chain))


def _add_swap_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("amount", help="Amount of the source token, e.g. 0.015")
    parser.add_argument("from_address", help="Ethereum wallet sending the ERC-20")
    parser.add_argument("btc_address", help="Bitcoin address receiving BTC")
    parser.add_argument("--from-token", help=f"Registry key or ERC-20 address (default: {settings.default_from_token})")
    parser.add_argument("--decimals", help="Token decimals (required for address tokens)")
    parser.add_argument("--symbol", help="Token symbol hint for address tokens")
    parser.add_argument("--slippage", help=f"Slippage fraction (default: {settings.default_slippage})")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="ERC-20 → BTC swap CLI (LI.FI)")
    subparsers = parser.add_subparsers(dest="command")

    quote_parser = subparsers.add_parser("quote", help="Quote a swap and show the transaction to sign")
    _add_swap_arguments(quote_parser)
    quote_parser.add_argument("--json", action="store_true", help="Print the full JSON response")

    simulate_parser = subparsers.add_parser("simulate", help="Print the simulation tables")
    _add_swap_arguments(simulate_parser)

    status_parser = subparsers.add_parser("status", help="Check the status of a submitted swap")
    status_parser.add_argument("tx_hash", help="Source-chain transaction hash")
    status_parser.add_argument("--from-chain", default="1", help="Source chain (default: 1)")
    status_parser.add_argument("--to-chain", default="btc", help="Destination chain (default: btc)")

    return parser


async def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 0

    setup_logging("WARNING", stream=sys.stderr)
    manager = SwapManager(
        default_from_token=settings.default_from_token,
        default_slippage=settings.default_slippage,
    )

    handlers = {
        "quote": cli_quote,
        "simulate": cli_simulate,
        "status": cli_status,
    }

    try:
        await handlers[args.command](manager, args)
    except SwapError as exc:
        print(f"❌ {exc.message}", file=sys.stderr)
        if exc.details:
            print(f"   {exc.details}", file=sys.stderr)
        return 1
    return 0


def run() -> None:
    sys.exit(asyncio.run(main()))


if __name__ == "__main__":
    run()
