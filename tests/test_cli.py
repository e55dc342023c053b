import json

import pytest

import cli
from app.core.swap.errors import UpstreamError
from app.core.swap.manager import SwapManager

FROM_ADDRESS = "0x50ac5CFcc81BB0872e85255D7079F8a529345D16"
BTC_ADDRESS = "bc1qxy2kgdygjrsqtzq2n0yrf2493p83kkfjhx0wlh"

STEP = {
    "tool": "thorswap",
    "estimate": {
        "fromAmount": "100000000",
        "toAmount": "99000000",
        "toAmountMin": "98500000",
        "approvalAddress": "0xspender",
    },
    "transactionRequest": {"to": "0xrouter", "value": "0x0"},
}


class _CliProvider:
    error = None

    async def quote(self, params):
        if self.error:
            raise self.error
        return STEP

    async def status(self, tx_hash, from_chain, to_chain):
        return {"txHash": tx_hash, "fromChain": from_chain, "toChain": to_chain, "status": "PENDING"}


@pytest.fixture
def provider(monkeypatch):
    provider = _CliProvider()
    monkeypatch.setattr(cli, "SwapManager", lambda **kwargs: SwapManager(provider=provider, **kwargs))
    return provider


@pytest.mark.asyncio
async def test_quote_json_output(provider, capsys):
    code = await cli.main(["quote", "1", FROM_ADDRESS, BTC_ADDRESS, "--json"])

    assert code == 0
    data = json.loads(capsys.readouterr().out)
    assert data["approval"]["spender"] == "0xspender"
    assert data["step"] == STEP


@pytest.mark.asyncio
async def test_quote_summary_output(provider, capsys):
    code = await cli.main(["quote", "1", FROM_ADDRESS, BTC_ADDRESS])

    out = capsys.readouterr().out
    assert code == 0
    assert "Approval required for spender 0xspender" in out
    assert "Transaction to: 0xrouter" in out


@pytest.mark.asyncio
async def test_simulate_prints_tables(provider, capsys):
    code = await cli.main(["simulate", "1", FROM_ADDRESS, BTC_ADDRESS, "--slippage", "0.005"])

    out = capsys.readouterr().out
    assert code == 0
    assert "=== Simulation Summary ===" in out
    assert "| Slippage param" in out
    assert "0.005" in out


@pytest.mark.asyncio
async def test_status_defaults(provider, capsys):
    code = await cli.main(["status", "0xabc"])

    data = json.loads(capsys.readouterr().out)
    assert code == 0
    assert data["fromChain"] == "1"
    assert data["toChain"] == "btc"


@pytest.mark.asyncio
async def test_swap_errors_exit_non_zero(provider, capsys):
    provider.error = UpstreamError(404, "no route")
    code = await cli.main(["quote", "1", FROM_ADDRESS, BTC_ADDRESS])

    err = capsys.readouterr().err
    assert code == 1
    assert "LI.FI quote failed" in err
    assert "no route" in err


@pytest.mark.asyncio
async def test_validation_errors_exit_non_zero(provider, capsys):
    code = await cli.main(["quote", "abc", FROM_ADDRESS, BTC_ADDRESS])

    assert code == 1
    assert "amount" in capsys.readouterr().err


@pytest.mark.asyncio
async def test_no_command_prints_help(capsys):
    assert await cli.main([]) == 0
    assert "quote" in capsys.readouterr().out
