from typing import Any, Dict, List, Optional

import pytest
from fastapi.testclient import TestClient

from app.api.swap import get_swap_manager
from app.core.swap.errors import UpstreamError, UpstreamTimeout
from app.core.swap.manager import SwapManager
from app.main import app

FROM_ADDRESS = "0x50ac5CFcc81BB0872e85255D7079F8a529345D16"
BTC_ADDRESS = "bc1qxy2kgdygjrsqtzq2n0yrf2493p83kkfjhx0wlh"
CUSTOM_ADDRESS = "0xABCDEF0123456789ABCDEF0123456789ABCDEF01"

QUOTE_STEP: Dict[str, Any] = {
    "type": "lifi",
    "id": "quote-1",
    "tool": "thorswap",
    "toolDetails": {"key": "thorswap", "name": "THORSwap"},
    "estimate": {
        "fromAmount": "100000000",
        "toAmount": "99000000",
        "toAmountMin": "98500000",
        "fromAmountUSD": "98500.00",
        "toAmountUSD": "97515.00",
        "slippage": 0.003,
        "approvalAddress": "0x1231DEB6f5749EF6cE6943a275A1D3E7486F4EaE",
        "feeCosts": [
            {"name": "LIFI Fixed Fee", "amount": "250000", "amountUSD": "246.25", "token": {"symbol": "WBTC", "decimals": 8}}
        ],
        "gasCosts": [
            {"type": "SEND", "amount": "215000000000000", "amountUSD": "0.71", "token": {"symbol": "ETH", "decimals": 18}}
        ],
    },
    "transactionRequest": {"to": "0x1231DEB6f5749EF6cE6943a275A1D3E7486F4EaE", "data": "0xdeadbeef", "value": "0x0"},
}


class FakeLifiProvider:
    """Records calls and returns canned payloads instead of calling LI.FI."""

    def __init__(self, quote_result: Any = None, status_result: Any = None, error: Optional[Exception] = None):
        self.quote_result = quote_result if quote_result is not None else QUOTE_STEP
        self.status_result = status_result
        self.error = error
        self.quote_calls: List[Dict[str, Any]] = []
        self.status_calls: List[tuple] = []

    async def quote(self, params):
        self.quote_calls.append(dict(params))
        if self.error:
            raise self.error
        return self.quote_result

    async def status(self, tx_hash, from_chain, to_chain):
        self.status_calls.append((tx_hash, from_chain, to_chain))
        if self.error:
            raise self.error
        return self.status_result


@pytest.fixture
def provider():
    return FakeLifiProvider()


@pytest.fixture
def client(provider):
    app.dependency_overrides[get_swap_manager] = lambda: SwapManager(provider=provider)
    yield TestClient(app)
    app.dependency_overrides.clear()


def _params(**overrides) -> Dict[str, str]:
    params = {"amount": "1", "fromAddress": FROM_ADDRESS, "btcAddress": BTC_ADDRESS}
    params.update(overrides)
    return {k: v for k, v in params.items() if v is not None}


# /quote


def test_quote_returns_step_approval_and_transaction(client, provider):
    resp = client.get("/quote", params=_params())

    assert resp.status_code == 200
    data = resp.json()
    assert set(data) == {"meta", "tokens", "step", "approval", "transactionRequest"}
    assert data["step"] == QUOTE_STEP
    assert data["tokens"] == {"fromToken": "WBTC (ERC-20, 8 decimals)", "toToken": "BTC (native)"}
    assert data["approval"] == {
        "required": True,
        "spender": "0x1231DEB6f5749EF6cE6943a275A1D3E7486F4EaE",
        "approvalData": None,
    }
    assert data["transactionRequest"] == QUOTE_STEP["transactionRequest"]
    assert data["meta"]["note"]


def test_quote_sends_canonical_upstream_query(client, provider):
    client.get("/quote", params=_params(amount="0.015", slippage="0.005"))

    assert provider.quote_calls == [
        {
            "fromChain": "1",
            "toChain": "btc",
            "fromToken": "0x2260FAC5E5542a773Aa44fBCfeDf7C193bc2C599",
            "toToken": "BTC",
            "fromAddress": FROM_ADDRESS,
            "toAddress": BTC_ADDRESS,
            "fromAmount": "1500000",
            "slippage": "0.005",
        }
    ]


def test_quote_uses_default_slippage(client, provider):
    client.get("/quote", params=_params())
    assert provider.quote_calls[0]["slippage"] == "0.003"


def test_quote_without_approval(client, provider):
    provider.quote_result = {"estimate": {"toAmount": "1"}}
    data = client.get("/quote", params=_params()).json()

    assert data["approval"] == {"required": False, "spender": None, "approvalData": None}
    assert data["transactionRequest"] is None


@pytest.mark.parametrize("missing", ["amount", "fromAddress", "btcAddress"])
def test_quote_missing_required_param(client, provider, missing):
    resp = client.get("/quote", params=_params(**{missing: None}))

    assert resp.status_code == 400
    assert missing in resp.json()["error"]
    assert provider.quote_calls == []


def test_quote_custom_address_requires_decimals(client, provider):
    resp = client.get("/quote", params=_params(fromToken=CUSTOM_ADDRESS))

    assert resp.status_code == 400
    assert "decimals" in resp.json()["error"]


def test_quote_custom_address_with_decimals(client, provider):
    resp = client.get("/quote", params=_params(fromToken=CUSTOM_ADDRESS, decimals="18", symbol="XYZ", amount="2.5"))

    assert resp.status_code == 200
    assert resp.json()["tokens"]["fromToken"] == "XYZ (ERC-20, 18 decimals)"
    assert provider.quote_calls[0]["fromToken"] == CUSTOM_ADDRESS.lower()
    assert provider.quote_calls[0]["fromAmount"] == "2500000000000000000"


def test_quote_unresolved_token(client):
    resp = client.get("/quote", params=_params(fromToken="notAnAliasOrAddress"))

    assert resp.status_code == 400
    assert "fromToken" in resp.json()["error"]


@pytest.mark.parametrize("amount", ["abc", "0", "0.000000001", "9" * 5000])
def test_quote_rejects_invalid_or_zero_amount(client, provider, amount):
    resp = client.get("/quote", params=_params(amount=amount))

    assert resp.status_code == 400
    assert "amount" in resp.json()["error"]
    assert provider.quote_calls == []


def test_quote_rejects_out_of_range_slippage(client):
    resp = client.get("/quote", params=_params(slippage="2"))

    assert resp.status_code == 400
    assert "slippage" in resp.json()["error"]


def test_quote_passes_upstream_status_through(client, provider):
    provider.error = UpstreamError(404, '{"message":"No available quotes for the requested transfer"}')
    resp = client.get("/quote", params=_params())

    assert resp.status_code == 404
    assert resp.json() == {
        "error": "LI.FI quote failed",
        "details": '{"message":"No available quotes for the requested transfer"}',
    }


def test_quote_timeout_maps_to_gateway_timeout(client, provider):
    provider.error = UpstreamTimeout("quote", 10)
    resp = client.get("/quote", params=_params())

    assert resp.status_code == 504
    assert resp.json()["error"] == "LI.FI quote timed out"


def test_quote_unexpected_error_is_internal(client, provider):
    provider.error = RuntimeError("connection reset")
    resp = client.get("/quote", params=_params())

    assert resp.status_code == 500
    assert resp.json() == {"error": "Internal error", "details": "connection reset"}


# /simulate


def test_simulate_returns_plain_text_report(client):
    resp = client.get("/simulate", params=_params())

    assert resp.status_code == 200
    assert resp.headers["content-type"].startswith("text/plain")
    body = resp.text
    assert "=== Simulation Summary ===" in body
    assert "1.00000000 WBTC" in body
    assert "0.99000000 BTC" in body
    assert "0.98500000 BTC" in body
    assert "1.00%" in body
    assert "1.50%" in body
    assert "THORSwap" in body
    assert "=== Fees ===" in body
    assert "0.00250000" in body
    assert "=== Gas ===" in body
    assert "215000000000000" in body
    assert "fromToken=WBTC (0x2260FAC5E5542a773Aa44fBCfeDf7C193bc2C599)" in body


def test_simulate_missing_param_is_json_error(client):
    resp = client.get("/simulate", params=_params(btcAddress=None))

    assert resp.status_code == 400
    assert "btcAddress" in resp.json()["error"]


def test_simulate_passes_upstream_status_through(client, provider):
    provider.error = UpstreamError(422, "bad request")
    resp = client.get("/simulate", params=_params())

    assert resp.status_code == 422
    assert resp.json() == {"error": "LI.FI quote failed", "details": "bad request"}


# /status


def test_status_requires_tx_hash(client, provider):
    resp = client.get("/status")

    assert resp.status_code == 400
    assert "txHash" in resp.json()["error"]
    assert provider.status_calls == []


def test_status_forwards_upstream_body_unmodified(client, provider):
    upstream = {
        "transactionId": "0x11",
        "sending": {"txHash": "0xabc", "chainId": 1},
        "receiving": {"chainId": 20000000000001},
        "status": "PENDING",
        "substatus": "WAIT_DESTINATION_TRANSACTION",
    }
    provider.status_result = upstream
    resp = client.get("/status", params={"txHash": "0xabc"})

    assert resp.status_code == 200
    assert resp.json() == upstream
    assert provider.status_calls == [("0xabc", "1", "btc")]


def test_status_custom_chains(client, provider):
    provider.status_result = {"status": "DONE"}
    client.get("/status", params={"txHash": "0xabc", "fromChain": "137", "toChain": "btc"})

    assert provider.status_calls == [("0xabc", "137", "btc")]


def test_status_unexpected_error_is_internal(client, provider):
    provider.error = ValueError("Expecting value: line 1 column 1")
    resp = client.get("/status", params={"txHash": "0xabc"})

    assert resp.status_code == 500
    assert resp.json()["error"] == "Internal error"


# ambient endpoints


def test_health_lists_registry(client):
    data = client.get("/healthz").json()

    assert data["status"] == "ok"
    assert set(data["supportedTokens"]) == {"wbtc", "cbbtc"}
    assert data["supportedTokens"]["wbtc"]["decimals"] == 8
    assert set(data) == {"status", "source", "upstream", "upstreamApiKey", "defaultFromToken", "supportedTokens"}


def test_request_id_header_is_echoed(client):
    resp = client.get("/healthz", headers={"x-request-id": "abc123"})
    assert resp.headers["x-request-id"] == "abc123"


def test_quote_survives_odd_fields_it_does_not_read(client, provider):
    provider.quote_result = {
        "estimate": {"approvalAddress": "0xspender", "feeCosts": ["oops"]},
        "transactionRequest": {"to": "0xrouter"},
    }
    resp = client.get("/quote", params=_params())

    assert resp.status_code == 200
    assert resp.json()["approval"]["spender"] == "0xspender"


def test_simulate_tiny_amount_of_36_decimal_token(client, provider):
    provider.quote_result = {"estimate": {"fromAmount": "1", "toAmount": "100000000", "toAmountMin": "0"}}
    resp = client.get(
        "/simulate",
        params=_params(fromToken=CUSTOM_ADDRESS, decimals="36", amount="0." + "0" * 35 + "1"),
    )

    assert resp.status_code == 200
    assert "100.00%" in resp.text
