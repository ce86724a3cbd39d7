"""Tier 2 fixtures: real HttpWalletProvider against a local JSON-RPC fake wallet."""

from __future__ import annotations

import pytest
from aiohttp import web

from zkverify_dapp.wallet.provider import HttpWalletProvider

from tests.factories import TX_HASH, make_receipt_rpc
from tests.mocks import TEST_ACCOUNT


class FakeWallet:
    """State behind the fake wallet endpoint; tests tweak it directly."""

    def __init__(self) -> None:
        self.accounts = [TEST_ACCOUNT]
        self.authorized = False
        self.reject_connect = False
        self.http_status = 200
        self.raw_body: str | None = None
        self.receipt: dict | None = make_receipt_rpc(TX_HASH)
        self.requests: list[dict] = []

    def handle(self, payload: dict) -> dict:
        method = payload.get("method")
        reply = {"jsonrpc": "2.0", "id": payload.get("id")}

        if method == "eth_accounts":
            reply["result"] = self.accounts if self.authorized else []
        elif method == "eth_requestAccounts":
            if self.reject_connect:
                reply["error"] = {"code": 4001, "message": "User rejected the request."}
            else:
                self.authorized = True
                reply["result"] = self.accounts
        elif method == "eth_chainId":
            reply["result"] = "0x539"
        elif method == "eth_sendTransaction":
            reply["result"] = TX_HASH
        elif method == "eth_getTransactionReceipt":
            reply["result"] = self.receipt
        else:
            reply["error"] = {"code": -32601, "message": f"method {method} not found"}
        return reply


@pytest.fixture
def fake_wallet():
    return FakeWallet()


@pytest.fixture
async def wallet_server(fake_wallet):
    """Local JSON-RPC server answering like a desktop wallet endpoint.

    Returns the base URL to point an HttpWalletProvider at.
    """

    async def handle_rpc(request):
        payload = await request.json()
        fake_wallet.requests.append(payload)
        if fake_wallet.http_status != 200:
            return web.Response(status=fake_wallet.http_status, text="wallet error")
        if fake_wallet.raw_body is not None:
            return web.Response(text=fake_wallet.raw_body, content_type="application/json")
        return web.json_response(fake_wallet.handle(payload))

    app = web.Application()
    app.router.add_post("/", handle_rpc)

    runner = web.AppRunner(app)
    await runner.setup()
    site = web.TCPSite(runner, "127.0.0.1", 0)
    await site.start()
    host, port = runner.addresses[0][:2]
    yield f"http://{host}:{port}/"
    await runner.cleanup()


@pytest.fixture
def http_provider(wallet_server):
    return HttpWalletProvider(wallet_server, request_timeout=5.0)
