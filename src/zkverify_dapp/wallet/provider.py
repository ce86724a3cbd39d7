"""HTTP JSON-RPC wallet provider - talks to a wallet's local RPC endpoint."""

from __future__ import annotations

import itertools
import logging
from typing import Any

import httpx

from zkverify_dapp.errors import ProviderUnavailable

log = logging.getLogger(__name__)

# EIP-1193 provider error codes
USER_REJECTED = 4001
UNAUTHORIZED = 4100
DISCONNECTED = 4900

# Methods that may open a wallet popup and wait on the user.
INTERACTIVE_METHODS = frozenset({
    "eth_requestAccounts",
    "eth_sendTransaction",
    "wallet_requestPermissions",
})


class ProviderRpcError(Exception):
    """The wallet answered a request with a JSON-RPC error object."""

    def __init__(self, code: int | None, message: str, data: Any = None) -> None:
        super().__init__(f"[{code}] {message}" if code is not None else message)
        self.code = code
        self.message = message
        self.data = data

    @property
    def is_user_rejection(self) -> bool:
        return self.code in (USER_REJECTED, UNAUTHORIZED)


class HttpWalletProvider:
    """Sends EIP-1193 requests as JSON-RPC 2.0 POSTs.

    Works with desktop wallets that expose a local RPC endpoint (Frame
    listens on 127.0.0.1:1248) and with development nodes that hold
    unlocked accounts. Interactive methods are sent without a read
    timeout since they resolve only when the user answers the popup.
    """

    def __init__(self, url: str, request_timeout: float = 30.0) -> None:
        self._url = url
        self._request_timeout = request_timeout
        self._ids = itertools.count(1)

    @property
    def url(self) -> str:
        return self._url

    async def request(self, method: str, params: list[Any] | None = None) -> Any:
        payload = {
            "jsonrpc": "2.0",
            "id": next(self._ids),
            "method": method,
            "params": params or [],
        }
        read_timeout = None if method in INTERACTIVE_METHODS else self._request_timeout
        log.debug("-> %s %s", method, payload["params"])

        try:
            async with httpx.AsyncClient(
                timeout=httpx.Timeout(read_timeout, connect=10),
            ) as client:
                resp = await client.post(self._url, json=payload)
                resp.raise_for_status()
                body = resp.json()
        except (httpx.ConnectError, httpx.ConnectTimeout) as exc:
            raise ProviderUnavailable(f"no wallet provider at {self._url}") from exc
        except httpx.HTTPStatusError as exc:
            raise ProviderRpcError(
                None, f"wallet HTTP {exc.response.status_code}",
            ) from exc
        except httpx.HTTPError as exc:
            raise ProviderRpcError(None, f"wallet transport error: {exc}") from exc
        except ValueError as exc:
            raise ProviderRpcError(None, "wallet returned invalid JSON") from exc

        if not isinstance(body, dict):
            raise ProviderRpcError(None, "wallet returned a non-object response")

        error = body.get("error")
        if error is not None:
            if not isinstance(error, dict):
                raise ProviderRpcError(None, str(error))
            log.debug("<- %s error %s", method, error)
            raise ProviderRpcError(
                error.get("code"), error.get("message", ""), error.get("data"),
            )

        result = body.get("result")
        log.debug("<- %s %s", method, result)
        return result
