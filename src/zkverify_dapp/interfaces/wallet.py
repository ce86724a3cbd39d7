"""Wallet protocols - provider transport, gateway, and signer."""

from __future__ import annotations

from typing import Any, Protocol


class WalletProvider(Protocol):
    """EIP-1193 style request transport to a wallet."""

    async def request(self, method: str, params: list[Any] | None = None) -> Any:
        """Send one JSON-RPC request and return its result.

        Raises ProviderUnavailable when the wallet cannot be reached and
        ProviderRpcError when the wallet answers with an error object.
        """
        ...


class Signer(Protocol):
    """Authenticated handle that signs and sends transactions for one account."""

    @property
    def address(self) -> str:
        ...

    @property
    def provider(self) -> WalletProvider:
        ...

    async def send_transaction(self, tx: dict[str, Any]) -> str:
        """Have the wallet sign and broadcast tx. Returns the transaction hash."""
        ...


class WalletGateway(Protocol):
    """Detects the wallet and manages account authorization."""

    async def check_existing_connection(self) -> str | None:
        """Return the first already-authorized account without prompting."""
        ...

    async def request_connection(self) -> str:
        """Prompt the user to authorize an account and return it."""
        ...

    def get_signer(self, account: str) -> Signer:
        ...
