"""Wallet gateway - detects the provider and manages account authorization."""

from __future__ import annotations

import logging
from typing import Any

from web3 import Web3

from zkverify_dapp.errors import ProviderUnavailable, UserRejected
from zkverify_dapp.interfaces.wallet import WalletProvider
from zkverify_dapp.wallet.provider import ProviderRpcError

log = logging.getLogger(__name__)


def normalize_account(value: Any) -> str | None:
    """Return the EIP-55 checksum form of an address, or None if invalid."""
    if not isinstance(value, str) or not Web3.is_address(value):
        return None
    return Web3.to_checksum_address(value)


def _first_account(accounts: Any) -> str | None:
    if not isinstance(accounts, list) or not accounts:
        return None
    account = normalize_account(accounts[0])
    if account is None:
        log.warning("Wallet returned an invalid address: %r", accounts[0])
    return account


class WalletSigner:
    """Signs through the wallet on behalf of one authorized account."""

    def __init__(self, provider: WalletProvider, address: str) -> None:
        self._provider = provider
        self._address = address

    @property
    def address(self) -> str:
        return self._address

    @property
    def provider(self) -> WalletProvider:
        return self._provider

    async def send_transaction(self, tx: dict[str, Any]) -> str:
        """Ask the wallet to sign and broadcast tx; may open a popup."""
        return await self._provider.request(
            "eth_sendTransaction", [{"from": self._address, **tx}],
        )


class ProviderWalletGateway:
    """WalletGateway over an injected provider handle.

    A provider of None models an environment with no wallet installed;
    every call then raises ProviderUnavailable.
    """

    def __init__(self, provider: WalletProvider | None) -> None:
        self._provider = provider

    @property
    def available(self) -> bool:
        return self._provider is not None

    def _require_provider(self) -> WalletProvider:
        if self._provider is None:
            raise ProviderUnavailable("no wallet provider detected, install a wallet")
        return self._provider

    async def check_existing_connection(self) -> str | None:
        """Query already-authorized accounts (eth_accounts), no popup."""
        provider = self._require_provider()
        try:
            accounts = await provider.request("eth_accounts")
        except ProviderRpcError as exc:
            raise ProviderUnavailable(f"wallet provider error: {exc}") from exc

        log.info("list of accounts: %s", accounts)
        account = _first_account(accounts)
        if account is None:
            log.info("no accounts found")
        return account

    async def request_connection(self) -> str:
        """Prompt for authorization (eth_requestAccounts)."""
        provider = self._require_provider()
        try:
            accounts = await provider.request("eth_requestAccounts")
        except ProviderRpcError as exc:
            if exc.is_user_rejection:
                raise UserRejected("wallet connection request was rejected") from exc
            raise ProviderUnavailable(f"wallet provider error: {exc}") from exc

        account = _first_account(accounts)
        if account is None:
            raise UserRejected("wallet authorized no accounts")
        log.info("Connected account %s", account)
        return account

    async def chain_id(self) -> int:
        provider = self._require_provider()
        try:
            raw = await provider.request("eth_chainId")
        except ProviderRpcError as exc:
            raise ProviderUnavailable(f"wallet provider error: {exc}") from exc
        return int(raw, 16) if isinstance(raw, str) else int(raw)

    def get_signer(self, account: str) -> WalletSigner:
        return WalletSigner(self._require_provider(), account)
