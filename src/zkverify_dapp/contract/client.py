"""Verifier contract client - encodes verifyTx() and tracks it until mined."""

from __future__ import annotations

import asyncio
import logging
import time
from typing import Any, Sequence

from eth_abi import decode as abi_decode
from web3 import Web3
from web3.exceptions import Web3Exception

from zkverify_dapp.contract.abi import has_function
from zkverify_dapp.errors import (
    ConfigurationError,
    ConfirmationFailed,
    ConfirmationTimeout,
    ProviderUnavailable,
    SubmissionFailed,
    TransactionReverted,
)
from zkverify_dapp.interfaces.wallet import Signer
from zkverify_dapp.models.records import TransactionReceipt
from zkverify_dapp.wallet.provider import ProviderRpcError

log = logging.getLogger(__name__)

# Solidity revert payload selectors
_ERROR_SELECTOR = bytes.fromhex("08c379a0")  # Error(string)
_PANIC_SELECTOR = bytes.fromhex("4e487b71")  # Panic(uint256)


def _revert_payload(data: Any) -> bytes | None:
    """Pull raw revert bytes out of a JSON-RPC error data field.

    Wallets and nodes disagree on the shape: a bare hex string, or an
    object with a "data" key (sometimes nested once more).
    """
    while isinstance(data, dict):
        data = data.get("data")
    if not isinstance(data, str) or not data.startswith("0x"):
        return None
    try:
        return bytes.fromhex(data[2:])
    except ValueError:
        return None


def decode_revert_reason(data: Any) -> str | None:
    """Decode Error(string) or Panic(uint256) revert data, if present."""
    payload = _revert_payload(data)
    if not payload or len(payload) < 4:
        return None
    selector, body = payload[:4], payload[4:]
    try:
        if selector == _ERROR_SELECTOR:
            (reason,) = abi_decode(["string"], body)
            return reason
        if selector == _PANIC_SELECTOR:
            (code,) = abi_decode(["uint256"], body)
            return f"panic 0x{code:02x}"
    except Exception as exc:
        log.debug("Could not decode revert data %s: %s", data, exc)
    return None


class PendingTransaction:
    """TransactionHandle for a submitted verifyTx() call."""

    def __init__(
        self,
        tx_hash: str,
        signer: Signer,
        call: dict[str, Any],
        poll_interval: float = 2.0,
        timeout: float | None = None,
    ) -> None:
        self._hash = tx_hash
        self._signer = signer
        self._call = call
        self._poll_interval = poll_interval
        self._timeout = timeout

    @property
    def hash(self) -> str:
        return self._hash

    async def confirm(self) -> TransactionReceipt:
        """Poll for the receipt until the transaction is mined.

        Returns the receipt on success. Raises TransactionReverted when the
        receipt reports failed execution, ConfirmationTimeout when no receipt
        shows up in time, and ConfirmationFailed if the wallet stops answering.
        """
        provider = self._signer.provider
        start = time.monotonic()

        while True:
            try:
                raw = await provider.request("eth_getTransactionReceipt", [self._hash])
            except (ProviderRpcError, ProviderUnavailable) as exc:
                raise ConfirmationFailed(
                    self._hash, f"lost track of transaction {self._hash}: {exc}",
                ) from exc

            if raw:
                break

            elapsed = time.monotonic() - start
            if self._timeout is not None and elapsed >= self._timeout:
                raise ConfirmationTimeout(
                    self._hash,
                    f"transaction {self._hash} not mined after {self._timeout:g}s",
                )
            await asyncio.sleep(self._poll_interval)

        receipt = TransactionReceipt.from_rpc(raw)
        if not receipt.tx_hash:
            receipt = TransactionReceipt(
                tx_hash=self._hash,
                block_number=receipt.block_number,
                status=receipt.status,
                gas_used=receipt.gas_used,
                from_address=receipt.from_address,
                to_address=receipt.to_address,
            )

        if not receipt.succeeded:
            reason = await self._revert_reason(receipt.block_number)
            log.warning(
                "Transaction %s reverted in block %d: %s",
                self._hash, receipt.block_number, reason or "no reason given",
            )
            raise TransactionReverted(self._hash, reason, receipt)

        log.debug(
            "Transaction %s mined in block %d (gas %d)",
            self._hash, receipt.block_number, receipt.gas_used,
        )
        return receipt

    async def _revert_reason(self, block_number: int) -> str | None:
        """Replay the call at the mined block to recover the revert message."""
        try:
            await self._signer.provider.request(
                "eth_call",
                [{"from": self._signer.address, **self._call}, hex(block_number)],
            )
        except ProviderRpcError as exc:
            return decode_revert_reason(exc.data) or exc.message or None
        except ProviderUnavailable:
            return None
        # The replay succeeded, so the failure depended on state we can't see.
        return None


class VerifierContractClient:
    """ContractClient for a verifier deployed at a fixed address.

    The call data is built offline with web3's contract object; signing
    and broadcast go through the signer's wallet, like an ethers.js
    Contract attached to a browser-wallet signer.
    """

    def __init__(
        self,
        address: str,
        abi: list[dict[str, Any]],
        signer: Signer,
        *,
        function_name: str = "verifyTx",
        poll_interval: float = 2.0,
        confirm_timeout: float | None = None,
    ) -> None:
        if not Web3.is_address(address):
            raise ConfigurationError(f"invalid contract address: {address!r}")
        if not has_function(abi, function_name):
            raise ConfigurationError(f"contract interface has no {function_name}() function")

        self._address = Web3.to_checksum_address(address)
        self._signer = signer
        self._function_name = function_name
        self._poll_interval = poll_interval
        self._confirm_timeout = confirm_timeout
        self._contract = Web3().eth.contract(address=self._address, abi=abi)

    @classmethod
    def bind(
        cls,
        address: str,
        abi: list[dict[str, Any]],
        signer: Signer,
        **options: Any,
    ) -> VerifierContractClient:
        """Bind address + interface descriptor to a signer. No network call."""
        return cls(address, abi, signer, **options)

    @property
    def address(self) -> str:
        return self._address

    def encode_call(self, proof: bytes, public_inputs: Sequence[int]) -> str:
        """ABI-encode the verifier call data as a 0x hex string."""
        try:
            return self._contract.encode_abi(
                self._function_name, args=[proof, list(public_inputs)],
            )
        except (Web3Exception, ValueError, TypeError) as exc:
            raise SubmissionFailed(f"malformed arguments for {self._function_name}(): {exc}") from exc

    async def verify(self, proof: bytes, public_inputs: Sequence[int]) -> PendingTransaction:
        """Submit verifyTx(proof, inputs). Returns as soon as the wallet broadcasts."""
        call = {"to": self._address, "data": self.encode_call(proof, public_inputs)}

        log.info(
            "Submitting %s to %s (%d proof bytes, %d inputs)",
            self._function_name, self._address, len(proof), len(public_inputs),
        )
        try:
            tx_hash = await self._signer.send_transaction(call)
        except ProviderRpcError as exc:
            if exc.is_user_rejection:
                msg = "transaction signature was rejected in the wallet"
            else:
                msg = f"transaction rejected: {exc.message or exc}"
            log.warning("%s submission failed: %s", self._function_name, exc)
            raise SubmissionFailed(msg, code=exc.code) from exc
        except ProviderUnavailable as exc:
            raise SubmissionFailed(f"wallet disconnected: {exc}") from exc

        if not isinstance(tx_hash, str) or not tx_hash:
            raise SubmissionFailed(f"wallet returned no transaction hash (got {tx_hash!r})")

        return PendingTransaction(
            tx_hash,
            self._signer,
            call,
            poll_interval=self._poll_interval,
            timeout=self._confirm_timeout,
        )
