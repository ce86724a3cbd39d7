"""Error kinds surfaced by the wallet gateway, contract client and workflow."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from zkverify_dapp.models.records import TransactionReceipt


class DappError(Exception):
    """Base class for every error the workflow catches at its boundary."""


class ProviderUnavailable(DappError):
    """No wallet provider is reachable in this environment."""


class UserRejected(DappError):
    """The user declined a wallet prompt."""


class SubmissionFailed(DappError):
    """A transaction was rejected before inclusion (signer or network)."""

    def __init__(self, message: str, code: int | None = None) -> None:
        super().__init__(message)
        self.code = code


class ConfirmationFailed(DappError):
    """Waiting for a submitted transaction could not complete."""

    def __init__(self, tx_hash: str, message: str) -> None:
        super().__init__(message)
        self.tx_hash = tx_hash


class ConfirmationTimeout(ConfirmationFailed):
    """No receipt appeared within the configured confirmation timeout."""


class TransactionReverted(DappError):
    """The transaction was mined but execution failed on-chain."""

    def __init__(
        self,
        tx_hash: str,
        reason: str | None = None,
        receipt: TransactionReceipt | None = None,
    ) -> None:
        msg = f"transaction {tx_hash} reverted"
        if reason:
            msg += f": {reason}"
        super().__init__(msg)
        self.tx_hash = tx_hash
        self.reason = reason
        self.receipt = receipt


class EncodingError(DappError, ValueError):
    """Form text could not be converted to contract arguments."""


class InvalidProofEncoding(EncodingError):
    pass


class InvalidPublicInput(EncodingError):
    pass


class ConfigurationError(DappError):
    """Contract address or interface descriptor is unusable."""


class InvalidTransition(DappError):
    """A workflow state change outside the allowed transition table."""
