"""Contract client protocols - verifier call and transaction handle."""

from __future__ import annotations

from typing import Callable, Protocol, Sequence

from zkverify_dapp.interfaces.wallet import Signer
from zkverify_dapp.models.records import TransactionReceipt


class TransactionHandle(Protocol):
    """A submitted, not yet finalized, transaction."""

    @property
    def hash(self) -> str:
        ...

    async def confirm(self) -> TransactionReceipt:
        """Wait until mined. Raises TransactionReverted on failed execution."""
        ...


class ContractClient(Protocol):
    """Callable handle to one verifier contract, bound to a signer."""

    async def verify(self, proof: bytes, public_inputs: Sequence[int]) -> TransactionHandle:
        """Submit a verification transaction. Returns before it is mined."""
        ...


# Builds a ContractClient for the signer of the current account.
ContractBinder = Callable[[Signer], ContractClient]
