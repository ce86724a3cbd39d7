"""Form, receipt and submission record types."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass
class FormData:
    """The two free-text fields the user edits before submitting."""

    proof: str = ""
    input: str = ""


def _hex_int(value: Any) -> int:
    """JSON-RPC quantities arrive as 0x-prefixed hex strings."""
    if value is None:
        return 0
    if isinstance(value, int):
        return value
    return int(str(value), 16)


@dataclass(frozen=True)
class TransactionReceipt:
    """Final outcome of a mined transaction."""

    tx_hash: str
    block_number: int
    status: int  # 1 success, 0 reverted
    gas_used: int
    from_address: str = ""
    to_address: str = ""

    @property
    def succeeded(self) -> bool:
        return self.status == 1

    @classmethod
    def from_rpc(cls, raw: dict[str, Any]) -> TransactionReceipt:
        """Build from an eth_getTransactionReceipt result object."""
        status = raw.get("status")
        return cls(
            tx_hash=raw.get("transactionHash", ""),
            block_number=_hex_int(raw.get("blockNumber")),
            # pre-Byzantium receipts carry no status, or a null one
            status=1 if status is None else _hex_int(status),
            gas_used=_hex_int(raw.get("gasUsed")),
            from_address=raw.get("from") or "",
            to_address=raw.get("to") or "",
        )


@dataclass
class SubmissionRecord:
    """One verification attempt, kept in memory for the session."""

    account: str
    proof_hex: str
    inputs: list[int]
    submitted_at: str  # ISO 8601
    tx_hash: str | None = None
    outcome: str = "pending"  # "confirmed" | "failed"
    error: str | None = None
    receipt: TransactionReceipt | None = None


@dataclass
class ActionResult:
    """Result of a user-initiated action."""

    success: bool
    message: str
    record: SubmissionRecord | None = field(default=None)
