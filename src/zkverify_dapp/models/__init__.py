"""Data models for zkverify_dapp."""

from zkverify_dapp.models.config import DappConfig
from zkverify_dapp.models.records import (
    ActionResult,
    FormData,
    SubmissionRecord,
    TransactionReceipt,
)
from zkverify_dapp.models.state import BUSY_STATES, WorkflowState, can_transition

__all__ = [
    "DappConfig",
    "ActionResult", "FormData", "SubmissionRecord", "TransactionReceipt",
    "BUSY_STATES", "WorkflowState", "can_transition",
]
