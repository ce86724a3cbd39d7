"""Verification workflow states and their allowed transitions."""

from __future__ import annotations

from enum import Enum


class WorkflowState(str, Enum):
    """Where the workflow is in the connect / submit / confirm cycle."""

    DISCONNECTED = "disconnected"
    CONNECTING = "connecting"
    CONNECTED = "connected"
    SUBMITTING = "submitting"
    AWAITING_CONFIRMATION = "awaiting_confirmation"
    CONFIRMED = "confirmed"
    FAILED = "failed"


# States in which a submission is in flight and submit must be disabled.
BUSY_STATES = frozenset({WorkflowState.SUBMITTING, WorkflowState.AWAITING_CONFIRMATION})

TERMINAL_STATES = frozenset({WorkflowState.CONFIRMED, WorkflowState.FAILED})

_TRANSITIONS: dict[WorkflowState, frozenset[WorkflowState]] = {
    WorkflowState.DISCONNECTED: frozenset({WorkflowState.CONNECTING, WorkflowState.CONNECTED}),
    WorkflowState.CONNECTING: frozenset({WorkflowState.CONNECTED, WorkflowState.DISCONNECTED}),
    WorkflowState.CONNECTED: frozenset({WorkflowState.SUBMITTING}),
    WorkflowState.SUBMITTING: frozenset({WorkflowState.AWAITING_CONFIRMATION, WorkflowState.FAILED}),
    WorkflowState.AWAITING_CONFIRMATION: frozenset({WorkflowState.CONFIRMED, WorkflowState.FAILED}),
    WorkflowState.CONFIRMED: frozenset({WorkflowState.CONNECTED}),
    WorkflowState.FAILED: frozenset({WorkflowState.CONNECTED}),
}


def can_transition(old: WorkflowState, new: WorkflowState) -> bool:
    return new in _TRANSITIONS[old]
