"""Verification workflow - wallet connection, proof submission, confirmation."""

from __future__ import annotations

import dataclasses
import logging
from datetime import datetime, timezone
from typing import Callable

from zkverify_dapp.contract.encoding import encode_proof, parse_public_inputs
from zkverify_dapp.errors import (
    DappError,
    EncodingError,
    InvalidTransition,
    ProviderUnavailable,
    SubmissionFailed,
    UserRejected,
)
from zkverify_dapp.interfaces.contract import ContractBinder
from zkverify_dapp.interfaces.notifier import Notifier
from zkverify_dapp.interfaces.wallet import WalletGateway
from zkverify_dapp.models.records import ActionResult, FormData, SubmissionRecord
from zkverify_dapp.models.state import BUSY_STATES, WorkflowState, can_transition
from zkverify_dapp.notify import LogNotifier

log = logging.getLogger(__name__)

StateListener = Callable[[WorkflowState, WorkflowState], None]

INSTALL_WALLET_MSG = "Wallet connection failed. Install a wallet provider."
REJECTED_MSG = "Wallet connection was rejected."
NOT_CONNECTED_MSG = "Connect a wallet before verifying."
BUSY_MSG = "A verification is already in progress."


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


class VerificationWorkflow:
    """Owns the account, the form and the connect/submit/confirm cycle.

    Views read state through the properties and drive it through the
    action methods; subscribe() delivers every state transition. At most
    one connection attempt and one submission are in flight at a time.
    """

    def __init__(
        self,
        gateway: WalletGateway,
        bind_contract: ContractBinder,
        notifier: Notifier | None = None,
    ) -> None:
        self._gateway = gateway
        self._bind_contract = bind_contract
        self._notifier = notifier or LogNotifier()

        self._state = WorkflowState.DISCONNECTED
        self._account: str | None = None
        self._form = FormData()
        self._last_error: DappError | None = None
        self._last_outcome: WorkflowState | None = None
        self._history: list[SubmissionRecord] = []
        self._listeners: list[StateListener] = []

    # ── Observable state ───────────────────────────────────

    @property
    def state(self) -> WorkflowState:
        return self._state

    @property
    def account(self) -> str | None:
        return self._account

    @property
    def form(self) -> FormData:
        """A copy of the form; edit it through set_field()."""
        return dataclasses.replace(self._form)

    @property
    def last_error(self) -> DappError | None:
        return self._last_error

    @property
    def last_outcome(self) -> WorkflowState | None:
        """CONFIRMED or FAILED for the most recent submission."""
        return self._last_outcome

    @property
    def can_submit(self) -> bool:
        return self._state == WorkflowState.CONNECTED and bool(self._account)

    @property
    def history(self) -> list[SubmissionRecord]:
        return list(self._history)

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        """Register a transition listener. Returns a function that removes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _set_state(self, new: WorkflowState) -> None:
        old = self._state
        if not can_transition(old, new):
            raise InvalidTransition(f"{old.value} -> {new.value}")
        self._state = new
        log.debug("State: %s -> %s", old.value, new.value)
        for listener in list(self._listeners):
            try:
                listener(old, new)
            except Exception:
                log.exception("State listener failed on %s -> %s", old.value, new.value)

    def _alert(self, message: str) -> None:
        self._notifier.alert(message)

    # ── Form ───────────────────────────────────────────────

    def set_field(self, name: str, value: str) -> None:
        """Update one form field ("proof" or "input")."""
        if name not in ("proof", "input"):
            raise KeyError(name)
        setattr(self._form, name, value)

    def clear_form(self) -> None:
        self._form = FormData()

    # ── Connection ─────────────────────────────────────────

    async def start(self) -> str | None:
        """Silently pick up an already-authorized account. Never prompts."""
        if self._state != WorkflowState.DISCONNECTED:
            return self._account

        try:
            account = await self._gateway.check_existing_connection()
        except ProviderUnavailable as exc:
            if self._state != WorkflowState.DISCONNECTED:
                return self._account
            log.warning("Wallet check failed: %s", exc)
            self._last_error = exc
            self._alert(INSTALL_WALLET_MSG)
            return None

        # connect() may have run while the check was pending
        if self._state != WorkflowState.DISCONNECTED:
            return self._account

        if account:
            self._account = account
            self._set_state(WorkflowState.CONNECTED)
            log.info("Using already-connected account %s", account)
        return account

    async def connect(self) -> str | None:
        """Ask the wallet to authorize an account."""
        if self._state == WorkflowState.CONNECTING:
            log.warning("Connection request already pending")
            return None
        if self._state != WorkflowState.DISCONNECTED:
            return self._account

        self._set_state(WorkflowState.CONNECTING)
        try:
            account = await self._gateway.request_connection()
        except ProviderUnavailable as exc:
            log.warning("Wallet connection failed: %s", exc)
            self._last_error = exc
            self._set_state(WorkflowState.DISCONNECTED)
            self._alert(INSTALL_WALLET_MSG)
            return None
        except UserRejected as exc:
            log.info("Wallet connection rejected: %s", exc)
            self._last_error = exc
            self._set_state(WorkflowState.DISCONNECTED)
            self._alert(REJECTED_MSG)
            return None

        self._account = account
        self._set_state(WorkflowState.CONNECTED)
        return account

    # ── Submission ─────────────────────────────────────────

    async def submit(self) -> ActionResult:
        """Encode the current form, submit verifyTx() and wait for it to be mined."""
        if self._state in BUSY_STATES:
            log.warning("Submit ignored: %s", self._state.value)
            self._alert(BUSY_MSG)
            return ActionResult(success=False, message="busy")

        if not self.can_submit:
            self._alert(NOT_CONNECTED_MSG)
            return ActionResult(success=False, message="not_connected")

        account = self._account
        form = self.form
        try:
            proof = encode_proof(form.proof)
            inputs = parse_public_inputs(form.input)
        except EncodingError as exc:
            log.warning("Rejected form input: %s", exc)
            self._last_error = exc
            self._alert(f"Invalid input: {exc}")
            return ActionResult(success=False, message=f"invalid_input: {exc}")

        record = SubmissionRecord(
            account=account,
            proof_hex="0x" + proof.hex(),
            inputs=inputs,
            submitted_at=_now_iso(),
        )
        self._history.append(record)
        self._set_state(WorkflowState.SUBMITTING)
        log.info("proof: %s", record.proof_hex)
        log.info("input: %s", inputs)

        # 1. Submit
        try:
            client = self._bind_contract(self._gateway.get_signer(account))
            handle = await client.verify(proof, inputs)
        except DappError as exc:
            return self._finish_failed(record, exc)
        except Exception as exc:
            log.error("Unexpected submission error: %s", exc, exc_info=True)
            return self._finish_failed(record, SubmissionFailed(str(exc)))

        record.tx_hash = handle.hash
        self._set_state(WorkflowState.AWAITING_CONFIRMATION)
        log.info("Loading - %s", handle.hash)

        # 2. Confirm
        try:
            receipt = await handle.confirm()
        except DappError as exc:
            return self._finish_failed(record, exc)
        except Exception as exc:
            log.error("Unexpected confirmation error: %s", exc, exc_info=True)
            return self._finish_failed(record, SubmissionFailed(str(exc)))

        record.receipt = receipt
        record.outcome = "confirmed"
        self._last_error = None
        self._last_outcome = WorkflowState.CONFIRMED
        self._set_state(WorkflowState.CONFIRMED)
        log.info("Success - %s", handle.hash)
        log.info(
            "receipt: block=%d status=%d gas_used=%d",
            receipt.block_number, receipt.status, receipt.gas_used,
        )
        self._set_state(WorkflowState.CONNECTED)
        return ActionResult(success=True, message="confirmed", record=record)

    def _finish_failed(self, record: SubmissionRecord, exc: DappError) -> ActionResult:
        log.error("Verification failed (%s): %s", type(exc).__name__, exc)
        record.outcome = "failed"
        record.error = f"{type(exc).__name__}: {exc}"
        self._last_error = exc
        self._last_outcome = WorkflowState.FAILED
        self._set_state(WorkflowState.FAILED)
        self._alert(f"Verification failed: {exc}")
        self._set_state(WorkflowState.CONNECTED)
        return ActionResult(success=False, message=record.error, record=record)
