from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional

from django.conf import settings
from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import transaction

from accounts.policy import Operation, enforce
from accounts.profiles import Caller
from analytics.services import EventRecorder
from core.exceptions import IllegalTransitionError, NotFoundError, ValidationError
from transfers.models import Transaction, TransactionStage, TransactionStatus

logger = logging.getLogger(__name__)

INITIAL_STATUS = TransactionStatus.PENDING
INITIAL_STAGE = TransactionStage.MONEY_COLLECTION

STATUS_TRANSITIONS = {
    TransactionStatus.PENDING: {TransactionStatus.APPROVED, TransactionStatus.REJECTED},
    TransactionStatus.APPROVED: {TransactionStatus.COMPLETED},
    TransactionStatus.REJECTED: set(),
    TransactionStatus.COMPLETED: set(),
}

STAGE_ORDER = list(TransactionStage.values)


def enforces_status_graph() -> bool:
    return bool(getattr(settings, "TRANSFERS_ENFORCE_STATUS_GRAPH", True))


def can_transition_status(current: str, new: str) -> bool:
    if current == new:
        return True
    return new in STATUS_TRANSITIONS.get(current, set())


def is_adjacent_stage(current: str, new: str) -> bool:
    """True for staying put or moving exactly one step forward."""
    return STAGE_ORDER.index(new) - STAGE_ORDER.index(current) in (0, 1)


@dataclass
class LifecycleResult:
    transaction: Transaction
    changed_fields: list[str] = field(default_factory=list)

    @property
    def changed(self) -> bool:
        return bool(self.changed_fields)


class TransactionLifecycleService:
    """
    Drives the two independent state axes of a transaction.

    Status follows pending -> approved -> completed, or pending -> rejected.
    Stage may be set to any value; moves other than one step forward are
    accepted but written to the audit log.
    """

    def __init__(self, *, event_recorder: Optional[EventRecorder] = None):
        self.events = event_recorder or EventRecorder()

    def set_state(
        self,
        transaction_id,
        *,
        caller: Optional[Caller],
        status: Optional[str] = None,
        stage: Optional[str] = None,
    ) -> LifecycleResult:
        enforce(caller, Operation.SET_TRANSACTION_STATE)

        if status is None and stage is None:
            raise ValidationError("Provide a status, a stage, or both.")
        if status is not None and status not in TransactionStatus.values:
            raise ValidationError(f"Unknown status {status!r}.")
        if stage is not None and stage not in TransactionStage.values:
            raise ValidationError(f"Unknown stage {stage!r}.")

        with transaction.atomic():
            try:
                tx = Transaction.objects.select_for_update().get(pk=transaction_id)
            except (Transaction.DoesNotExist, DjangoValidationError):
                raise NotFoundError(f"Transaction {transaction_id} not found.")

            changed_fields = []
            events = []

            if status is not None and status != tx.status:
                if enforces_status_graph() and not can_transition_status(tx.status, status):
                    raise IllegalTransitionError(f"Cannot move status from {tx.status} to {status}.")
                events.append(("transaction.status_changed", {"from": tx.status, "to": status}))
                tx.status = status
                changed_fields.append("status")

            if stage is not None and stage != tx.stage:
                if not is_adjacent_stage(tx.stage, stage):
                    logger.warning(
                        "Non-adjacent stage jump on transaction=%s from %s to %s by user=%s",
                        tx.pk,
                        tx.stage,
                        stage,
                        caller.user_id,
                    )
                    events.append(("transaction.stage_jump", {"from": tx.stage, "to": stage}))
                events.append(("transaction.stage_changed", {"from": tx.stage, "to": stage}))
                tx.stage = stage
                changed_fields.append("stage")

            if not changed_fields:
                return LifecycleResult(transaction=tx)

            # Only the touched columns are written so a concurrent edit of the
            # other axis is not overwritten.
            tx.save(update_fields=changed_fields + ["updated_at"])

            for event_type, payload in events:
                self.events.record(
                    event_type,
                    resource_type="transaction",
                    resource_id=tx.pk,
                    actor=caller,
                    payload=payload,
                )

        logger.info(
            "Transaction %s updated by user=%s: status=%s stage=%s",
            tx.pk,
            caller.user_id,
            tx.status,
            tx.stage,
        )
        return LifecycleResult(transaction=tx, changed_fields=changed_fields)
