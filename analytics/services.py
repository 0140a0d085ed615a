from __future__ import annotations

from decimal import Decimal
from typing import Any, Optional

from django.contrib.auth import get_user_model
from django.db.models import Count, Sum

from accounts.models import UserProfile
from accounts.policy import Operation, enforce
from accounts.profiles import Caller
from .models import EventLog


class EventRecorder:
    """Facade around the EventLog model."""

    def record(
        self,
        event_type: str,
        *,
        resource_type: str,
        resource_id: str,
        actor: Optional[Caller] = None,
        payload: Optional[dict[str, Any]] = None,
    ) -> EventLog:
        return EventLog.objects.create(
            event_type=event_type,
            resource_type=resource_type,
            resource_id=str(resource_id),
            actor_id=actor.user_id if actor else None,
            payload=payload or {},
        )


def summarize(caller: Optional[Caller]) -> dict:
    """Dashboard figures for administrators."""
    # Imported here: transfers depends on analytics for event recording.
    from currency.conversion import profit_for
    from transfers.models import Transaction

    enforce(caller, Operation.VIEW_STATISTICS)

    transactions = Transaction.objects.all()
    totals = transactions.aggregate(volume=Sum("source_amount"), count=Count("id"))

    total_profit = Decimal("0.00")
    for source_amount, fee_percentage in transactions.values_list("source_amount", "fee_percentage"):
        total_profit += profit_for(source_amount, fee_percentage)

    by_status = {
        row["status"]: row["total"]
        for row in transactions.values("status").annotate(total=Count("id")).order_by()
    }

    return {
        "total_users": get_user_model().objects.count(),
        "pending_approvals": UserProfile.objects.filter(is_approved=False).count(),
        "total_transactions": totals["count"] or 0,
        "total_volume": (totals["volume"] or Decimal("0")).quantize(Decimal("0.01")),
        "total_profit": total_profit,
        "transactions_by_status": by_status,
    }
