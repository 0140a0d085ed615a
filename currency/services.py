from __future__ import annotations

import logging
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import List, Optional

from django.db import transaction
from django.db.models import F
from django.utils import timezone

from accounts.policy import Operation, enforce
from accounts.profiles import Caller
from analytics.services import EventRecorder
from core.constants import Country
from core.exceptions import InvalidRateError, NotFoundError
from .conversion import Amount, Conversion, convert
from .models import RateEntry

logger = logging.getLogger(__name__)

MAX_FEE_PERCENTAGE = Decimal("100")
MAX_EXCHANGE_RATE = Decimal("1000000000000")
RATE_PRECISION = Decimal("0.000001")
FEE_PRECISION = Decimal("0.01")


def _decimal(value, field: str) -> Decimal:
    if value is None or isinstance(value, bool):
        raise InvalidRateError(f"{field} is required.")
    try:
        parsed = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        raise InvalidRateError(f"{field} must be a number.")
    if not parsed.is_finite():
        raise InvalidRateError(f"{field} must be a number.")
    return parsed


def validate_rate(exchange_rate, fee_percentage) -> tuple[Decimal, Decimal]:
    rate = _decimal(exchange_rate, "exchange_rate")
    fee = _decimal(fee_percentage, "fee_percentage")
    if rate <= 0:
        raise InvalidRateError("exchange_rate must be greater than zero.")
    if rate >= MAX_EXCHANGE_RATE:
        raise InvalidRateError("exchange_rate is too large.")
    if fee < 0 or fee >= MAX_FEE_PERCENTAGE:
        raise InvalidRateError("fee_percentage must be between 0 and 100 (exclusive).")

    # Stored precision; values that round out of range are rejected as well.
    rate = rate.quantize(RATE_PRECISION, rounding=ROUND_HALF_UP)
    fee = fee.quantize(FEE_PRECISION, rounding=ROUND_HALF_UP)
    if rate <= 0:
        raise InvalidRateError("exchange_rate must be greater than zero.")
    if fee >= MAX_FEE_PERCENTAGE:
        raise InvalidRateError("fee_percentage must be between 0 and 100 (exclusive).")
    return rate, fee


class RateTable:
    """Reads and replaces the per-country rate entries."""

    def __init__(self, *, event_recorder: Optional[EventRecorder] = None):
        self.events = event_recorder or EventRecorder()

    def get_active_rate(self, country: str) -> RateEntry:
        try:
            return RateEntry.objects.get(country=country)
        except RateEntry.DoesNotExist:
            raise NotFoundError(f"No active rate for country {country!r}.")

    def list_rates(self) -> List[RateEntry]:
        return list(RateEntry.objects.all())

    def quote(self, country: str, source_amount: Amount) -> Conversion:
        return convert(source_amount, self.get_active_rate(country))

    def update_rate(self, country: str, exchange_rate, fee_percentage, *, caller: Optional[Caller]) -> RateEntry:
        """
        Replace both numeric fields of a country's entry at once.

        Only the row of ``country`` is locked, so updates to other corridors
        proceed in parallel. Concurrent updates of the same country resolve
        last-write-wins on the whole record.
        """
        enforce(caller, Operation.UPDATE_RATE)
        if country not in Country.values:
            raise NotFoundError(f"No active rate for country {country!r}.")
        rate, fee = validate_rate(exchange_rate, fee_percentage)

        with transaction.atomic():
            updated = RateEntry.objects.filter(country=country).update(
                exchange_rate=rate,
                fee_percentage=fee,
                version=F("version") + 1,
                updated_by_id=caller.user_id,
                updated_at=timezone.now(),
            )
            if not updated:
                raise NotFoundError(f"No active rate for country {country!r}.")
            entry = RateEntry.objects.select_for_update().get(country=country)

            self.events.record(
                "rate.updated",
                resource_type="rate",
                resource_id=entry.country,
                actor=caller,
                payload={"version": entry.version},
            )

        logger.info(
            "Rate updated for %s: exchange_rate=%s fee_percentage=%s version=%s by user=%s",
            country,
            entry.exchange_rate,
            entry.fee_percentage,
            entry.version,
            caller.user_id,
        )
        return entry
