"""
Amount conversion for outgoing transfers.

``convert`` is pure: given a source amount and a rate entry it returns the
amount the recipient gets, the fee and the total the sender pays. It never
raises on bad input; callers check ``Conversion.is_ready`` before submitting.
"""
from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation, localcontext
from typing import Optional, Union

from django.conf import settings

from core.exceptions import ValidationError

CENT = Decimal("0.01")
ZERO = Decimal("0.00")
DEFAULT_FLAT_FEE = Decimal("2.99")
MAX_AMOUNT = Decimal("1000000000")

Amount = Union[Decimal, int, float, str, None]


def round2(value: Decimal) -> Decimal:
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


def multiply(a: Decimal, b: Decimal) -> Decimal:
    """Exact product of two finite decimals, whatever their length."""
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, len(a.as_tuple().digits) + len(b.as_tuple().digits))
        return a * b


def parse_amount(raw: Amount) -> Decimal:
    """Parse a positive, finite amount or raise ValidationError."""
    if raw is None or isinstance(raw, bool):
        raise ValidationError("Amount is required.")
    try:
        value = Decimal(str(raw).strip())
    except (InvalidOperation, ValueError):
        raise ValidationError("Amount must be a number.")
    if not value.is_finite():
        raise ValidationError("Amount must be a number.")
    if value <= 0:
        raise ValidationError("Amount must be greater than zero.")
    if value >= MAX_AMOUNT:
        raise ValidationError("Amount is too large.")
    return value


def flat_fee() -> Decimal:
    return Decimal(str(getattr(settings, "REMITTANCE_FLAT_FEE", DEFAULT_FLAT_FEE)))


def charges_percentage_fee() -> bool:
    return bool(getattr(settings, "REMITTANCE_CHARGE_PERCENTAGE_FEE", False))


def profit_for(source_amount: Decimal, fee_percentage: Decimal) -> Decimal:
    """Profit booked on a transfer: the fee percentage of the sent amount."""
    return round2(multiply(Decimal(source_amount), Decimal(fee_percentage).scaleb(-2)))


@dataclass(frozen=True)
class Conversion:
    source_amount: Decimal
    destination_amount: Decimal
    fee: Decimal
    total_charge: Decimal
    exchange_rate: Decimal
    fee_percentage: Decimal
    error: Optional[ValidationError] = None

    @property
    def is_ready(self) -> bool:
        return self.error is None and self.destination_amount > 0

    @classmethod
    def empty(cls, rate, error: ValidationError) -> "Conversion":
        return cls(
            source_amount=ZERO,
            destination_amount=ZERO,
            fee=ZERO,
            total_charge=ZERO,
            exchange_rate=Decimal(rate.exchange_rate),
            fee_percentage=Decimal(rate.fee_percentage),
            error=error,
        )


def convert(source_amount: Amount, rate) -> Conversion:
    """
    Convert ``source_amount`` (GBP) with ``rate`` (anything exposing
    ``exchange_rate`` and ``fee_percentage``).

    destination_amount = round_half_up(source_amount * exchange_rate, 2)
    fee                = flat fee (+ percentage fee when that policy is on)
    total_charge       = source_amount + fee
    """
    try:
        amount = parse_amount(source_amount)
    except ValidationError as exc:
        return Conversion.empty(rate, exc)

    exchange_rate = Decimal(rate.exchange_rate)
    fee_percentage = Decimal(rate.fee_percentage)

    destination_amount = round2(multiply(amount, exchange_rate))
    if destination_amount <= 0:
        return Conversion.empty(rate, ValidationError("Amount is too small to convert."))

    fee = round2(flat_fee())
    if charges_percentage_fee():
        fee += profit_for(amount, fee_percentage)

    return Conversion(
        source_amount=amount,
        destination_amount=destination_amount,
        fee=fee,
        total_charge=amount + fee,
        exchange_rate=exchange_rate,
        fee_percentage=fee_percentage,
    )
