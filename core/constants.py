# Destination corridors served from the UK.
# Each country maps to the currency the recipient is paid in and the
# payout channels available there.

from django.conf import settings
from django.db import models

SOURCE_CURRENCY = "GBP"


class Country(models.TextChoices):
    SOMALIA = "Somalia", "Somalia"
    KENYA = "Kenya", "Kenya"


class PaymentMethod(models.TextChoices):
    EVC_PLUS = "EVC-PLUS", "EVC-PLUS"
    MPESA = "M-PESA", "M-PESA"
    MONEY_COLLECTION = "Money collection", "Money Collection"


DESTINATION_CURRENCIES = {
    Country.SOMALIA: "USD",
    Country.KENYA: "KES",
}

PAYMENT_METHODS = {
    Country.SOMALIA: [PaymentMethod.EVC_PLUS, PaymentMethod.MONEY_COLLECTION],
    Country.KENYA: [PaymentMethod.MPESA, PaymentMethod.MONEY_COLLECTION],
}

# Rates applied when a corridor is first seeded; admins adjust them afterwards.
DEFAULT_RATES = [
    (Country.SOMALIA, "125.19", "0"),
    (Country.KENYA, "157.23", "0"),
]


def destination_currency(country: str) -> str:
    return DESTINATION_CURRENCIES.get(country, "")


def default_payment_method(country: str) -> str:
    methods = PAYMENT_METHODS.get(country) or []
    return methods[0] if methods else ""


def is_payment_method_allowed(country: str, method: str) -> bool:
    return method in PAYMENT_METHODS.get(country, [])


def source_currency() -> str:
    return getattr(settings, "REMITTANCE_SOURCE_CURRENCY", SOURCE_CURRENCY)
