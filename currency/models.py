# currency/models.py

from django.conf import settings
from django.db import models

from core.constants import Country, destination_currency


class RateEntry(models.Model):
    """Active exchange rate and fee percentage for one destination country."""

    country = models.CharField(max_length=32, choices=Country.choices, unique=True)
    exchange_rate = models.DecimalField(max_digits=18, decimal_places=6)  # destination units per 1 GBP
    fee_percentage = models.DecimalField(max_digits=5, decimal_places=2, default=0)
    version = models.PositiveIntegerField(default=1)
    updated_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="rate_updates",
    )
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "rates"
        ordering = ("country",)

    def __str__(self):
        return f"1 GBP = {self.exchange_rate} {self.destination_currency} ({self.country})"

    @property
    def destination_currency(self) -> str:
        return destination_currency(self.country)
