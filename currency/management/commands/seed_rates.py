from decimal import Decimal

from django.core.management.base import BaseCommand

from core.constants import DEFAULT_RATES
from currency.models import RateEntry


class Command(BaseCommand):
    help = "Create the default rate entry for every corridor that has none. Existing entries are left untouched."

    def handle(self, *args, **options):
        for country, exchange_rate, fee_percentage in DEFAULT_RATES:
            entry, created = RateEntry.objects.get_or_create(
                country=country,
                defaults={
                    "exchange_rate": Decimal(exchange_rate),
                    "fee_percentage": Decimal(fee_percentage),
                },
            )
            if created:
                self.stdout.write(self.style.SUCCESS(f"Created rate: {entry}"))
            else:
                self.stdout.write(self.style.WARNING(f"Rate already exists: {entry}"))
