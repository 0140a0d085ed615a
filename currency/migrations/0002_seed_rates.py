# Data migration: one active rate per corridor so conversions work from day one.
# Admins adjust the values afterwards through the rates API.

from decimal import Decimal

from django.db import migrations

SEED_RATES = [
    ("Somalia", "125.19", "0"),
    ("Kenya", "157.23", "0"),
]


def seed_rates(apps, schema_editor):
    RateEntry = apps.get_model("currency", "RateEntry")

    for country, exchange_rate, fee_percentage in SEED_RATES:
        RateEntry.objects.get_or_create(
            country=country,
            defaults={
                "exchange_rate": Decimal(exchange_rate),
                "fee_percentage": Decimal(fee_percentage),
            },
        )


def noop(apps, schema_editor):
    pass


class Migration(migrations.Migration):

    dependencies = [
        ("currency", "0001_initial"),
    ]

    operations = [
        migrations.RunPython(seed_rates, noop),
    ]
