# currency/serializers.py

from rest_framework import serializers

from core.constants import Country
from .models import RateEntry


class RateEntrySerializer(serializers.ModelSerializer):
    destination_currency = serializers.CharField(read_only=True)

    class Meta:
        model = RateEntry
        fields = ("id", "country", "destination_currency", "exchange_rate", "fee_percentage", "version", "updated_at")
        read_only_fields = fields


class RateUpdateSerializer(serializers.Serializer):
    # Bounds are enforced by RateTable so API and service share one rule.
    exchange_rate = serializers.CharField()
    fee_percentage = serializers.CharField()


class QuoteRequestSerializer(serializers.Serializer):
    country = serializers.ChoiceField(choices=Country.choices)
    amount = serializers.CharField(required=False, allow_blank=True, default="")


class ConversionSerializer(serializers.Serializer):
    country = serializers.CharField()
    source_currency = serializers.CharField()
    destination_currency = serializers.CharField()
    source_amount = serializers.DecimalField(max_digits=14, decimal_places=2)
    destination_amount = serializers.DecimalField(max_digits=24, decimal_places=2)
    fee = serializers.DecimalField(max_digits=14, decimal_places=2)
    total_charge = serializers.DecimalField(max_digits=14, decimal_places=2)
    exchange_rate = serializers.DecimalField(max_digits=18, decimal_places=6)
    is_ready = serializers.BooleanField()
    error = serializers.CharField(allow_null=True)
