# analytics/serializers.py
from rest_framework import serializers
from .models import EventLog


class EventLogSerializer(serializers.ModelSerializer):
    class Meta:
        model = EventLog
        fields = ("id", "event_type", "resource_type", "resource_id", "actor", "payload", "created_at")
        read_only_fields = fields


class SummarySerializer(serializers.Serializer):
    total_users = serializers.IntegerField()
    pending_approvals = serializers.IntegerField()
    total_transactions = serializers.IntegerField()
    total_volume = serializers.DecimalField(max_digits=20, decimal_places=2)
    total_profit = serializers.DecimalField(max_digits=20, decimal_places=2)
    transactions_by_status = serializers.DictField(child=serializers.IntegerField())
