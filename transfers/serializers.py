# transfers/serializers.py

from rest_framework import serializers

from core.constants import Country, PaymentMethod
from .models import Transaction, TransactionStage, TransactionStatus


class TransactionSerializer(serializers.ModelSerializer):
    owner = serializers.ReadOnlyField(source="owner_id")
    destination_currency = serializers.CharField(read_only=True)

    class Meta:
        model = Transaction
        fields = (
            "id",
            "owner",
            "source_amount",
            "destination_amount",
            "destination_currency",
            "exchange_rate",
            "fee",
            "total_charge",
            "recipient_name",
            "recipient_mobile",
            "country",
            "payment_method",
            "status",
            "stage",
            "created_at",
            "updated_at",
        )
        read_only_fields = fields


class AdminTransactionSerializer(TransactionSerializer):
    owner_display = serializers.SerializerMethodField()

    class Meta(TransactionSerializer.Meta):
        fields = TransactionSerializer.Meta.fields + ("fee_percentage", "owner_display")
        read_only_fields = fields

    def get_owner_display(self, obj):
        profile = getattr(obj, "owner_profile", None)
        if profile is None:
            return {"id": obj.owner_id, "full_name": str(obj.owner_id), "mobile_number": ""}
        return {
            "id": obj.owner_id,
            "full_name": profile.full_name or str(obj.owner_id),
            "mobile_number": profile.mobile_number,
        }


class TransactionCreateSerializer(serializers.Serializer):
    # Amount stays a string here; the conversion engine owns numeric validation.
    source_amount = serializers.CharField()
    recipient_name = serializers.CharField(max_length=255)
    recipient_mobile = serializers.CharField(max_length=32)
    country = serializers.ChoiceField(choices=Country.choices)
    payment_method = serializers.ChoiceField(choices=PaymentMethod.choices, required=False, allow_blank=True)


class TransactionStateSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=TransactionStatus.choices, required=False)
    stage = serializers.ChoiceField(choices=TransactionStage.choices, required=False)

    def validate(self, attrs):
        if not attrs.get("status") and not attrs.get("stage"):
            raise serializers.ValidationError("Provide a status, a stage, or both.")
        return attrs


class TransactionFilterSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=TransactionStatus.choices, required=False)
    stage = serializers.ChoiceField(choices=TransactionStage.choices, required=False)
    country = serializers.ChoiceField(choices=Country.choices, required=False)
