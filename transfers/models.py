# transfers/models.py

import uuid

from django.conf import settings
from django.db import models

from core.constants import Country, PaymentMethod, destination_currency


class TransactionStatus(models.TextChoices):
    PENDING = "pending", "Pending"
    APPROVED = "approved", "Approved"
    REJECTED = "rejected", "Rejected"
    COMPLETED = "completed", "Completed"


class TransactionStage(models.TextChoices):
    MONEY_COLLECTION = "money_collection", "Money Collection"
    ADMIN_APPROVAL = "admin_approval", "Admin Approval"
    MONEY_COLLECTED = "money_collected", "Money Collected"
    WITH_COMPANY = "with_company", "With Company"
    RECIPIENT_RECEIVED = "recipient_received", "Recipient Received"
    DONE = "done", "Done"


class Transaction(models.Model):
    """
    A transfer submitted by a sender. Amounts and rate values are copied at
    creation and never recomputed; only ``status`` and ``stage`` change later.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    owner = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.PROTECT, related_name="transactions")
    source_amount = models.DecimalField(max_digits=12, decimal_places=2)
    destination_amount = models.DecimalField(max_digits=24, decimal_places=2)
    exchange_rate = models.DecimalField(max_digits=18, decimal_places=6)
    fee_percentage = models.DecimalField(max_digits=5, decimal_places=2, default=0)
    fee = models.DecimalField(max_digits=12, decimal_places=2)
    total_charge = models.DecimalField(max_digits=12, decimal_places=2)
    recipient_name = models.CharField(max_length=255)
    recipient_mobile = models.CharField(max_length=32)
    country = models.CharField(max_length=32, choices=Country.choices)
    payment_method = models.CharField(max_length=32, choices=PaymentMethod.choices)
    status = models.CharField(max_length=20, choices=TransactionStatus.choices, default=TransactionStatus.PENDING)
    stage = models.CharField(max_length=32, choices=TransactionStage.choices, default=TransactionStage.MONEY_COLLECTION)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "transactions"
        ordering = ("-created_at",)
        indexes = [
            models.Index(fields=("owner", "created_at"), name="transaction_owner_created_idx"),
            models.Index(fields=("status", "stage"), name="transaction_status_stage_idx"),
        ]

    def __str__(self):
        return f"{self.owner_id} - {self.source_amount} GBP -> {self.country} ({self.status}/{self.stage})"

    @property
    def destination_currency(self) -> str:
        return destination_currency(self.country)
