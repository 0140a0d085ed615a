import uuid

import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Transaction",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("source_amount", models.DecimalField(decimal_places=2, max_digits=12)),
                ("destination_amount", models.DecimalField(decimal_places=2, max_digits=24)),
                ("exchange_rate", models.DecimalField(decimal_places=6, max_digits=18)),
                ("fee_percentage", models.DecimalField(decimal_places=2, default=0, max_digits=5)),
                ("fee", models.DecimalField(decimal_places=2, max_digits=12)),
                ("total_charge", models.DecimalField(decimal_places=2, max_digits=12)),
                ("recipient_name", models.CharField(max_length=255)),
                ("recipient_mobile", models.CharField(max_length=32)),
                (
                    "country",
                    models.CharField(choices=[("Somalia", "Somalia"), ("Kenya", "Kenya")], max_length=32),
                ),
                (
                    "payment_method",
                    models.CharField(
                        choices=[
                            ("EVC-PLUS", "EVC-PLUS"),
                            ("M-PESA", "M-PESA"),
                            ("Money collection", "Money Collection"),
                        ],
                        max_length=32,
                    ),
                ),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("pending", "Pending"),
                            ("approved", "Approved"),
                            ("rejected", "Rejected"),
                            ("completed", "Completed"),
                        ],
                        default="pending",
                        max_length=20,
                    ),
                ),
                (
                    "stage",
                    models.CharField(
                        choices=[
                            ("money_collection", "Money Collection"),
                            ("admin_approval", "Admin Approval"),
                            ("money_collected", "Money Collected"),
                            ("with_company", "With Company"),
                            ("recipient_received", "Recipient Received"),
                            ("done", "Done"),
                        ],
                        default="money_collection",
                        max_length=32,
                    ),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "owner",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="transactions",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "db_table": "transactions",
                "ordering": ("-created_at",),
                "indexes": [
                    models.Index(fields=["owner", "created_at"], name="transaction_owner_created_idx"),
                    models.Index(fields=["status", "stage"], name="transaction_status_stage_idx"),
                ],
            },
        ),
    ]
