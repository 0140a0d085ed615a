from decimal import Decimal

from django.contrib.auth import get_user_model
from django.test import TestCase
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from accounts.models import UserProfile, UserRole
from accounts.profiles import Caller
from analytics.services import EventRecorder, summarize
from core.exceptions import Forbidden
from currency.services import RateTable
from transfers.models import TransactionStatus
from transfers.services import TransactionLifecycleService, TransactionStore


class SummaryTests(TestCase):
    def setUp(self):
        User = get_user_model()
        sender = User.objects.create_user(email="sender@example.com", password="pass1234", username="sender")
        admin_user = User.objects.create_user(email="admin@example.com", password="pass1234", username="admin")
        UserProfile.objects.create(user=sender, is_approved=False)
        UserProfile.objects.create(user=admin_user, role=UserRole.ADMIN, is_approved=True)
        self.sender = Caller(user_id=sender.pk, role=UserRole.USER)
        self.admin = Caller(user_id=admin_user.pk, role=UserRole.ADMIN)

    def _send(self, amount, country="Somalia"):
        return TransactionStore().create(
            caller=self.sender,
            source_amount=amount,
            recipient_name="Faadumo Cali",
            recipient_mobile="+252610000000",
            country=country,
        )

    def test_empty_summary(self):
        data = summarize(self.admin)

        self.assertEqual(data["total_users"], 2)
        self.assertEqual(data["pending_approvals"], 1)
        self.assertEqual(data["total_transactions"], 0)
        self.assertEqual(data["total_volume"], Decimal("0.00"))
        self.assertEqual(data["total_profit"], Decimal("0.00"))
        self.assertEqual(data["transactions_by_status"], {})

    def test_profit_uses_fee_percentage_at_creation(self):
        RateTable().update_rate("Somalia", "125.19", "2", caller=self.admin)
        first = self._send("100")
        RateTable().update_rate("Somalia", "125.19", "5", caller=self.admin)
        self._send("200")
        TransactionLifecycleService().set_state(first.pk, caller=self.admin, status=TransactionStatus.APPROVED)

        data = summarize(self.admin)

        self.assertEqual(data["total_transactions"], 2)
        self.assertEqual(data["total_volume"], Decimal("300.00"))
        # 2% of 100 plus 5% of 200
        self.assertEqual(data["total_profit"], Decimal("12.00"))
        self.assertEqual(data["transactions_by_status"], {"pending": 1, "approved": 1})

    def test_admin_only(self):
        with self.assertRaises(Forbidden):
            summarize(self.sender)


class EventRecorderTests(TestCase):
    def test_record_without_actor(self):
        event = EventRecorder().record("rate.updated", resource_type="rate", resource_id="Kenya")
        self.assertIsNone(event.actor_id)
        self.assertEqual(event.payload, {})


class AnalyticsAPITests(APITestCase):
    def setUp(self):
        User = get_user_model()
        self.user = User.objects.create_user(email="sender@example.com", password="pass1234", username="sender")
        self.admin = User.objects.create_user(email="admin@example.com", password="pass1234", username="admin")
        UserProfile.objects.create(user=self.admin, role=UserRole.ADMIN, is_approved=True)

    def test_summary_is_admin_only(self):
        self.client.force_authenticate(user=self.user)
        response = self.client.get(reverse("analytics-summary"))
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_summary(self):
        self.client.force_authenticate(user=self.admin)

        response = self.client.get(reverse("analytics-summary"))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["total_users"], 2)
        self.assertEqual(response.data["total_volume"], "0.00")

    def test_events_filtered_by_resource(self):
        caller = Caller(user_id=self.admin.pk, role=UserRole.ADMIN)
        RateTable().update_rate("Kenya", "160", "0", caller=caller)
        RateTable().update_rate("Somalia", "130", "0", caller=caller)
        self.client.force_authenticate(user=self.admin)

        response = self.client.get(reverse("event-list"), {"resource_type": "rate", "resource_id": "Kenya"})

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data), 1)
        self.assertEqual(response.data[0]["event_type"], "rate.updated")
        self.assertEqual(response.data[0]["actor"], self.admin.pk)

    def test_events_are_admin_only(self):
        self.client.force_authenticate(user=self.user)
        response = self.client.get(reverse("event-list"))
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
