from datetime import timedelta
from decimal import Decimal
from unittest import mock

from django.contrib.auth import get_user_model
from django.test import TestCase
from django.utils import timezone

from accounts.models import UserProfile, UserRole
from accounts.profiles import Caller
from analytics.models import EventLog
from core.exceptions import Forbidden, NotFoundError, Unauthorized, ValidationError
from currency.services import RateTable
from transfers.models import Transaction, TransactionStage, TransactionStatus
from transfers.services import TransactionStore


class TransactionStoreTests(TestCase):
    def setUp(self):
        User = get_user_model()
        self.sender_user = User.objects.create_user(email="sender@example.com", password="pass1234", username="sender")
        self.other_user = User.objects.create_user(email="other@example.com", password="pass1234", username="other")
        self.admin_user = User.objects.create_user(email="admin@example.com", password="pass1234", username="admin")
        UserProfile.objects.create(user=self.sender_user, full_name="Hodan Warsame", mobile_number="+447700900123")

        self.sender = Caller(user_id=self.sender_user.pk, role=UserRole.USER)
        self.other = Caller(user_id=self.other_user.pk, role=UserRole.USER)
        self.admin = Caller(user_id=self.admin_user.pk, role=UserRole.ADMIN)
        self.store = TransactionStore()

    def _create(self, caller=None, **overrides):
        data = {
            "source_amount": "100",
            "recipient_name": "Faadumo Cali",
            "recipient_mobile": "+252610000000",
            "country": "Somalia",
        }
        data.update(overrides)
        return self.store.create(caller=caller or self.sender, **data)

    def test_create_snapshots_conversion(self):
        tx = self._create()

        self.assertEqual(tx.owner_id, self.sender_user.pk)
        self.assertEqual(tx.source_amount, Decimal("100"))
        self.assertEqual(tx.destination_amount, Decimal("12519.00"))
        self.assertEqual(tx.exchange_rate, Decimal("125.19"))
        self.assertEqual(tx.fee, Decimal("2.99"))
        self.assertEqual(tx.total_charge, Decimal("102.99"))
        self.assertEqual(tx.status, TransactionStatus.PENDING)
        self.assertEqual(tx.stage, TransactionStage.MONEY_COLLECTION)
        self.assertEqual(tx.payment_method, "EVC-PLUS")
        self.assertEqual(tx.destination_currency, "USD")
        self.assertTrue(EventLog.objects.filter(event_type="transaction.created", resource_id=str(tx.pk)).exists())

    def test_snapshot_survives_rate_update(self):
        tx = self._create(country="Kenya", source_amount="10")
        RateTable().update_rate("Kenya", "200", "3", caller=self.admin)

        tx.refresh_from_db()
        self.assertEqual(tx.exchange_rate, Decimal("157.23"))
        self.assertEqual(tx.destination_amount, Decimal("1572.30"))
        self.assertEqual(tx.fee_percentage, Decimal("0"))

    def test_kenya_defaults_to_mpesa(self):
        tx = self._create(country="Kenya")
        self.assertEqual(tx.payment_method, "M-PESA")
        self.assertEqual(tx.destination_currency, "KES")

    def test_payment_method_must_match_country(self):
        with self.assertRaises(ValidationError):
            self._create(country="Kenya", payment_method="EVC-PLUS")

    def test_rejects_invalid_input(self):
        cases = [
            {"source_amount": "abc"},
            {"source_amount": "0"},
            {"source_amount": "-10"},
            {"source_amount": "10.005"},
            {"recipient_name": "  "},
            {"recipient_mobile": ""},
        ]
        for overrides in cases:
            with self.subTest(**overrides):
                with self.assertRaises(ValidationError):
                    self._create(**overrides)
        self.assertFalse(Transaction.objects.exists())

    def test_unknown_country(self):
        with self.assertRaises(NotFoundError):
            self._create(country="Narnia")

    def test_cannot_create_for_another_user(self):
        with self.assertRaises(Forbidden):
            self.store.create(
                caller=self.admin,
                owner_id=self.sender_user.pk,
                source_amount="10",
                recipient_name="Faadumo",
                recipient_mobile="+252610000000",
                country="Somalia",
            )

    def test_anonymous_create(self):
        with self.assertRaises(Unauthorized):
            self.store.create(
                caller=None,
                source_amount="10",
                recipient_name="Faadumo",
                recipient_mobile="+252610000000",
                country="Somalia",
            )

    def test_get_owner_or_admin_only(self):
        tx = self._create()

        self.assertEqual(self.store.get(tx.pk, caller=self.sender).pk, tx.pk)
        self.assertEqual(self.store.get(tx.pk, caller=self.admin).pk, tx.pk)
        with self.assertRaises(Forbidden):
            self.store.get(tx.pk, caller=self.other)

    def test_get_missing(self):
        with self.assertRaises(NotFoundError):
            self.store.get("not-a-uuid", caller=self.admin)
        with self.assertRaises(NotFoundError):
            self.store.get("00000000-0000-0000-0000-000000000000", caller=self.admin)

    def test_list_by_owner_newest_first(self):
        older = self._create(source_amount="10")
        newer = self._create(source_amount="20")
        self._create(caller=self.other, source_amount="30")
        now = timezone.now()
        Transaction.objects.filter(pk=older.pk).update(created_at=now - timedelta(days=1))
        Transaction.objects.filter(pk=newer.pk).update(created_at=now)

        listed = self.store.list_by_owner(self.sender_user.pk, caller=self.sender)

        self.assertEqual([tx.pk for tx in listed], [newer.pk, older.pk])

    def test_list_by_owner_for_someone_else(self):
        with self.assertRaises(Forbidden):
            self.store.list_by_owner(self.sender_user.pk, caller=self.other)

    def test_list_all_attaches_owner_profiles(self):
        mine = self._create()
        theirs = self._create(caller=self.other, country="Kenya")

        listed = {tx.pk: tx for tx in self.store.list_all(caller=self.admin)}

        self.assertEqual(listed[mine.pk].owner_profile.full_name, "Hodan Warsame")
        self.assertIsNone(listed[theirs.pk].owner_profile)

    def test_list_all_filters(self):
        self._create()
        kenya = self._create(country="Kenya")

        listed = self.store.list_all(caller=self.admin, country="Kenya", status=TransactionStatus.PENDING)

        self.assertEqual([tx.pk for tx in listed], [kenya.pk])

    def test_list_all_survives_profile_lookup_failure(self):
        tx = self._create()
        store = TransactionStore(profile_lookup=mock.Mock(side_effect=RuntimeError("profiles down")))

        with self.assertLogs("transfers.services.store", level="WARNING"):
            listed = store.list_all(caller=self.admin)

        self.assertEqual([item.pk for item in listed], [tx.pk])
        self.assertIsNone(listed[0].owner_profile)

    def test_admin_get_attaches_owner_profile(self):
        tx = self._create()

        self.assertEqual(self.store.get(tx.pk, caller=self.admin).owner_profile.full_name, "Hodan Warsame")

    def test_admin_get_survives_profile_lookup_failure(self):
        tx = self._create()
        store = TransactionStore(profile_lookup=mock.Mock(side_effect=RuntimeError("profiles down")))

        with self.assertLogs("transfers.services.store", level="WARNING"):
            fetched = store.get(tx.pk, caller=self.admin)

        self.assertIsNone(fetched.owner_profile)

    def test_update_attaches_owner_profile(self):
        tx = self._create()

        result = self.store.update(tx.pk, caller=self.admin, status=TransactionStatus.APPROVED)

        self.assertEqual(result.transaction.owner_profile.full_name, "Hodan Warsame")

    def test_list_all_admin_only(self):
        with self.assertRaises(Forbidden):
            self.store.list_all(caller=self.sender)
