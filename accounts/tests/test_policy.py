from django.contrib.auth import get_user_model
from django.contrib.auth.models import AnonymousUser
from django.test import SimpleTestCase, TestCase

from accounts.models import UserProfile, UserRole
from accounts.policy import Decision, Operation, authorize, enforce
from accounts.profiles import Caller, caller_for_user, get_profile, get_profiles
from core.exceptions import Forbidden, NotFoundError, Unauthorized


class Owned:
    def __init__(self, owner_id):
        self.owner_id = owner_id


class AuthorizeTests(SimpleTestCase):
    def setUp(self):
        self.user = Caller(user_id=1, role=UserRole.USER)
        self.other = Caller(user_id=2, role=UserRole.USER)
        self.admin = Caller(user_id=3, role=UserRole.ADMIN)

    def test_anonymous_caller_is_unauthorized_for_everything(self):
        for operation in Operation:
            self.assertEqual(authorize(None, operation), Decision.UNAUTHORIZED)

    def test_admin_only_operations(self):
        for operation in (
            Operation.READ_ALL_TRANSACTIONS,
            Operation.SET_TRANSACTION_STATE,
            Operation.UPDATE_RATE,
            Operation.VIEW_STATISTICS,
        ):
            self.assertEqual(authorize(self.user, operation), Decision.FORBIDDEN)
            self.assertEqual(authorize(self.admin, operation), Decision.ALLOW)

    def test_create_only_for_own_account(self):
        self.assertTrue(authorize(self.user, Operation.CREATE_TRANSACTION, 1).allowed)
        self.assertEqual(authorize(self.user, Operation.CREATE_TRANSACTION, 2), Decision.FORBIDDEN)

    def test_admin_cannot_create_for_someone_else(self):
        self.assertEqual(authorize(self.admin, Operation.CREATE_TRANSACTION, 1), Decision.FORBIDDEN)

    def test_read_transaction_owner_or_admin(self):
        record = Owned(owner_id=1)
        self.assertTrue(authorize(self.user, Operation.READ_TRANSACTION, record).allowed)
        self.assertTrue(authorize(self.admin, Operation.READ_TRANSACTION, record).allowed)
        self.assertEqual(authorize(self.other, Operation.READ_TRANSACTION, record), Decision.FORBIDDEN)

    def test_read_rate_is_open_to_any_caller(self):
        self.assertTrue(authorize(self.user, Operation.READ_RATE).allowed)

    def test_owner_ids_compare_as_strings(self):
        self.assertTrue(authorize(self.user, Operation.READ_OWN_TRANSACTIONS, "1").allowed)

    def test_enforce_raises_typed_errors(self):
        with self.assertRaises(Unauthorized):
            enforce(None, Operation.READ_RATE)
        with self.assertRaises(Forbidden):
            enforce(self.user, Operation.UPDATE_RATE)
        enforce(self.admin, Operation.UPDATE_RATE)


class ProfileLookupTests(TestCase):
    def setUp(self):
        User = get_user_model()
        self.user = User.objects.create_user(email="amina@example.com", password="pass1234", username="amina")
        self.admin = User.objects.create_user(email="ops@example.com", password="pass1234", username="ops")
        UserProfile.objects.create(user=self.admin, full_name="Ops Desk", role=UserRole.ADMIN)

    def test_caller_role_comes_from_profile(self):
        self.assertTrue(caller_for_user(self.admin).is_admin)

    def test_user_without_profile_is_plain_user(self):
        caller = caller_for_user(self.user)
        self.assertEqual(caller.user_id, self.user.pk)
        self.assertFalse(caller.is_admin)

    def test_anonymous_user_has_no_caller(self):
        self.assertIsNone(caller_for_user(AnonymousUser()))

    def test_get_profile_creates_missing_profile(self):
        profile = get_profile(self.user.pk)
        self.assertEqual(profile.user, self.user)
        self.assertEqual(profile.role, UserRole.USER)

    def test_get_profile_unknown_user(self):
        with self.assertRaises(NotFoundError):
            get_profile(999999)

    def test_get_profiles_skips_users_without_profile(self):
        profiles = get_profiles([self.user.pk, self.admin.pk, None])
        self.assertEqual(list(profiles), [self.admin.pk])
        self.assertEqual(profiles[self.admin.pk].full_name, "Ops Desk")
