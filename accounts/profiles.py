"""
Identity and profile lookups used by the rest of the project.

The remittance core only needs two things from the account layer: who is
calling (id and role) and the display profile of a user. Everything else
about accounts (sign-up, passwords, sessions) stays behind this module.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional

from django.core.exceptions import ObjectDoesNotExist

from core.exceptions import NotFoundError
from .models import User, UserProfile, UserRole


@dataclass(frozen=True)
class Caller:
    user_id: int
    role: str = UserRole.USER

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN


def caller_for_user(user) -> Optional[Caller]:
    if user is None or not getattr(user, "is_authenticated", False):
        return None
    try:
        role = user.profile.role
    except ObjectDoesNotExist:
        role = UserRole.USER
    return Caller(user_id=user.pk, role=role)


def get_current_user(request) -> Optional[Caller]:
    """Resolve the authenticated caller of a request, or None."""
    return caller_for_user(getattr(request, "user", None))


def get_profile(user_id) -> UserProfile:
    try:
        user = User.objects.get(pk=user_id)
    except User.DoesNotExist as exc:
        raise NotFoundError(f"Unknown user {user_id}.") from exc
    profile, _ = UserProfile.objects.get_or_create(user=user)
    return profile


def get_profiles(user_ids: Iterable) -> dict:
    """Bulk profile lookup keyed by user id. Users without a profile are omitted."""
    ids = {user_id for user_id in user_ids if user_id is not None}
    if not ids:
        return {}
    return {profile.user_id: profile for profile in UserProfile.objects.filter(user_id__in=ids)}
