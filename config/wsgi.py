"""
WSGI config for the AlahdalPay backend.

It exposes the WSGI callable as a module-level variable named ``application``.
Hosts without a release phase can set AUTO_MIGRATE, AUTO_SEED_RATES or
AUTO_CREATE_SUPERUSER to prepare the database when the worker boots.
"""

import os

import django
from django.core.wsgi import get_wsgi_application


def _flag(name):
    return os.getenv(name, "").strip().lower() in ("1", "true", "yes")


def _migrate_if_requested():
    if not _flag("AUTO_MIGRATE"):
        return

    from django.core.management import call_command

    try:
        call_command("migrate", interactive=False, verbosity=1)
    except Exception as exc:  # pragma: no cover - log best effort
        print(f"[migrate] failed at startup: {exc}")
    else:
        print("[migrate] database up to date at startup")


def _seed_rates_if_requested():
    if not _flag("AUTO_SEED_RATES"):
        return

    from django.core.management import call_command

    call_command("seed_rates")


def _create_superuser_if_requested():
    """
    Creates an admin account (with an admin profile) from
    DJANGO_SUPERUSER_EMAIL / DJANGO_SUPERUSER_PASSWORD.
    """
    if not _flag("AUTO_CREATE_SUPERUSER"):
        return

    email = os.getenv("DJANGO_SUPERUSER_EMAIL", "").strip()
    password = os.getenv("DJANGO_SUPERUSER_PASSWORD", "").strip()
    username = os.getenv("DJANGO_SUPERUSER_USERNAME", "").strip() or (email.split("@")[0] if email else "")

    if not email or not password:
        print("[superuser] missing DJANGO_SUPERUSER_EMAIL/PASSWORD")
        return

    from django.contrib.auth import get_user_model
    from accounts.models import UserProfile, UserRole

    User = get_user_model()
    if User.objects.filter(email=email).exists():
        print("[superuser] account already exists, skipping creation")
        return

    user = User.objects.create_superuser(email=email, password=password, username=username or email)
    UserProfile.objects.update_or_create(
        user=user,
        defaults={"role": UserRole.ADMIN, "is_approved": True, "full_name": username},
    )
    print(f"[superuser] created admin user {email}")


os.environ.setdefault("DJANGO_SETTINGS_MODULE", "config.settings")
django.setup()
_migrate_if_requested()
_seed_rates_if_requested()
_create_superuser_if_requested()

application = get_wsgi_application()
