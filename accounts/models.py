from django.conf import settings
from django.contrib.auth.models import AbstractUser
from django.db import models


# -----------------------------
# MODELS - accounts/models.py
# -----------------------------


class UserRole(models.TextChoices):
	USER = "user", "User"
	ADMIN = "admin", "Admin"


class User(AbstractUser):
	email = models.EmailField(unique=True)
	USERNAME_FIELD = 'email'
	REQUIRED_FIELDS = ['username']


class UserProfile(models.Model):
	user = models.OneToOneField(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='profile')
	full_name = models.CharField(max_length=255, blank=True)
	mobile_number = models.CharField(max_length=32, blank=True)
	location = models.CharField(max_length=100, blank=True)
	role = models.CharField(max_length=10, choices=UserRole.choices, default=UserRole.USER)
	is_approved = models.BooleanField(default=False)
	created_at = models.DateTimeField(auto_now_add=True)

	class Meta:
		db_table = "profiles"

	def __str__(self):
		return f"{self.full_name or self.user.email} ({self.role})"
