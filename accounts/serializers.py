# ----------------------------------
# SERIALIZERS - accounts/serializers.py
# ----------------------------------
from rest_framework import serializers
from django.contrib.auth import get_user_model
from .models import UserProfile

User = get_user_model()


class UserProfileSerializer(serializers.ModelSerializer):
    class Meta:
        model = UserProfile
        fields = ("full_name", "mobile_number", "location", "role", "is_approved")
        read_only_fields = ("role", "is_approved")


class UserSerializer(serializers.ModelSerializer):
    profile = UserProfileSerializer(read_only=True)

    class Meta:
        model = User
        fields = ["id", "email", "username", "profile"]
