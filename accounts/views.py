# accounts/views.py

from rest_framework import generics, permissions
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from .models import UserProfile
from .profiles import get_current_user
from .serializers import UserProfileSerializer, UserSerializer


# -------------------------------------------------------
# CURRENT USER / PROFILE
# -------------------------------------------------------


@api_view(["GET"])
@permission_classes([IsAuthenticated])
def me_view(request):
    caller = get_current_user(request)
    data = UserSerializer(request.user).data
    data["role"] = caller.role
    return Response(data)


class UserProfileView(generics.RetrieveUpdateAPIView):
    serializer_class = UserProfileSerializer
    permission_classes = [permissions.IsAuthenticated]

    def get_object(self):
        # Profiles are created lazily so older accounts never 404 here.
        profile, _ = UserProfile.objects.get_or_create(user=self.request.user)
        return profile
