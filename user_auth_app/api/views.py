"""Auth API views.

Implements token-based registration and login. Registration also creates the
CLIENT profile with the submitted name and salon data.
"""

from django.contrib.auth.models import update_last_login
from rest_framework import status
from rest_framework.authtoken.models import Token
from rest_framework.response import Response
from rest_framework.views import APIView

from profiles.models import Profile
from .permissions import AllowedAnyLogin, RegistrationOpen
from .serializers import LoginSerializer, RegistrationSerializer


def _token_payload(user, token):
    prof = getattr(user, "profile", None)
    return {
        "token": token.key,
        "email": user.email,
        "user_id": user.id,
        "name": getattr(prof, "name", ""),
        "role": getattr(prof, "role", Profile.Role.CLIENT),
    }


class RegistrationView(APIView):
    """POST /api/registration/ -> create user, CLIENT profile, return auth token."""

    authentication_classes = []
    permission_classes = [RegistrationOpen]

    def post(self, request, *args, **kwargs):
        serializer = RegistrationSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        user = serializer.save()
        data = serializer.validated_data
        Profile.objects.get_or_create(
            user=user,
            defaults={
                "role": Profile.Role.CLIENT,
                "name": data["name"],
                "salon_name": data.get("salonName", ""),
                "phone": data.get("phone", ""),
            },
        )

        token, _ = Token.objects.get_or_create(user=user)
        return Response(_token_payload(user, token), status=status.HTTP_201_CREATED)


class LoginView(APIView):
    """POST /api/login/ -> validate credentials and return auth token."""

    authentication_classes = []
    permission_classes = [AllowedAnyLogin]

    def post(self, request, *args, **kwargs):
        serializer = LoginSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        user = serializer.validated_data["user"]
        update_last_login(None, user)
        token, _ = Token.objects.get_or_create(user=user)
        return Response(_token_payload(user, token), status=status.HTTP_200_OK)
