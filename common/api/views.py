"""Site settings endpoints.

- GET /api/settings/        public subset of the settings document
- GET /api/admin/settings/  full document, Stripe secret masked (admin only)
- PUT /api/admin/settings/  validate and replace the document (admin only)
"""

import logging

from rest_framework import status
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from common import site_settings
from .permissions import IsAdminRole
from .serializers import SiteSettingsSerializer

logger = logging.getLogger(__name__)


class PublicSettingsAPIView(APIView):
    """GET /api/settings/ -> pricing, theme and contact data for the storefront."""

    authentication_classes = []
    permission_classes = [AllowAny]

    def get(self, request):
        data = site_settings.load_site_settings()
        return Response(site_settings.public_view(data), status=status.HTTP_200_OK)


class AdminSettingsAPIView(APIView):
    """Read and replace the settings document."""

    permission_classes = [IsAuthenticated, IsAdminRole]

    def get(self, request):
        data = site_settings.load_site_settings()
        return Response(site_settings.masked(data), status=status.HTTP_200_OK)

    def put(self, request):
        ser = SiteSettingsSerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        current = site_settings.load_site_settings()
        incoming = dict(ser.validated_data)
        # The settings page echoes the mask back when the secret is unchanged.
        if incoming.get("stripeSecretKey") == site_settings.SECRET_MASK:
            incoming["stripeSecretKey"] = current.get("stripeSecretKey", "")

        merged = {**current, **_plain(incoming)}
        site_settings.save_site_settings(merged)
        logger.info("Site settings updated by %s", request.user.get_username())
        return Response(
            {"message": "Settings saved successfully", "settings": site_settings.masked(merged)},
            status=status.HTTP_200_OK,
        )


def _plain(value):
    """Convert serializer output (OrderedDicts) into JSON-ready builtins."""
    if isinstance(value, dict):
        return {k: _plain(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_plain(v) for v in value]
    return value
