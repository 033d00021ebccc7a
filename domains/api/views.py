"""Domain endpoints for the checkout wizard.

- POST /api/check-domain/     simulated availability + suggestions (throttled)
- GET  /api/domains/pricing/  active extension prices
"""

from decimal import ROUND_HALF_UP, Decimal

from rest_framework import generics
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from common.site_settings import load_site_settings
from common.throttling import CheckDomainThrottle
from domains.availability import DomainAvailabilityChecker
from domains.models import DomainPricing
from .serializers import CheckDomainSerializer, DomainPricingSerializer


class CheckDomainAPIView(APIView):
    authentication_classes = []
    permission_classes = [AllowAny]
    throttle_classes = [CheckDomainThrottle]
    checker = DomainAvailabilityChecker()

    def post(self, request):
        ser = CheckDomainSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        label = ser.validated_data["domain"]
        extension = ser.validated_data["extension"]
        full = f"{label}{extension}"

        if self.checker.is_available(label, extension):
            return Response({"available": True, "domain": full, "message": f"{full} está disponible"})
        return Response(
            {
                "available": False,
                "domain": full,
                "message": f"{full} no está disponible",
                "suggestions": self.checker.suggestions(label, extension),
            }
        )


def _settings_pricing() -> list:
    """Pricing rows from the settings document, used while the table is empty."""
    out = []
    for item in load_site_settings().get("domainPricing") or []:
        price = Decimal(str(item.get("price", 0)))
        discount = int(item.get("discount", 0) or 0)
        final = (price * (100 - discount) / 100).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
        out.append(
            {
                "extension": item.get("extension", ""),
                "price": float(price),
                "discount": discount,
                "popular": bool(item.get("popular", False)),
                "finalPrice": float(final),
            }
        )
    return out


class DomainPricingListAPIView(generics.ListAPIView):
    authentication_classes = []
    permission_classes = [AllowAny]
    serializer_class = DomainPricingSerializer
    pagination_class = None

    def get_queryset(self):
        return DomainPricing.objects.filter(active=True)

    def list(self, request, *args, **kwargs):
        qs = self.get_queryset()
        if not qs.exists():
            return Response(_settings_pricing())
        return Response(self.get_serializer(qs, many=True).data)
