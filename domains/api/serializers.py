import re

from rest_framework import serializers

from common.fields import StrictCharField
from domains.models import DomainPricing

LABEL_RE = re.compile(r"^[a-z0-9](?:[a-z0-9-]{0,61}[a-z0-9])?$")
EXTENSION_RE = re.compile(r"^\.[a-z]{2,10}(?:\.[a-z]{2,10})?$")


class CheckDomainSerializer(serializers.Serializer):
    domain = StrictCharField(max_length=63)
    extension = StrictCharField(max_length=20)

    def validate_domain(self, value):
        value = value.strip().lower()
        if not LABEL_RE.match(value):
            raise serializers.ValidationError(
                "Use letters, digits and hyphens only; no leading or trailing hyphen."
            )
        return value

    def validate_extension(self, value):
        value = value.strip().lower()
        if not value.startswith("."):
            value = f".{value}"
        if not EXTENSION_RE.match(value):
            raise serializers.ValidationError("Invalid domain extension.")
        return value


class DomainPricingSerializer(serializers.ModelSerializer):
    price = serializers.DecimalField(max_digits=8, decimal_places=2, coerce_to_string=False)
    finalPrice = serializers.DecimalField(
        source="final_price", max_digits=8, decimal_places=2, coerce_to_string=False, read_only=True
    )

    class Meta:
        model = DomainPricing
        fields = ["id", "extension", "price", "discount", "popular", "finalPrice"]
