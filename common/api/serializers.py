"""Serializers for the site settings document."""

from rest_framework import serializers

from common.fields import StrictCharField, StrictNumberField

# Largest amount the price columns fed from these settings can hold.
MAX_PRICE = 999999.99


class DomainPriceSerializer(serializers.Serializer):
    extension = StrictCharField()
    price = StrictNumberField(min_value=0, max_value=MAX_PRICE)
    discount = StrictNumberField(min_value=0, max_value=100)
    popular = serializers.BooleanField(default=False)


class TemplatePricingSerializer(serializers.Serializer):
    offerPrice = StrictNumberField(min_value=0, max_value=MAX_PRICE)
    originalPrice = StrictNumberField(min_value=0, max_value=MAX_PRICE)

    def validate(self, attrs):
        if attrs["offerPrice"] > attrs["originalPrice"]:
            raise serializers.ValidationError(
                {"offerPrice": "Offer price cannot be higher than original price."}
            )
        return attrs


class ThemeSerializer(serializers.Serializer):
    primaryColor = serializers.CharField(max_length=20)
    secondaryColor = serializers.CharField(max_length=20)
    accentColor = serializers.CharField(max_length=20)


class SiteSettingsSerializer(serializers.Serializer):
    """Validates a full settings document sent by the admin settings page."""

    siteName = serializers.CharField(max_length=200)
    siteDescription = serializers.CharField(allow_blank=True, required=False)
    siteUrl = serializers.URLField()
    contactEmail = serializers.EmailField()
    supportEmail = serializers.EmailField()
    maintenanceMode = serializers.BooleanField(default=False)
    allowRegistrations = serializers.BooleanField(default=False)
    emailNotifications = serializers.BooleanField(default=False)
    smsNotifications = serializers.BooleanField(default=False)
    stripePublishableKey = serializers.CharField(allow_blank=True, required=False)
    stripeSecretKey = serializers.CharField(allow_blank=True, required=False)
    domainPricing = DomainPriceSerializer(many=True, required=False)
    templatePricing = TemplatePricingSerializer(required=False)
    theme = ThemeSerializer(required=False)
