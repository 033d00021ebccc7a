"""Payments API serializers."""

from rest_framework import serializers

from common.fields import StrictCharField, StrictNumberField


class PaymentMetadataSerializer(serializers.Serializer):
    salonName = StrictCharField(required=False, allow_blank=True)
    ownerName = StrictCharField(required=False, allow_blank=True)
    email = serializers.EmailField(required=False)
    selectedTemplate = StrictCharField(required=False, allow_blank=True)
    domainName = StrictCharField(required=False, allow_blank=True)
    hasMigration = serializers.BooleanField(required=False)
    setupFee = StrictNumberField(required=False)
    migrationFee = StrictNumberField(required=False)
    totalAmount = StrictNumberField(required=False)


class CreatePaymentIntentSerializer(serializers.Serializer):
    amount = StrictNumberField(min_value=1)
    currency = StrictCharField(required=False, default="eur", max_length=3, min_length=3)
    metadata = PaymentMetadataSerializer(required=False)


class UpdatePaymentIntentSerializer(serializers.Serializer):
    paymentIntentId = StrictCharField()
    amount = StrictNumberField(required=False, min_value=1)
    metadata = PaymentMetadataSerializer(required=False)


class CheckoutSerializer(serializers.Serializer):
    email = serializers.EmailField()
    name = StrictCharField(min_length=2, max_length=150)
    phone = StrictCharField(required=False, allow_blank=True, max_length=50)
    businessName = StrictCharField(min_length=2, max_length=200)
    businessType = StrictCharField(required=False, allow_blank=True, max_length=50)
    templateId = serializers.IntegerField(required=False, allow_null=True)
    domain = StrictCharField(required=False, allow_blank=True, max_length=253)
    domainExtension = StrictCharField(required=False, allow_blank=True, max_length=20)

    def validate_email(self, value):
        return value.strip().lower()
