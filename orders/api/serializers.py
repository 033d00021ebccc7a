"""Orders API serializers.

Request bodies of the setup wizard are validated with strict JSON types; the
output serializers expose orders with the camelCase keys the dashboard uses.
"""

import re

from rest_framework import serializers

from common.fields import StrictCharField, StrictDecimalField, StrictIntegerField, StrictListField
from orders.models import BusinessHours, Order, SalonService
from orders.workflow import (
    calculate_progress,
    estimated_completion,
    milestones,
    project_status,
)


class OrderTemplateSerializer(serializers.Serializer):
    id = serializers.IntegerField()
    name = serializers.CharField()
    category = serializers.CharField()
    price = serializers.DecimalField(max_digits=10, decimal_places=2, coerce_to_string=False)


class OrderSerializer(serializers.ModelSerializer):
    """Full order representation."""

    userId = serializers.IntegerField(source="user_id", read_only=True)
    salonName = serializers.CharField(source="salon_name")
    ownerName = serializers.CharField(source="owner_name")
    domainExtension = serializers.CharField(source="domain_extension")
    domainPrice = serializers.DecimalField(
        source="domain_price", max_digits=10, decimal_places=2, coerce_to_string=False
    )
    domainUserPrice = serializers.DecimalField(
        source="domain_user_price", max_digits=10, decimal_places=2, coerce_to_string=False
    )
    total = serializers.DecimalField(max_digits=10, decimal_places=2, coerce_to_string=False)
    template = OrderTemplateSerializer(read_only=True)
    stripeSessionId = serializers.CharField(source="stripe_session_id")
    setupStep = serializers.CharField(source="setup_step")
    setupCompleted = serializers.BooleanField(source="setup_completed")
    completedAt = serializers.DateTimeField(source="completed_at")
    createdAt = serializers.DateTimeField(source="created_at")
    updatedAt = serializers.DateTimeField(source="updated_at")
    progress = serializers.SerializerMethodField()

    class Meta:
        model = Order
        fields = [
            "id",
            "userId",
            "salonName",
            "ownerName",
            "email",
            "phone",
            "address",
            "domain",
            "domainExtension",
            "domainPrice",
            "domainUserPrice",
            "total",
            "template",
            "stripeSessionId",
            "status",
            "setupStep",
            "setupCompleted",
            "completedAt",
            "createdAt",
            "updatedAt",
            "progress",
        ]

    def get_progress(self, obj) -> int:
        return calculate_progress(obj.status, obj.setup_step)


class ProjectSerializer(OrderSerializer):
    """Order seen as a website project in the client dashboard."""

    projectStatus = serializers.SerializerMethodField()
    estimatedCompletion = serializers.SerializerMethodField()
    milestones = serializers.SerializerMethodField()

    class Meta(OrderSerializer.Meta):
        fields = OrderSerializer.Meta.fields + ["projectStatus", "estimatedCompletion", "milestones"]

    def get_projectStatus(self, obj) -> str:
        return project_status(obj.status, obj.setup_step)

    def get_estimatedCompletion(self, obj):
        return estimated_completion(obj).isoformat()

    def get_milestones(self, obj):
        out = []
        for item in milestones(obj):
            item = dict(item)
            item["dueDate"] = item["dueDate"].isoformat()
            if item["completedAt"] is not None:
                item["completedAt"] = item["completedAt"].isoformat()
            out.append(item)
        return out


class AdminOrderSerializer(OrderSerializer):
    """Back-office view adds the owning account."""

    user = serializers.SerializerMethodField()
    photoCount = serializers.IntegerField(source="photo_count", read_only=True, default=0)
    paymentIntentId = serializers.CharField(source="payment_intent_id", read_only=True)

    class Meta(OrderSerializer.Meta):
        fields = OrderSerializer.Meta.fields + ["user", "photoCount", "paymentIntentId"]

    def get_user(self, obj):
        if obj.user_id is None:
            return None
        prof = getattr(obj.user, "profile", None)
        return {
            "id": obj.user_id,
            "email": obj.user.email,
            "name": getattr(prof, "name", "") or obj.user.get_full_name(),
        }


class UpdateDomainSerializer(serializers.Serializer):
    domain = StrictCharField(min_length=3, max_length=253)
    domainExtension = StrictCharField(max_length=20)
    domainPrice = StrictDecimalField(min_value=0)
    domainUserPrice = StrictDecimalField(min_value=0)


class UpdateContentSerializer(serializers.Serializer):
    aboutText = StrictCharField(required=False, allow_blank=True)
    services = StrictListField(child=serializers.JSONField(), required=False)
    photoCount = StrictIntegerField(required=False, min_value=0)


class AdminStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=Order.Status.choices)


class RecentOrderSerializer(serializers.ModelSerializer):
    """Compact project card for the client dashboard."""

    orderId = serializers.UUIDField(source="id", read_only=True)
    name = serializers.CharField(source="salon_name")
    status = serializers.SerializerMethodField()
    progress = serializers.SerializerMethodField()
    domain = serializers.SerializerMethodField()
    template = serializers.SerializerMethodField()
    startDate = serializers.DateTimeField(source="created_at")
    estimatedCompletion = serializers.SerializerMethodField()
    actualCompletion = serializers.DateTimeField(source="completed_at")
    lastUpdate = serializers.DateTimeField(source="updated_at")

    class Meta:
        model = Order
        fields = [
            "id",
            "orderId",
            "name",
            "status",
            "progress",
            "domain",
            "template",
            "startDate",
            "estimatedCompletion",
            "actualCompletion",
            "lastUpdate",
        ]

    def get_status(self, obj) -> str:
        return project_status(obj.status, obj.setup_step)

    def get_progress(self, obj) -> int:
        return calculate_progress(obj.status, obj.setup_step)

    def get_domain(self, obj) -> str:
        if not obj.domain:
            return ""
        return obj.domain + (obj.domain_extension or ".es")

    def get_template(self, obj) -> str:
        return obj.template.name if obj.template_id else "Plantilla personalizada"

    def get_estimatedCompletion(self, obj):
        return estimated_completion(obj).isoformat()


class SalonServiceSerializer(serializers.ModelSerializer):
    name = StrictCharField(min_length=1, max_length=150)
    description = StrictCharField(required=False, allow_blank=True)
    priceType = serializers.ChoiceField(
        source="price_type", choices=SalonService.PriceType.choices, required=False
    )
    price = StrictDecimalField(min_value=0, required=False, allow_null=True)
    priceFrom = StrictDecimalField(source="price_from", min_value=0, required=False, allow_null=True)
    priceTo = StrictDecimalField(source="price_to", min_value=0, required=False, allow_null=True)
    duration = StrictIntegerField(min_value=0, required=False, allow_null=True)
    requirements = StrictCharField(required=False, allow_blank=True)
    aftercare = StrictCharField(required=False, allow_blank=True)
    suitableFor = StrictListField(
        source="suitable_for", child=StrictCharField(), required=False
    )
    isActive = serializers.BooleanField(source="is_active", required=False)
    sortOrder = StrictIntegerField(source="sort_order", min_value=0, required=False)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)
    updatedAt = serializers.DateTimeField(source="updated_at", read_only=True)

    class Meta:
        model = SalonService
        fields = [
            "id",
            "name",
            "description",
            "category",
            "priceType",
            "price",
            "priceFrom",
            "priceTo",
            "duration",
            "requirements",
            "aftercare",
            "suitableFor",
            "isActive",
            "sortOrder",
            "createdAt",
            "updatedAt",
        ]
        read_only_fields = ["id"]

    def validate(self, attrs):
        def current(field):
            if field in attrs:
                return attrs[field]
            return getattr(self.instance, field, None)

        low, high = current("price_from"), current("price_to")
        if low is not None and high is not None and low > high:
            raise serializers.ValidationError({"priceTo": "Must not be lower than priceFrom."})
        return attrs


class ServiceReorderSerializer(serializers.Serializer):
    serviceIds = StrictListField(child=StrictIntegerField(min_value=1), allow_empty=False)

    def validate_serviceIds(self, value):
        if len(set(value)) != len(value):
            raise serializers.ValidationError("Duplicate service ids.")
        return value


_TIME = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")


class TimeOfDayField(StrictCharField):
    """Local time as "HH:MM"; empty when not applicable."""

    default_error_messages = {"format": "Use the HH:MM format."}

    def to_internal_value(self, data):
        value = super().to_internal_value(data)
        if value and not _TIME.match(value):
            self.fail("format")
        return value


class BusinessHoursSerializer(serializers.ModelSerializer):
    dayOfWeek = serializers.ChoiceField(source="day_of_week", choices=BusinessHours.Day.choices)
    isOpen = serializers.BooleanField(source="is_open", default=True)
    openTime = TimeOfDayField(source="open_time", required=False, allow_blank=True, default="")
    closeTime = TimeOfDayField(source="close_time", required=False, allow_blank=True, default="")
    hasBreak = serializers.BooleanField(source="has_break", default=False)
    breakStartTime = TimeOfDayField(
        source="break_start_time", required=False, allow_blank=True, default=""
    )
    breakEndTime = TimeOfDayField(
        source="break_end_time", required=False, allow_blank=True, default=""
    )
    notes = StrictCharField(required=False, allow_blank=True, max_length=255, default="")

    class Meta:
        model = BusinessHours
        fields = [
            "id",
            "dayOfWeek",
            "isOpen",
            "openTime",
            "closeTime",
            "hasBreak",
            "breakStartTime",
            "breakEndTime",
            "notes",
        ]
        read_only_fields = ["id"]

    def validate(self, attrs):
        if not attrs["is_open"]:
            return attrs
        opens, closes = attrs["open_time"], attrs["close_time"]
        if not opens or not closes:
            raise serializers.ValidationError("An open day needs openTime and closeTime.")
        if opens >= closes:
            raise serializers.ValidationError({"closeTime": "Must be later than openTime."})
        if attrs["has_break"]:
            start, end = attrs["break_start_time"], attrs["break_end_time"]
            if not start or not end:
                raise serializers.ValidationError("A break needs breakStartTime and breakEndTime.")
            if not (opens <= start < end <= closes):
                raise serializers.ValidationError(
                    {"breakStartTime": "The break must lie within the opening hours."}
                )
        return attrs


class UpdateHoursSerializer(serializers.Serializer):
    businessHours = BusinessHoursSerializer(many=True, allow_empty=False)

    def validate_businessHours(self, value):
        days = [entry["day_of_week"] for entry in value]
        if len(set(days)) != len(days):
            raise serializers.ValidationError("Each weekday may appear only once.")
        return value
