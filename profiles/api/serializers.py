"""Profiles API serializers.

Contains serializers for:
- reading and partially updating the caller's own profile,
- the admin user list/detail representation,
- the admin user patch payload (activation and role).

The API speaks camelCase; model fields are mapped with `source=`.
"""

from django.contrib.auth import get_user_model
from rest_framework import serializers

from orders.models import Order
from ..models import Profile

User = get_user_model()


class ProfileDetailSerializer(serializers.ModelSerializer):
    """Own profile, including the account email and role."""

    userId = serializers.IntegerField(source="user_id", read_only=True)
    email = serializers.EmailField(source="user.email", read_only=True)
    salonName = serializers.CharField(source="salon_name", read_only=True)
    businessType = serializers.CharField(source="business_type", read_only=True)
    hasCompletedOnboarding = serializers.BooleanField(source="has_completed_onboarding", read_only=True)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)

    class Meta:
        model = Profile
        fields = [
            "userId",
            "email",
            "role",
            "name",
            "salonName",
            "phone",
            "city",
            "businessType",
            "hasCompletedOnboarding",
            "createdAt",
        ]


class ProfilePatchSerializer(serializers.ModelSerializer):
    """Fields a client may change on their own profile. Role is not writable."""

    salonName = serializers.CharField(source="salon_name", max_length=200, required=False, allow_blank=True)
    businessType = serializers.CharField(source="business_type", max_length=50, required=False, allow_blank=True)
    hasCompletedOnboarding = serializers.BooleanField(source="has_completed_onboarding", required=False)

    class Meta:
        model = Profile
        fields = ["name", "salonName", "phone", "city", "businessType", "hasCompletedOnboarding"]
        extra_kwargs = {
            "name": {"required": False},
            "phone": {"required": False},
            "city": {"required": False},
        }


class AdminUserSerializer(serializers.ModelSerializer):
    """One row of the back-office user list."""

    name = serializers.CharField(source="profile.name", default="", read_only=True)
    role = serializers.CharField(source="profile.role", default=Profile.Role.CLIENT, read_only=True)
    salonName = serializers.CharField(source="profile.salon_name", default="", read_only=True)
    phone = serializers.CharField(source="profile.phone", default="", read_only=True)
    businessType = serializers.CharField(source="profile.business_type", default="", read_only=True)
    hasCompletedOnboarding = serializers.BooleanField(
        source="profile.has_completed_onboarding", default=False, read_only=True
    )
    isActive = serializers.BooleanField(source="is_active", read_only=True)
    lastLogin = serializers.DateTimeField(source="last_login", read_only=True)
    createdAt = serializers.DateTimeField(source="date_joined", read_only=True)
    orderCount = serializers.IntegerField(source="order_count", default=0, read_only=True)

    class Meta:
        model = User
        fields = [
            "id",
            "email",
            "name",
            "role",
            "salonName",
            "phone",
            "businessType",
            "hasCompletedOnboarding",
            "isActive",
            "lastLogin",
            "createdAt",
            "orderCount",
        ]


class UserOrderSummarySerializer(serializers.ModelSerializer):
    salonName = serializers.CharField(source="salon_name")
    setupStep = serializers.CharField(source="setup_step")
    createdAt = serializers.DateTimeField(source="created_at")

    class Meta:
        model = Order
        fields = ["id", "salonName", "status", "setupStep", "total", "createdAt"]


class AdminUserDetailSerializer(AdminUserSerializer):
    orders = UserOrderSummarySerializer(many=True, read_only=True)

    class Meta(AdminUserSerializer.Meta):
        fields = AdminUserSerializer.Meta.fields + ["orders"]


class AdminUserPatchSerializer(serializers.Serializer):
    """Admin changes to an account: activation flag and role."""

    isActive = serializers.BooleanField(required=False)
    role = serializers.ChoiceField(choices=Profile.Role.choices, required=False)

    def update(self, instance, validated_data):
        if "isActive" in validated_data:
            instance.is_active = validated_data["isActive"]
            instance.save(update_fields=["is_active"])
        if "role" in validated_data:
            prof, _ = Profile.objects.get_or_create(user=instance)
            prof.role = validated_data["role"]
            prof.save(update_fields=["role"])
        return instance
