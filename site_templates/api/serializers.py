"""Site templates API serializers.

Public storefront representation, admin representation with sales figures and
the admin write serializer. Features must be a list of strings.
"""

from rest_framework import serializers

from site_templates.models import Template


class TemplatePublicSerializer(serializers.ModelSerializer):
    previewUrl = serializers.URLField(source="preview_url", read_only=True)

    class Meta:
        model = Template
        fields = ["id", "name", "description", "category", "price", "features", "previewUrl"]


class TemplateAdminSerializer(serializers.ModelSerializer):
    """Admin view: everything plus order count and revenue (annotated)."""

    previewUrl = serializers.URLField(source="preview_url", required=False, allow_blank=True)
    orderCount = serializers.IntegerField(source="order_count", read_only=True, default=0)
    revenue = serializers.DecimalField(max_digits=12, decimal_places=2, read_only=True, default=0)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)
    updatedAt = serializers.DateTimeField(source="updated_at", read_only=True)

    class Meta:
        model = Template
        fields = [
            "id",
            "name",
            "description",
            "category",
            "price",
            "features",
            "previewUrl",
            "active",
            "orderCount",
            "revenue",
            "createdAt",
            "updatedAt",
        ]

    def validate_features(self, value):
        if not isinstance(value, list) or not all(isinstance(f, str) for f in value):
            raise serializers.ValidationError("Features must be a list of strings.")
        return value
