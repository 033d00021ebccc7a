"""Photos API serializers."""

from rest_framework import serializers

from common.fields import StrictCharField, StrictIntegerField, StrictListField
from photos.ingestion import upload_problem
from photos.models import Photo


class PhotoSerializer(serializers.ModelSerializer):
    originalUrl = serializers.CharField(source="original_url")
    thumbnailUrl = serializers.CharField(source="thumbnail_url", allow_null=True)
    mimeType = serializers.CharField(source="mime_type")
    sortOrder = serializers.IntegerField(source="sort_order")
    uploadStatus = serializers.CharField(source="upload_status")
    uploadError = serializers.CharField(source="upload_error")
    createdAt = serializers.DateTimeField(source="created_at")
    orderId = serializers.UUIDField(source="order_id", allow_null=True)
    userId = serializers.IntegerField(source="user_id", allow_null=True)

    class Meta:
        model = Photo
        fields = [
            "id",
            "filename",
            "originalUrl",
            "thumbnailUrl",
            "size",
            "mimeType",
            "width",
            "height",
            "alt",
            "sortOrder",
            "uploadStatus",
            "uploadError",
            "createdAt",
            "orderId",
            "userId",
        ]


class PhotoUploadSerializer(serializers.Serializer):
    """Multipart upload form: `file`, `photoId`, optional `orderId`.

    The file is rejected here, before any decoding or disk write, when it is
    too large or not a JPEG/PNG/WebP image.
    """

    file = serializers.FileField()
    photoId = serializers.CharField(max_length=64)
    orderId = serializers.UUIDField(required=False, allow_null=True)

    def validate_file(self, value):
        problem = upload_problem(value)
        if problem:
            raise serializers.ValidationError(problem)
        return value

    def validate_photoId(self, value):
        if Photo.objects.filter(pk=value).exists():
            raise serializers.ValidationError("A photo with this id already exists.")
        return value


class PhotoUpdateSerializer(serializers.Serializer):
    alt = StrictCharField(required=False, allow_blank=True, max_length=255)
    sortOrder = StrictIntegerField(required=False, min_value=0)


class BulkPhotoSerializer(serializers.Serializer):
    """`{action, photoIds, data}` for reorder, delete and update_alt.

    - reorder: `data` is a list of non-negative sort orders, one per id
    - update_alt: `data` is `{"alt": "<text>"}`
    - delete: `data` is ignored
    """

    ACTIONS = ("reorder", "delete", "update_alt")

    action = serializers.ChoiceField(choices=ACTIONS)
    photoIds = StrictListField(child=StrictCharField(max_length=64), min_length=1)
    data = serializers.JSONField(required=False, allow_null=True)

    def validate(self, attrs):
        action = attrs["action"]
        data = attrs.get("data")

        if action == "reorder":
            valid = (
                isinstance(data, list)
                and len(data) == len(attrs["photoIds"])
                and all(isinstance(v, int) and not isinstance(v, bool) and v >= 0 for v in data)
            )
            if not valid:
                raise serializers.ValidationError({"data": ["Invalid reorder data."]})

        if action == "update_alt":
            if not isinstance(data, dict) or not isinstance(data.get("alt"), str):
                raise serializers.ValidationError({"data": ["Alt text is required."]})

        return attrs
