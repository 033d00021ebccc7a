"""Photos app models.

A Photo is one image uploaded during the content step of the setup wizard.
The optimized image and its thumbnail live in the default storage under
`photos/` and `thumbnails/`; the row keeps their public URLs.
"""

from django.conf import settings
from django.db import models


class Photo(models.Model):
    """Uploaded image metadata. The id is chosen by the uploading client."""

    class UploadStatus(models.TextChoices):
        UPLOADING = "UPLOADING", "UPLOADING"
        PROCESSING = "PROCESSING", "PROCESSING"
        COMPLETED = "COMPLETED", "COMPLETED"
        FAILED = "FAILED", "FAILED"

    id = models.CharField(max_length=64, primary_key=True)
    order = models.ForeignKey(
        "orders.Order",
        on_delete=models.CASCADE,
        related_name="photos",
        null=True,
        blank=True,
    )
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        related_name="photos",
        null=True,
        blank=True,
    )

    filename = models.CharField(max_length=255)
    stored_name = models.CharField(max_length=255)
    original_url = models.CharField(max_length=500)
    thumbnail_url = models.CharField(max_length=500, null=True, blank=True)
    size = models.PositiveIntegerField()
    mime_type = models.CharField(max_length=50)
    width = models.PositiveIntegerField(null=True, blank=True)
    height = models.PositiveIntegerField(null=True, blank=True)
    alt = models.CharField(max_length=255, blank=True, default="")
    sort_order = models.PositiveIntegerField(default=0)
    upload_status = models.CharField(
        max_length=20, choices=UploadStatus.choices, default=UploadStatus.UPLOADING
    )
    upload_error = models.TextField(blank=True, default="")

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["sort_order", "created_at"]

    def __str__(self) -> str:
        return f"Photo<{self.id} {self.filename}>"
