from django.contrib import admin
from django.utils.html import format_html

from .models import Photo


@admin.register(Photo)
class PhotoAdmin(admin.ModelAdmin):
    list_display = ("id", "preview", "filename", "order", "user", "size", "upload_status", "created_at")
    list_select_related = ("order", "user")
    list_filter = ("upload_status", "mime_type", "created_at")
    search_fields = ("id", "filename", "alt", "order__salon_name", "user__email")
    readonly_fields = (
        "stored_name",
        "original_url",
        "thumbnail_url",
        "size",
        "mime_type",
        "width",
        "height",
        "created_at",
        "updated_at",
    )

    def preview(self, obj):
        if not obj.thumbnail_url:
            return ""
        return format_html('<img src="{}" style="height:40px;border-radius:4px;">', obj.thumbnail_url)
