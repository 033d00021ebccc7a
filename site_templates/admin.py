from django.contrib import admin

from .models import Template


@admin.register(Template)
class TemplateAdmin(admin.ModelAdmin):
    list_display = ("id", "name", "category", "price", "active", "updated_at")
    list_filter = ("category", "active")
    search_fields = ("name", "description")
    ordering = ("name", "id")
    readonly_fields = ("created_at", "updated_at")
