from django.contrib import admin

from .models import Profile


@admin.register(Profile)
class ProfileAdmin(admin.ModelAdmin):
    """
    Salon owners and back-office staff:
    - role and onboarding state at a glance
    - filter by role, business type and onboarding
    - role is editable from the list
    """
    list_display = ("id", "user", "name", "salon_name", "business_type", "role", "has_completed_onboarding")
    list_editable = ("role",)
    list_select_related = ("user",)
    search_fields = ("user__email", "name", "salon_name", "city")
    list_filter = ("role", "business_type", "has_completed_onboarding", "created_at")
    ordering = ("-created_at", "-id")
    autocomplete_fields = ("user",)
    readonly_fields = ("created_at",)
