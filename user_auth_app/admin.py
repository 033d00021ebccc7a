from django.contrib import admin
from django.contrib.auth import get_user_model
from django.contrib.auth.admin import UserAdmin as DjangoUserAdmin

from orders.models import Order

User = get_user_model()

try:
    admin.site.unregister(User)
except admin.sites.NotRegistered:
    pass


class OrderInline(admin.TabularInline):
    model = Order
    fields = ("salon_name", "status", "setup_step", "total", "created_at")
    readonly_fields = fields
    extra = 0
    can_delete = False
    show_change_link = True

    def has_add_permission(self, request, obj=None):
        return False


@admin.register(User)
class UserAdmin(DjangoUserAdmin):
    """
    User list with id, profile role, salon and admin flags.
    """
    inlines = [OrderInline]
    list_display = (
        "id",
        "email",
        "profile_role_display",
        "salon_display",
        "is_staff",
        "is_active",
        "date_joined",
        "last_login",
    )
    list_select_related = ("profile",)
    ordering = ("-date_joined", "-id")
    search_fields = ("username", "email", "profile__salon_name")
    list_filter = ("is_staff", "is_active", "profile__role")

    def profile_role_display(self, obj):
        prof = getattr(obj, "profile", None)
        return getattr(prof, "role", "") or ""
    profile_role_display.short_description = "role"
    profile_role_display.admin_order_field = "profile__role"

    def salon_display(self, obj):
        prof = getattr(obj, "profile", None)
        return getattr(prof, "salon_name", "") or ""
    salon_display.short_description = "salon"
