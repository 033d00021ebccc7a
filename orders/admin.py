from django.contrib import admin
from django.utils.html import format_html

from .models import BusinessHours, Order, SalonService, SiteContent
from .workflow import calculate_progress


class SiteContentInline(admin.StackedInline):
    model = SiteContent
    extra = 0
    readonly_fields = ("updated_at",)


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    """
    Order management:
    - List: salon, status (badge), setup step, progress, owner, total, created
    - Filter: status, setup step, created (date hierarchy)
    - Search: salon, owner, email, domain
    - Payment references are read-only
    """

    list_display = (
        "id",
        "salon_name",
        "status_badge",
        "setup_step",
        "progress",
        "user_email",
        "total",
        "created_at",
    )
    list_select_related = ("user", "template")
    list_filter = ("status", "setup_step", "created_at")
    date_hierarchy = "created_at"
    ordering = ("-created_at",)
    search_fields = ("salon_name", "owner_name", "email", "domain")
    readonly_fields = ("id", "stripe_session_id", "payment_intent_id", "created_at", "updated_at")
    inlines = [SiteContentInline]

    def status_badge(self, obj):
        color = {
            "PENDING": "#f59e0b",
            "PROCESSING": "#0ea5e9",
            "COMPLETED": "#22c55e",
            "CANCELLED": "#ef4444",
            "REFUNDED": "#6b7280",
        }.get(obj.status, "#9ca3af")
        return format_html(
            '<span style="display:inline-block;padding:2px 8px;border-radius:999px;'
            'font-size:12px;font-weight:600;color:#fff;background:{};">{}</span>',
            color,
            obj.status,
        )
    status_badge.short_description = "status"
    status_badge.admin_order_field = "status"

    def progress(self, obj):
        return f"{calculate_progress(obj.status, obj.setup_step)}%"

    def user_email(self, obj):
        return obj.user.email if obj.user_id else ""
    user_email.short_description = "user"


class SalonServiceInline(admin.TabularInline):
    model = SalonService
    extra = 0
    fields = ("name", "category", "price_type", "price", "price_from", "price_to", "duration", "is_active", "sort_order")


class BusinessHoursInline(admin.TabularInline):
    model = BusinessHours
    extra = 0
    max_num = 7


@admin.register(SiteContent)
class SiteContentAdmin(admin.ModelAdmin):
    """Service menu and opening hours of an order's website."""

    list_display = ("order", "photo_count", "updated_at")
    list_select_related = ("order",)
    search_fields = ("order__salon_name", "order__email")
    readonly_fields = ("order", "updated_at")
    inlines = [SalonServiceInline, BusinessHoursInline]
