from django.contrib import admin

from .models import DomainPricing


@admin.register(DomainPricing)
class DomainPricingAdmin(admin.ModelAdmin):
    list_display = ("extension", "price", "discount", "final_price", "popular", "active")
    list_editable = ("price", "discount", "popular", "active")
    list_filter = ("active", "popular")
    search_fields = ("extension",)
