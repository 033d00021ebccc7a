"""Site templates app models.

A Template is a purchasable website design. Orders reference the template they
were bought with; a template's revenue is the sum of those orders' totals.
"""

from django.db import models
from django.core.validators import MinValueValidator


class Template(models.Model):
    """A website design offered in the storefront."""

    class Category(models.TextChoices):
        BASIC = "BASIC", "BASIC"
        PREMIUM = "PREMIUM", "PREMIUM"
        ENTERPRISE = "ENTERPRISE", "ENTERPRISE"

    name = models.CharField(max_length=150)
    description = models.TextField(blank=True, default="")
    category = models.CharField(max_length=20, choices=Category.choices, default=Category.BASIC)
    price = models.DecimalField(
        max_digits=10, decimal_places=2, validators=[MinValueValidator(0)]
    )
    features = models.JSONField(default=list, blank=True)
    preview_url = models.URLField(blank=True, default="")
    active = models.BooleanField(default=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["name", "id"]

    def __str__(self):
        return f"{self.name} ({self.category})"
