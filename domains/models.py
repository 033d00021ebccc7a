from decimal import ROUND_HALF_UP, Decimal

from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models


class DomainPricing(models.Model):
    """Yearly price of a domain extension as offered in the checkout."""

    extension = models.CharField(max_length=20, unique=True)
    price = models.DecimalField(max_digits=8, decimal_places=2, validators=[MinValueValidator(0)])
    discount = models.PositiveSmallIntegerField(
        default=0, validators=[MinValueValidator(0), MaxValueValidator(100)]
    )
    popular = models.BooleanField(default=False)
    active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-popular", "extension"]
        verbose_name_plural = "domain pricing"

    def __str__(self) -> str:
        return f"{self.extension} {self.price}"

    @property
    def final_price(self) -> Decimal:
        value = Decimal(self.price) * (100 - self.discount) / 100
        return value.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
