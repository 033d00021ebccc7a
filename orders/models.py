"""Orders app models.

An Order is one salon's purchase of a templated website together with the
state of its guided setup wizard. SiteContent stores what the client wrote in
the content step of the wizard.

`status` and `setup_step` are independent columns: the client wizard advances
`setup_step`, the back-office overrides `status`, and neither write checks the
other. Writes use `update_fields`, so two concurrent writers only overwrite the
columns they touch.
"""

import uuid

from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models


class Order(models.Model):
    """A website purchase and its provisioning workflow state."""

    class Status(models.TextChoices):
        PENDING = "PENDING", "PENDING"
        PROCESSING = "PROCESSING", "PROCESSING"
        COMPLETED = "COMPLETED", "COMPLETED"
        CANCELLED = "CANCELLED", "CANCELLED"
        REFUNDED = "REFUNDED", "REFUNDED"

    class SetupStep(models.TextChoices):
        DOMAIN_SELECTION = "DOMAIN_SELECTION", "DOMAIN_SELECTION"
        BUSINESS_INFO = "BUSINESS_INFO", "BUSINESS_INFO"
        DESIGN_PREFERENCES = "DESIGN_PREFERENCES", "DESIGN_PREFERENCES"
        CONTENT_EDITOR = "CONTENT_EDITOR", "CONTENT_EDITOR"
        CONTENT_UPLOAD = "CONTENT_UPLOAD", "CONTENT_UPLOAD"
        PHOTOS_UPLOAD = "PHOTOS_UPLOAD", "PHOTOS_UPLOAD"
        REVIEW_LAUNCH = "REVIEW_LAUNCH", "REVIEW_LAUNCH"
        COMPLETED = "COMPLETED", "COMPLETED"

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        related_name="orders",
        null=True,
        blank=True,
    )
    template = models.ForeignKey(
        "site_templates.Template",
        on_delete=models.PROTECT,
        related_name="orders",
        null=True,
        blank=True,
    )

    salon_name = models.CharField(max_length=200)
    owner_name = models.CharField(max_length=150, blank=True, default="")
    email = models.EmailField()
    phone = models.CharField(max_length=50, blank=True, default="")
    address = models.TextField(blank=True, default="")

    domain = models.CharField(max_length=253, blank=True, default="")
    domain_extension = models.CharField(max_length=20, blank=True, default="")
    domain_price = models.DecimalField(max_digits=10, decimal_places=2, null=True, blank=True)
    domain_user_price = models.DecimalField(max_digits=10, decimal_places=2, null=True, blank=True)

    total = models.DecimalField(
        max_digits=10, decimal_places=2, default=0, validators=[MinValueValidator(0)]
    )
    stripe_session_id = models.CharField(max_length=255, blank=True, default="", db_index=True)
    payment_intent_id = models.CharField(max_length=255, blank=True, default="")

    status = models.CharField(max_length=20, choices=Status.choices, default=Status.PENDING)
    setup_step = models.CharField(
        max_length=30, choices=SetupStep.choices, default=SetupStep.DOMAIN_SELECTION
    )
    setup_completed = models.BooleanField(default=False)
    completed_at = models.DateTimeField(null=True, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]

    def __str__(self) -> str:
        """Readable representation for admin and debugging."""
        return f"Order<{self.id} {self.salon_name} {self.status}/{self.setup_step}>"


class SiteContent(models.Model):
    """Texts and service list entered in the content step of the wizard."""

    order = models.OneToOneField(Order, on_delete=models.CASCADE, related_name="content")
    about_text = models.TextField(blank=True, default="")
    services = models.JSONField(default=list, blank=True)
    photo_count = models.PositiveIntegerField(default=0)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self) -> str:
        return f"SiteContent<{self.order_id}>"


class SalonService(models.Model):
    """One entry of the salon's service menu shown on the generated website."""

    class Category(models.TextChoices):
        CUTS = "CUTS", "CUTS"
        COLOR = "COLOR", "COLOR"
        TREATMENTS = "TREATMENTS", "TREATMENTS"
        STYLING = "STYLING", "STYLING"
        PERMS = "PERMS", "PERMS"
        EXTENSIONS = "EXTENSIONS", "EXTENSIONS"
        NAILS = "NAILS", "NAILS"
        EYEBROWS = "EYEBROWS", "EYEBROWS"
        FACIAL = "FACIAL", "FACIAL"
        MASSAGE = "MASSAGE", "MASSAGE"
        OTHER = "OTHER", "OTHER"

    class PriceType(models.TextChoices):
        FIXED = "FIXED", "FIXED"
        FROM = "FROM", "FROM"
        RANGE = "RANGE", "RANGE"
        CONSULTATION = "CONSULTATION", "CONSULTATION"

    content = models.ForeignKey(SiteContent, on_delete=models.CASCADE, related_name="salon_services")
    name = models.CharField(max_length=150)
    description = models.TextField(blank=True, default="")
    category = models.CharField(max_length=20, choices=Category.choices)
    price_type = models.CharField(max_length=20, choices=PriceType.choices, default=PriceType.FIXED)
    price = models.DecimalField(max_digits=10, decimal_places=2, null=True, blank=True)
    price_from = models.DecimalField(max_digits=10, decimal_places=2, null=True, blank=True)
    price_to = models.DecimalField(max_digits=10, decimal_places=2, null=True, blank=True)
    duration = models.PositiveIntegerField(null=True, blank=True, help_text="minutes")
    requirements = models.TextField(blank=True, default="")
    aftercare = models.TextField(blank=True, default="")
    suitable_for = models.JSONField(default=list, blank=True)
    is_active = models.BooleanField(default=True)
    sort_order = models.PositiveIntegerField(default=0)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["sort_order", "id"]

    def __str__(self) -> str:
        return f"SalonService<{self.content_id} {self.name}>"


class BusinessHours(models.Model):
    """Opening hours of one weekday; times are local "HH:MM" strings."""

    class Day(models.TextChoices):
        MONDAY = "MONDAY", "MONDAY"
        TUESDAY = "TUESDAY", "TUESDAY"
        WEDNESDAY = "WEDNESDAY", "WEDNESDAY"
        THURSDAY = "THURSDAY", "THURSDAY"
        FRIDAY = "FRIDAY", "FRIDAY"
        SATURDAY = "SATURDAY", "SATURDAY"
        SUNDAY = "SUNDAY", "SUNDAY"

    content = models.ForeignKey(SiteContent, on_delete=models.CASCADE, related_name="business_hours")
    day_of_week = models.CharField(max_length=10, choices=Day.choices)
    is_open = models.BooleanField(default=True)
    open_time = models.CharField(max_length=5, blank=True, default="")
    close_time = models.CharField(max_length=5, blank=True, default="")
    has_break = models.BooleanField(default=False)
    break_start_time = models.CharField(max_length=5, blank=True, default="")
    break_end_time = models.CharField(max_length=5, blank=True, default="")
    notes = models.CharField(max_length=255, blank=True, default="")

    class Meta:
        verbose_name_plural = "business hours"
        constraints = [
            models.UniqueConstraint(fields=["content", "day_of_week"], name="unique_hours_per_day"),
        ]

    def __str__(self) -> str:
        return f"BusinessHours<{self.content_id} {self.day_of_week}>"
