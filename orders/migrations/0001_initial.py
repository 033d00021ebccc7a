import uuid

import django.core.validators
import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
        ("site_templates", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="Order",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("salon_name", models.CharField(max_length=200)),
                ("owner_name", models.CharField(blank=True, default="", max_length=150)),
                ("email", models.EmailField(max_length=254)),
                ("phone", models.CharField(blank=True, default="", max_length=50)),
                ("address", models.TextField(blank=True, default="")),
                ("domain", models.CharField(blank=True, default="", max_length=253)),
                ("domain_extension", models.CharField(blank=True, default="", max_length=20)),
                ("domain_price", models.DecimalField(blank=True, decimal_places=2, max_digits=10, null=True)),
                ("domain_user_price", models.DecimalField(blank=True, decimal_places=2, max_digits=10, null=True)),
                (
                    "total",
                    models.DecimalField(
                        decimal_places=2,
                        default=0,
                        max_digits=10,
                        validators=[django.core.validators.MinValueValidator(0)],
                    ),
                ),
                ("stripe_session_id", models.CharField(blank=True, db_index=True, default="", max_length=255)),
                ("payment_intent_id", models.CharField(blank=True, default="", max_length=255)),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("PENDING", "PENDING"),
                            ("PROCESSING", "PROCESSING"),
                            ("COMPLETED", "COMPLETED"),
                            ("CANCELLED", "CANCELLED"),
                            ("REFUNDED", "REFUNDED"),
                        ],
                        default="PENDING",
                        max_length=20,
                    ),
                ),
                (
                    "setup_step",
                    models.CharField(
                        choices=[
                            ("DOMAIN_SELECTION", "DOMAIN_SELECTION"),
                            ("BUSINESS_INFO", "BUSINESS_INFO"),
                            ("DESIGN_PREFERENCES", "DESIGN_PREFERENCES"),
                            ("CONTENT_EDITOR", "CONTENT_EDITOR"),
                            ("CONTENT_UPLOAD", "CONTENT_UPLOAD"),
                            ("PHOTOS_UPLOAD", "PHOTOS_UPLOAD"),
                            ("REVIEW_LAUNCH", "REVIEW_LAUNCH"),
                            ("COMPLETED", "COMPLETED"),
                        ],
                        default="DOMAIN_SELECTION",
                        max_length=30,
                    ),
                ),
                ("setup_completed", models.BooleanField(default=False)),
                ("completed_at", models.DateTimeField(blank=True, null=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "template",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="orders",
                        to="site_templates.template",
                    ),
                ),
                (
                    "user",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="orders",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "ordering": ["-created_at"],
            },
        ),
        migrations.CreateModel(
            name="SiteContent",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("about_text", models.TextField(blank=True, default="")),
                ("services", models.JSONField(blank=True, default=list)),
                ("photo_count", models.PositiveIntegerField(default=0)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "order",
                    models.OneToOneField(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="content",
                        to="orders.order",
                    ),
                ),
            ],
        ),
    ]
