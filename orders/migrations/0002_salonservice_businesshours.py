import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    dependencies = [
        ("orders", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="SalonService",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=150)),
                ("description", models.TextField(blank=True, default="")),
                (
                    "category",
                    models.CharField(
                        choices=[
                            ("CUTS", "CUTS"),
                            ("COLOR", "COLOR"),
                            ("TREATMENTS", "TREATMENTS"),
                            ("STYLING", "STYLING"),
                            ("PERMS", "PERMS"),
                            ("EXTENSIONS", "EXTENSIONS"),
                            ("NAILS", "NAILS"),
                            ("EYEBROWS", "EYEBROWS"),
                            ("FACIAL", "FACIAL"),
                            ("MASSAGE", "MASSAGE"),
                            ("OTHER", "OTHER"),
                        ],
                        max_length=20,
                    ),
                ),
                (
                    "price_type",
                    models.CharField(
                        choices=[
                            ("FIXED", "FIXED"),
                            ("FROM", "FROM"),
                            ("RANGE", "RANGE"),
                            ("CONSULTATION", "CONSULTATION"),
                        ],
                        default="FIXED",
                        max_length=20,
                    ),
                ),
                ("price", models.DecimalField(blank=True, decimal_places=2, max_digits=10, null=True)),
                ("price_from", models.DecimalField(blank=True, decimal_places=2, max_digits=10, null=True)),
                ("price_to", models.DecimalField(blank=True, decimal_places=2, max_digits=10, null=True)),
                ("duration", models.PositiveIntegerField(blank=True, help_text="minutes", null=True)),
                ("requirements", models.TextField(blank=True, default="")),
                ("aftercare", models.TextField(blank=True, default="")),
                ("suitable_for", models.JSONField(blank=True, default=list)),
                ("is_active", models.BooleanField(default=True)),
                ("sort_order", models.PositiveIntegerField(default=0)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "content",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="salon_services",
                        to="orders.sitecontent",
                    ),
                ),
            ],
            options={
                "ordering": ["sort_order", "id"],
            },
        ),
        migrations.CreateModel(
            name="BusinessHours",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                (
                    "day_of_week",
                    models.CharField(
                        choices=[
                            ("MONDAY", "MONDAY"),
                            ("TUESDAY", "TUESDAY"),
                            ("WEDNESDAY", "WEDNESDAY"),
                            ("THURSDAY", "THURSDAY"),
                            ("FRIDAY", "FRIDAY"),
                            ("SATURDAY", "SATURDAY"),
                            ("SUNDAY", "SUNDAY"),
                        ],
                        max_length=10,
                    ),
                ),
                ("is_open", models.BooleanField(default=True)),
                ("open_time", models.CharField(blank=True, default="", max_length=5)),
                ("close_time", models.CharField(blank=True, default="", max_length=5)),
                ("has_break", models.BooleanField(default=False)),
                ("break_start_time", models.CharField(blank=True, default="", max_length=5)),
                ("break_end_time", models.CharField(blank=True, default="", max_length=5)),
                ("notes", models.CharField(blank=True, default="", max_length=255)),
                (
                    "content",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="business_hours",
                        to="orders.sitecontent",
                    ),
                ),
            ],
            options={
                "verbose_name_plural": "business hours",
            },
        ),
        migrations.AddConstraint(
            model_name="businesshours",
            constraint=models.UniqueConstraint(fields=("content", "day_of_week"), name="unique_hours_per_day"),
        ),
    ]
