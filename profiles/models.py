"""Profiles app models.

Defines the Profile model that extends the base user with the account role
(client or admin) and the salon data collected during checkout and onboarding.
String fields default to empty strings to avoid nulls in API responses.
"""

from django.conf import settings
from django.db import models


class Profile(models.Model):
    """
    Profile for a single user.

    A profile is created at most once per user (OneToOne relationship). The
    role decides between the client dashboard and the admin back-office.
    """

    class Role(models.TextChoices):
        CLIENT = "CLIENT", "CLIENT"
        ADMIN = "ADMIN", "ADMIN"

    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="profile",
    )
    role = models.CharField(max_length=10, choices=Role.choices, default=Role.CLIENT)
    name = models.CharField(max_length=150, blank=True, default="")
    salon_name = models.CharField(max_length=200, blank=True, default="")
    phone = models.CharField(max_length=50, blank=True, default="")
    city = models.CharField(max_length=100, blank=True, default="")
    business_type = models.CharField(max_length=50, blank=True, default="SALON")
    has_completed_onboarding = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)

    @property
    def is_admin(self) -> bool:
        return self.role == self.Role.ADMIN

    def __str__(self):
        """Readable representation for admin and debugging."""
        return f"Profile<{self.user_id}:{self.user.email} {self.role}>"
