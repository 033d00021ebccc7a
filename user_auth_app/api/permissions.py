"""Auth API permissions.

Registration can be switched off from the admin settings page
(`allowRegistrations`); login is always open.
"""

from rest_framework.permissions import AllowAny, BasePermission

from common.site_settings import load_site_settings


class RegistrationOpen(BasePermission):
    """Allow anyone while registrations are enabled in the site settings."""

    message = "Registrations are currently closed."

    def has_permission(self, request, view):
        return bool(load_site_settings().get("allowRegistrations", True))


class AllowedAnyLogin(AllowAny):
    """Explicit alias for login endpoints (semantics: allow any)."""
    pass
