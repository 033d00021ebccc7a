"""Permissions shared by several apps."""

from rest_framework.permissions import BasePermission


def is_admin_user(user) -> bool:
    """True for staff users and users whose profile role is ADMIN."""
    if not user or not user.is_authenticated:
        return False
    if user.is_staff:
        return True
    prof = getattr(user, "profile", None)
    return getattr(prof, "role", "") == "ADMIN"


class IsAdminRole(BasePermission):
    """Allows access only to back-office administrators."""

    message = "Only administrators may access this resource."

    def has_permission(self, request, view):
        return is_admin_user(request.user)
