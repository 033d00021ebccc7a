"""Orders API permissions.

Clients only ever see their own orders. Ownership is resolved in the views by
filtering on the requesting user, so an order of another account is reported
as missing (404) rather than forbidden.
"""

from rest_framework.permissions import BasePermission

from common.api.permissions import is_admin_user


class CanReadUserOrders(BasePermission):
    """`?userId=` may only name the caller unless the caller is an admin."""

    message = "You may only access your own orders."

    def has_permission(self, request, view):
        user = request.user
        if not user or not user.is_authenticated:
            return False
        requested = request.query_params.get("userId")
        if not requested or requested == str(user.id):
            return True
        return is_admin_user(user)

