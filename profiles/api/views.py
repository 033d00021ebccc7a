"""Profiles API views.

Provides the caller's own profile (read and partial update) and the
back-office user management endpoints: list with search and role filter,
detail with the user's orders, activation/role changes and deletion.
"""

import logging

from django.contrib.auth import get_user_model
from django.db.models import Count, Q
from rest_framework import generics, status
from rest_framework.exceptions import PermissionDenied, ValidationError
from rest_framework.parsers import FormParser, JSONParser, MultiPartParser
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from common.api.permissions import IsAdminRole
from common.pagination import AdminPagination
from ..models import Profile
from .serializers import (
    AdminUserDetailSerializer,
    AdminUserPatchSerializer,
    AdminUserSerializer,
    ProfileDetailSerializer,
    ProfilePatchSerializer,
)

logger = logging.getLogger(__name__)

User = get_user_model()


class ProfileView(generics.RetrieveUpdateAPIView):
    """
    API endpoint for the authenticated user's own profile.

    - GET `/api/profile/` returns the caller's profile.
    - PATCH `/api/profile/` updates only the fields provided.

    If the caller has no profile yet (e.g. accounts created from the Django
    admin), one is lazily created with the CLIENT role.
    """

    permission_classes = [IsAuthenticated]
    parser_classes = (JSONParser, FormParser, MultiPartParser)

    def get_serializer_class(self):
        """Use the patch serializer for writes; the detail serializer otherwise."""
        if self.request.method in ("PATCH", "PUT"):
            return ProfilePatchSerializer
        return ProfileDetailSerializer

    def get_object(self):
        obj, _ = Profile.objects.select_related("user").get_or_create(user=self.request.user)
        return obj

    def update(self, request, *args, **kwargs):
        """Force partial updates and return the full profile."""
        instance = self.get_object()
        ser = ProfilePatchSerializer(instance, data=request.data, partial=True)
        ser.is_valid(raise_exception=True)
        ser.save()
        return Response(ProfileDetailSerializer(instance).data, status=status.HTTP_200_OK)


def _admin_users_queryset():
    return (
        User.objects.select_related("profile")
        .annotate(order_count=Count("orders", distinct=True))
        .order_by("-date_joined", "-id")
    )


class AdminUserListAPIView(generics.ListAPIView):
    """GET /api/admin/users/?search=&role=&active= -> paginated user list."""

    serializer_class = AdminUserSerializer
    permission_classes = [IsAuthenticated, IsAdminRole]
    pagination_class = AdminPagination

    def get_queryset(self):
        qs = _admin_users_queryset()
        params = self.request.query_params

        search = (params.get("search") or "").strip()
        if search:
            qs = qs.filter(
                Q(email__icontains=search)
                | Q(profile__name__icontains=search)
                | Q(profile__salon_name__icontains=search)
            )

        role = params.get("role")
        if role:
            if role not in Profile.Role.values:
                raise ValidationError({"role": f"Allowed values: {', '.join(Profile.Role.values)}."})
            qs = qs.filter(profile__role=role)

        active = params.get("active")
        if active in ("true", "false"):
            qs = qs.filter(is_active=(active == "true"))
        return qs


class AdminUserDetailAPIView(generics.RetrieveUpdateDestroyAPIView):
    """GET detail with orders, PATCH activation/role, DELETE account."""

    permission_classes = [IsAuthenticated, IsAdminRole]
    serializer_class = AdminUserDetailSerializer

    def get_queryset(self):
        return _admin_users_queryset().prefetch_related("orders")

    def update(self, request, *args, **kwargs):
        instance = self.get_object()
        ser = AdminUserPatchSerializer(instance, data=request.data, partial=True)
        ser.is_valid(raise_exception=True)
        ser.save()
        logger.info("User %s updated by admin %s: %s", instance.pk, request.user.pk, dict(ser.validated_data))
        return Response(AdminUserDetailSerializer(self.get_object()).data, status=status.HTTP_200_OK)

    def destroy(self, request, *args, **kwargs):
        instance = self.get_object()
        if instance.pk == request.user.pk:
            raise PermissionDenied("Administrators cannot delete their own account.")
        self.perform_destroy(instance)
        logger.info("User %s deleted by admin %s", instance.pk, request.user.pk)
        return Response(status=status.HTTP_204_NO_CONTENT)
