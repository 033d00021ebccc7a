"""Site templates API views.

- GET /api/templates/                    active templates (public)
- GET/POST /api/admin/templates/         all templates with sales figures
- GET/PATCH/DELETE /api/admin/templates/{id}/
- PATCH /api/admin/templates/{id}/toggle/  flip the active flag

Templates referenced by orders cannot be deleted; deactivate them instead.
"""

import logging

from django.db.models import Count, DecimalField, Sum, Value
from django.db.models.deletion import ProtectedError
from django.db.models.functions import Coalesce
from rest_framework import generics, status
from rest_framework.exceptions import ValidationError
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from common.api.permissions import IsAdminRole
from site_templates.models import Template
from .serializers import TemplateAdminSerializer, TemplatePublicSerializer

logger = logging.getLogger(__name__)


def _with_sales(qs):
    return qs.annotate(
        order_count=Count("orders", distinct=True),
        revenue=Coalesce(
            Sum("orders__total"),
            Value(0),
            output_field=DecimalField(max_digits=12, decimal_places=2),
        ),
    )


class PublicTemplateListAPIView(generics.ListAPIView):
    """GET: active templates, optionally filtered by `category`."""

    serializer_class = TemplatePublicSerializer
    authentication_classes = []
    permission_classes = [AllowAny]

    def get_queryset(self):
        qs = Template.objects.filter(active=True)
        category = self.request.query_params.get("category")
        if category:
            qs = qs.filter(category=category.upper())
        return qs


class AdminTemplateListCreateAPIView(generics.ListCreateAPIView):
    serializer_class = TemplateAdminSerializer
    permission_classes = [IsAuthenticated, IsAdminRole]

    def get_queryset(self):
        return _with_sales(Template.objects.all())


class AdminTemplateDetailAPIView(generics.RetrieveUpdateDestroyAPIView):
    serializer_class = TemplateAdminSerializer
    permission_classes = [IsAuthenticated, IsAdminRole]

    def get_queryset(self):
        return _with_sales(Template.objects.all())

    def update(self, request, *args, **kwargs):
        """Force partial updates via PATCH semantics."""
        kwargs["partial"] = True
        return super().update(request, *args, **kwargs)

    def destroy(self, request, *args, **kwargs):
        instance = self.get_object()
        try:
            instance.delete()
        except ProtectedError:
            raise ValidationError(
                {"template": "Template has orders; deactivate it instead of deleting."}
            )
        logger.info("Template %s deleted by admin %s", instance.pk, request.user.pk)
        return Response(status=status.HTTP_204_NO_CONTENT)


class AdminTemplateToggleAPIView(APIView):
    """PATCH /api/admin/templates/{id}/toggle/ -> template with flipped `active`."""

    permission_classes = [IsAuthenticated, IsAdminRole]

    def patch(self, request, pk: int):
        template = generics.get_object_or_404(_with_sales(Template.objects.all()), pk=pk)
        template.active = not template.active
        template.save(update_fields=["active", "updated_at"])
        return Response(TemplateAdminSerializer(template).data, status=status.HTTP_200_OK)
