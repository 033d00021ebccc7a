"""Orders API views.

Client side: the setup wizard steps (domain, content), the service menu and
opening hours of the content editor, the current order lookup, the dashboard
feeds (projects, stats, recent orders, payments, notifications) and the
confirmation email. Admin side: order list/detail/delete, CSV export and the
manual status override.

Client endpoints look orders up through the caller's own queryset, so foreign
orders are reported as 404 and are never touched.
"""

import logging

from django.db.models import Count, DecimalField, Q, Sum, Value
from django.db.models.functions import Coalesce
from django.http import HttpResponse
from django.utils import timezone
from django.utils.dateparse import parse_date
from rest_framework import generics, status
from rest_framework.exceptions import NotFound, ValidationError
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from common.api.permissions import IsAdminRole, is_admin_user
from common.exceptions import ExternalServiceFailure
from common.pagination import AdminPagination
from orders import content as site_content
from orders import workflow
from orders.billing import payment_history
from orders.emails import send_order_confirmation
from orders.export import export_filename, orders_csv
from orders.models import Order, SalonService
from orders.notices import notifications_for
from photos.ingestion import delete_photo_files
from .permissions import CanReadUserOrders
from .serializers import (
    AdminOrderSerializer,
    AdminStatusSerializer,
    BusinessHoursSerializer,
    OrderSerializer,
    ProjectSerializer,
    RecentOrderSerializer,
    SalonServiceSerializer,
    ServiceReorderSerializer,
    UpdateContentSerializer,
    UpdateDomainSerializer,
    UpdateHoursSerializer,
)

logger = logging.getLogger(__name__)

RECENT_CLIENT_ORDERS = 10


# ----------------------------- helpers (module-level) -----------------------------

def _client_orders(user):
    """Orders owned by the user."""
    return Order.objects.select_related("template").filter(user=user)


def _owned_order_or_404(user, order_id):
    try:
        return _client_orders(user).get(pk=order_id)
    except Order.DoesNotExist:
        raise NotFound("Order not found")


def _admin_orders():
    return Order.objects.select_related("user", "user__profile", "template").annotate(
        photo_count=Count("photos", distinct=True)
    )


def _filter_admin_orders(qs, params):
    """Apply the back-office `status`, `search`, `startDate` and `endDate` filters."""
    status_filter = params.get("status")
    if status_filter and status_filter.upper() != "ALL":
        if status_filter not in Order.Status.values:
            raise ValidationError({"status": [f"Unknown status '{status_filter}'."]})
        qs = qs.filter(status=status_filter)

    search = (params.get("search") or "").strip()
    if search:
        qs = qs.filter(
            Q(salon_name__icontains=search)
            | Q(owner_name__icontains=search)
            | Q(email__icontains=search)
            | Q(domain__icontains=search)
        )

    for param, lookup in (("startDate", "created_at__date__gte"), ("endDate", "created_at__date__lte")):
        raw = params.get(param)
        if not raw:
            continue
        try:
            day = parse_date(raw)
        except ValueError:
            day = None
        if day is None:
            raise ValidationError({param: ["Use the YYYY-MM-DD format."]})
        qs = qs.filter(**{lookup: day})
    return qs


def _requested_user_id(request) -> int:
    raw = request.query_params.get("userId")
    if not raw:
        return request.user.id
    try:
        return int(raw)
    except ValueError:
        raise ValidationError({"userId": ["Must be a whole number."]})


# --------------------------------------- client ---------------------------------------

class UpdateDomainAPIView(APIView):
    """POST /api/orders/{id}/update-domain/ stores the chosen domain."""

    permission_classes = [IsAuthenticated]

    def post(self, request, order_id):
        ser = UpdateDomainSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        data = ser.validated_data

        order = _owned_order_or_404(request.user, order_id)
        workflow.advance_domain(
            order,
            domain=data["domain"],
            extension=data["domainExtension"],
            price=data["domainPrice"],
            user_price=data["domainUserPrice"],
        )
        return Response({"order": OrderSerializer(order).data}, status=status.HTTP_200_OK)


class UpdateContentAPIView(APIView):
    """POST /api/orders/{id}/update-content/ stores the content step."""

    permission_classes = [IsAuthenticated]

    def post(self, request, order_id):
        ser = UpdateContentSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        data = ser.validated_data

        order = _owned_order_or_404(request.user, order_id)
        order, content_data, photo_count = workflow.advance_content(
            order,
            about_text=data.get("aboutText"),
            services=data.get("services"),
            photo_count=data.get("photoCount"),
        )
        return Response(
            {
                "order": OrderSerializer(order).data,
                "contentData": content_data,
                "photoCount": photo_count,
            },
            status=status.HTTP_200_OK,
        )


class CurrentOrderAPIView(APIView):
    """GET /api/orders/current/?userId= returns the open order of a user."""

    permission_classes = [CanReadUserOrders]

    def get(self, request):
        order, has_completed = workflow.current_order_for(_requested_user_id(request))
        if order is not None:
            return Response({"order": OrderSerializer(order).data})
        if has_completed:
            return Response(
                {"message": "All orders are completed", "hasCompletedOrders": True}
            )
        return Response({"message": "No active order found", "order": None})


class SendConfirmationAPIView(APIView):
    """POST /api/orders/{id}/send-confirmation/ emails the order summary."""

    permission_classes = [IsAuthenticated]

    def post(self, request, order_id):
        if is_admin_user(request.user):
            order = Order.objects.select_related("template").filter(pk=order_id).first()
            if order is None:
                raise NotFound("Order not found")
        else:
            order = _owned_order_or_404(request.user, order_id)

        result = send_order_confirmation(order)
        if not result.success:
            raise ExternalServiceFailure(
                "email",
                detail=result.error,
                public_message="Failed to send confirmation email",
            )
        logger.info("Confirmation email for order %s sent after %s attempt(s)", order.pk, result.attempts)
        return Response({"success": True, "attempts": result.attempts})


class ClientProjectListAPIView(generics.ListAPIView):
    """GET /api/client/projects/ lists the caller's orders as projects."""

    permission_classes = [IsAuthenticated]
    serializer_class = ProjectSerializer

    def get_queryset(self):
        return _client_orders(self.request.user).order_by("-created_at")


class ClientStatsAPIView(APIView):
    """GET /api/client/stats/ summarizes the caller's orders."""

    permission_classes = [IsAuthenticated]

    def get(self, request):
        S = Order.Status
        stats = Order.objects.filter(user=request.user).aggregate(
            total=Count("id"),
            pending=Count("id", filter=Q(status=S.PENDING)),
            processing=Count("id", filter=Q(status=S.PROCESSING)),
            completed=Count("id", filter=Q(status=S.COMPLETED)),
            cancelled=Count("id", filter=Q(status__in=[S.CANCELLED, S.REFUNDED])),
            active=Count(
                "id",
                filter=Q(status__in=workflow.ACTIVE_STATUSES, setup_completed=False),
            ),
            spent=Coalesce(
                Sum("total", filter=Q(status__in=[S.PROCESSING, S.COMPLETED])),
                Value(0),
                output_field=DecimalField(max_digits=12, decimal_places=2),
            ),
        )
        return Response(
            {
                "totalOrders": stats["total"],
                "pendingOrders": stats["pending"],
                "processingOrders": stats["processing"],
                "completedOrders": stats["completed"],
                "cancelledOrders": stats["cancelled"],
                "activeProjects": stats["active"],
                "totalSpent": float(stats["spent"]),
            }
        )


class ClientRecentOrdersAPIView(generics.ListAPIView):
    """GET /api/client/recent-orders/ the caller's ten newest orders as project cards."""

    permission_classes = [IsAuthenticated]
    serializer_class = RecentOrderSerializer

    def get_queryset(self):
        return _client_orders(self.request.user).order_by("-created_at")[:RECENT_CLIENT_ORDERS]


class ClientPaymentsAPIView(APIView):
    """GET /api/client/payments/ payment history derived from the caller's orders."""

    permission_classes = [IsAuthenticated]

    def get(self, request):
        orders = _client_orders(request.user).order_by("-created_at")
        return Response(payment_history(orders))


class ClientNotificationsAPIView(APIView):
    """GET /api/client/notifications/"""

    permission_classes = [IsAuthenticated]

    def get(self, request):
        return Response(notifications_for(request.user))


# ----------------------------------- content editor -----------------------------------

class ServiceListAPIView(APIView):
    """GET/POST/PATCH /api/content/{order_id}/services/

    GET lists the service menu, POST adds a service, PATCH reorders the menu
    from `{"serviceIds": [...]}`.
    """

    permission_classes = [IsAuthenticated]

    def _content(self, request, order_id):
        return site_content.content_for(_owned_order_or_404(request.user, order_id))

    def get(self, request, order_id):
        content = self._content(request, order_id)
        services = site_content.services_of(content)
        return Response({"services": SalonServiceSerializer(services, many=True).data})

    def post(self, request, order_id):
        ser = SalonServiceSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        content = self._content(request, order_id)
        service = site_content.add_service(content, **ser.validated_data)
        return Response(
            {"service": SalonServiceSerializer(service).data}, status=status.HTTP_201_CREATED
        )

    def patch(self, request, order_id):
        ser = ServiceReorderSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        content = self._content(request, order_id)
        try:
            services = site_content.reorder_services(content, ser.validated_data["serviceIds"])
        except site_content.UnknownServices as exc:
            raise ValidationError({"serviceIds": [f"Unknown service ids: {exc.ids}"]})
        return Response({"services": SalonServiceSerializer(services, many=True).data})


class ServiceDetailAPIView(APIView):
    """GET/PUT/DELETE /api/content/{order_id}/services/{service_id}/"""

    permission_classes = [IsAuthenticated]

    def _service(self, request, order_id, service_id):
        order = _owned_order_or_404(request.user, order_id)
        try:
            return SalonService.objects.get(pk=service_id, content__order=order)
        except SalonService.DoesNotExist:
            raise NotFound("Service not found")

    def get(self, request, order_id, service_id):
        service = self._service(request, order_id, service_id)
        return Response({"service": SalonServiceSerializer(service).data})

    def put(self, request, order_id, service_id):
        service = self._service(request, order_id, service_id)
        ser = SalonServiceSerializer(service, data=request.data, partial=True)
        ser.is_valid(raise_exception=True)
        ser.save()
        return Response({"service": ser.data})

    def delete(self, request, order_id, service_id):
        service = self._service(request, order_id, service_id)
        service.delete()
        return Response(status=status.HTTP_204_NO_CONTENT)


class BusinessHoursAPIView(APIView):
    """GET/PUT /api/content/{order_id}/hours/

    GET creates the default week on first read. PUT takes
    `{"businessHours": [...]}` and upserts the listed weekdays.
    """

    permission_classes = [IsAuthenticated]

    def get(self, request, order_id):
        content = site_content.content_for(_owned_order_or_404(request.user, order_id))
        hours = site_content.hours_of(content)
        return Response({"businessHours": BusinessHoursSerializer(hours, many=True).data})

    def put(self, request, order_id):
        ser = UpdateHoursSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        content = site_content.content_for(_owned_order_or_404(request.user, order_id))
        hours = site_content.replace_hours(content, ser.validated_data["businessHours"])
        return Response({"businessHours": BusinessHoursSerializer(hours, many=True).data})


# --------------------------------------- admin ---------------------------------------

class AdminOrderListAPIView(generics.ListAPIView):
    """GET /api/admin/orders/?status=&search= paginated order list."""

    permission_classes = [IsAdminRole]
    serializer_class = AdminOrderSerializer
    pagination_class = AdminPagination

    def get_queryset(self):
        return _filter_admin_orders(_admin_orders().order_by("-created_at"), self.request.query_params)


class AdminOrderDetailAPIView(generics.RetrieveDestroyAPIView):
    """GET/DELETE /api/admin/orders/{id}/.

    Deleting an order removes its photo files from disk first (best-effort);
    the photo rows go with the order.
    """

    permission_classes = [IsAdminRole]
    serializer_class = AdminOrderSerializer
    lookup_url_kwarg = "order_id"

    def get_queryset(self):
        return _admin_orders()

    def perform_destroy(self, instance):
        for photo in instance.photos.all():
            delete_photo_files(photo)
        order_id = instance.pk
        instance.delete()
        logger.info("Order %s deleted by %s", order_id, self.request.user.email or self.request.user.pk)


class AdminOrderStatusAPIView(APIView):
    """PUT /api/admin/orders/{id}/status/ manual status override."""

    permission_classes = [IsAdminRole]

    def put(self, request, order_id):
        ser = AdminStatusSerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        try:
            order = Order.objects.get(pk=order_id)
        except Order.DoesNotExist:
            raise NotFound("Order not found")

        workflow.override_status(order, ser.validated_data["status"], actor=request.user)
        order = _admin_orders().get(pk=order.pk)
        return Response(
            {"message": "Order status updated", "order": AdminOrderSerializer(order).data},
            status=status.HTTP_200_OK,
        )


class AdminOrderExportAPIView(APIView):
    """GET/POST /api/admin/orders/export/?status=&search=&startDate=&endDate=

    Downloads every matching order as a CSV file; the filters are those of the
    order list plus an inclusive creation date range.
    """

    permission_classes = [IsAdminRole]

    def get(self, request):
        qs = _admin_orders().annotate(
            service_count=Count("content__salon_services", distinct=True)
        ).order_by("-created_at")
        orders = _filter_admin_orders(qs, request.query_params)

        now = timezone.now()
        response = HttpResponse(orders_csv(orders), content_type="text/csv; charset=utf-8")
        response["Content-Disposition"] = f'attachment; filename="{export_filename(now)}"'
        response["Cache-Control"] = "no-cache"
        logger.info("Order export requested by %s", request.user.email or request.user.pk)
        return response

    def post(self, request):
        return self.get(request)
