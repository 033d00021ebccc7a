"""Back-office dashboard endpoints (admin only).

- GET /api/admin/stats/                       overview with monthly growth
- GET /api/admin/orders/recent/?limit=&status=
- GET /api/admin/users/stats/
- GET /api/admin/messages/stats/
- GET /api/admin/analytics/revenue/?period=monthly|yearly&months=
- GET /api/admin/analytics/{orders,users,templates,domains}/?days=
"""

from rest_framework.exceptions import ValidationError
from rest_framework.response import Response
from rest_framework.views import APIView

from common.api.permissions import IsAdminRole
from dashboard import aggregation, analytics
from orders.models import Order

MAX_RECENT_LIMIT = 100
DEFAULT_DAYS = 30
MAX_DAYS = 365
DEFAULT_MONTHS = 12
MAX_MONTHS = 60
PERIODS = ("monthly", "yearly")


def _bounded_int(params, name, default, upper):
    raw = params.get(name)
    if raw in (None, ""):
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ValidationError({name: ["Must be a whole number."]})
    if not 1 <= value <= upper:
        raise ValidationError({name: [f"Must be between 1 and {upper}."]})
    return value


class AdminStatsAPIView(APIView):
    permission_classes = [IsAdminRole]

    def get(self, request):
        return Response(aggregation.dashboard_stats())


class RecentOrdersAPIView(APIView):
    permission_classes = [IsAdminRole]

    def get(self, request):
        try:
            limit = int(request.query_params.get("limit", aggregation.RECENT_ORDERS_ON_DASHBOARD))
        except ValueError:
            raise ValidationError({"limit": ["Must be a whole number."]})
        limit = max(1, min(limit, MAX_RECENT_LIMIT))

        status_filter = request.query_params.get("status") or None
        if status_filter and status_filter not in Order.Status.values:
            raise ValidationError({"status": [f"Unknown status '{status_filter}'."]})

        orders = aggregation.recent_orders_queryset(limit=limit, status=status_filter)
        return Response([aggregation.recent_order_row(o) for o in orders])


class UserStatsAPIView(APIView):
    permission_classes = [IsAdminRole]

    def get(self, request):
        return Response(aggregation.user_stats())


class MessageStatsAPIView(APIView):
    permission_classes = [IsAdminRole]

    def get(self, request):
        return Response(aggregation.message_stats())


class RevenueAnalyticsAPIView(APIView):
    permission_classes = [IsAdminRole]

    def get(self, request):
        period = request.query_params.get("period") or "monthly"
        if period not in PERIODS:
            raise ValidationError({"period": [f"Must be one of: {', '.join(PERIODS)}."]})
        months = _bounded_int(request.query_params, "months", DEFAULT_MONTHS, MAX_MONTHS)
        return Response(analytics.revenue_report(period=period, months=months))


class DayWindowAnalyticsAPIView(APIView):
    """Report over the last `days` days; subclasses name the report."""

    permission_classes = [IsAdminRole]
    report = None

    def get(self, request):
        days = _bounded_int(request.query_params, "days", DEFAULT_DAYS, MAX_DAYS)
        return Response(type(self).report(days=days))


class OrderAnalyticsAPIView(DayWindowAnalyticsAPIView):
    report = analytics.orders_report


class UserAnalyticsAPIView(DayWindowAnalyticsAPIView):
    report = analytics.users_report


class TemplateAnalyticsAPIView(DayWindowAnalyticsAPIView):
    report = analytics.templates_report


class DomainAnalyticsAPIView(DayWindowAnalyticsAPIView):
    report = analytics.domains_report
