from django.urls import path

from .views import (
    AdminStatsAPIView,
    DomainAnalyticsAPIView,
    MessageStatsAPIView,
    OrderAnalyticsAPIView,
    RecentOrdersAPIView,
    RevenueAnalyticsAPIView,
    TemplateAnalyticsAPIView,
    UserAnalyticsAPIView,
    UserStatsAPIView,
)

urlpatterns = [
    path("admin/stats/", AdminStatsAPIView.as_view(), name="admin-stats"),
    path("admin/orders/recent/", RecentOrdersAPIView.as_view(), name="admin-orders-recent"),
    path("admin/users/stats/", UserStatsAPIView.as_view(), name="admin-user-stats"),
    path("admin/messages/stats/", MessageStatsAPIView.as_view(), name="admin-message-stats"),
    path("admin/analytics/revenue/", RevenueAnalyticsAPIView.as_view(), name="admin-analytics-revenue"),
    path("admin/analytics/orders/", OrderAnalyticsAPIView.as_view(), name="admin-analytics-orders"),
    path("admin/analytics/users/", UserAnalyticsAPIView.as_view(), name="admin-analytics-users"),
    path("admin/analytics/templates/", TemplateAnalyticsAPIView.as_view(), name="admin-analytics-templates"),
    path("admin/analytics/domains/", DomainAnalyticsAPIView.as_view(), name="admin-analytics-domains"),
]
