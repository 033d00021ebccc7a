from django.urls import path

from .views import (
    AdminOrderDetailAPIView,
    AdminOrderExportAPIView,
    AdminOrderListAPIView,
    AdminOrderStatusAPIView,
    BusinessHoursAPIView,
    ClientNotificationsAPIView,
    ClientPaymentsAPIView,
    ClientProjectListAPIView,
    ClientRecentOrdersAPIView,
    ClientStatsAPIView,
    CurrentOrderAPIView,
    SendConfirmationAPIView,
    ServiceDetailAPIView,
    ServiceListAPIView,
    UpdateContentAPIView,
    UpdateDomainAPIView,
)

urlpatterns = [
    path("orders/current/", CurrentOrderAPIView.as_view(), name="order-current"),
    path("orders/<uuid:order_id>/update-domain/", UpdateDomainAPIView.as_view(), name="order-update-domain"),
    path("orders/<uuid:order_id>/update-content/", UpdateContentAPIView.as_view(), name="order-update-content"),
    path(
        "orders/<uuid:order_id>/send-confirmation/",
        SendConfirmationAPIView.as_view(),
        name="order-send-confirmation",
    ),
    path("content/<uuid:order_id>/services/", ServiceListAPIView.as_view(), name="content-services"),
    path(
        "content/<uuid:order_id>/services/<int:service_id>/",
        ServiceDetailAPIView.as_view(),
        name="content-service-detail",
    ),
    path("content/<uuid:order_id>/hours/", BusinessHoursAPIView.as_view(), name="content-hours"),
    path("client/projects/", ClientProjectListAPIView.as_view(), name="client-projects"),
    path("client/stats/", ClientStatsAPIView.as_view(), name="client-stats"),
    path("client/recent-orders/", ClientRecentOrdersAPIView.as_view(), name="client-recent-orders"),
    path("client/payments/", ClientPaymentsAPIView.as_view(), name="client-payments"),
    path("client/notifications/", ClientNotificationsAPIView.as_view(), name="client-notifications"),
    path("admin/orders/", AdminOrderListAPIView.as_view(), name="admin-order-list"),
    path("admin/orders/export/", AdminOrderExportAPIView.as_view(), name="admin-order-export"),
    path("admin/orders/<uuid:order_id>/", AdminOrderDetailAPIView.as_view(), name="admin-order-detail"),
    path("admin/orders/<uuid:order_id>/status/", AdminOrderStatusAPIView.as_view(), name="admin-order-status"),
]
