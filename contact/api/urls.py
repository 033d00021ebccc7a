from django.urls import path

from .views import (
    AdminMessageDetailAPIView,
    AdminMessageListAPIView,
    AdminMessageReplyAPIView,
    AdminMessageStatusAPIView,
    ContactMessageCreateAPIView,
)

urlpatterns = [
    path("contact/", ContactMessageCreateAPIView.as_view(), name="contact-create"),
    path("admin/messages/", AdminMessageListAPIView.as_view(), name="admin-message-list"),
    path("admin/messages/<int:pk>/", AdminMessageDetailAPIView.as_view(), name="admin-message-detail"),
    path("admin/messages/<int:pk>/status/", AdminMessageStatusAPIView.as_view(), name="admin-message-status"),
    path("admin/messages/<int:pk>/reply/", AdminMessageReplyAPIView.as_view(), name="admin-message-reply"),
]
