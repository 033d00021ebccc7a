from django.urls import path

from .views import (
    AdminTemplateDetailAPIView,
    AdminTemplateListCreateAPIView,
    AdminTemplateToggleAPIView,
    PublicTemplateListAPIView,
)

urlpatterns = [
    path("templates/", PublicTemplateListAPIView.as_view(), name="template-list"),
    path("admin/templates/", AdminTemplateListCreateAPIView.as_view(), name="admin-template-list"),
    path("admin/templates/<int:pk>/", AdminTemplateDetailAPIView.as_view(), name="admin-template-detail"),
    path("admin/templates/<int:pk>/toggle/", AdminTemplateToggleAPIView.as_view(), name="admin-template-toggle"),
]
