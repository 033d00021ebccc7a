from django.urls import path

from .views import AdminSettingsAPIView, PublicSettingsAPIView

urlpatterns = [
    path("settings/", PublicSettingsAPIView.as_view(), name="site-settings"),
    path("admin/settings/", AdminSettingsAPIView.as_view(), name="admin-settings"),
]
