"""Root URL configuration.

Every app exposes its REST endpoints through `<app>/api/urls.py`; they are all
mounted under `/api/`.
"""

from django.conf import settings
from django.conf.urls.static import static
from django.contrib import admin
from django.urls import include, path

urlpatterns = [
    path("admin/", admin.site.urls),
    path("api/", include("user_auth_app.api.urls")),
    path("api/", include("profiles.api.urls")),
    path("api/", include("site_templates.api.urls")),
    path("api/", include("orders.api.urls")),
    path("api/", include("photos.api.urls")),
    path("api/", include("payments.api.urls")),
    path("api/", include("contact.api.urls")),
    path("api/", include("domains.api.urls")),
    path("api/", include("dashboard.api.urls")),
    path("api/", include("common.api.urls")),
] + static(settings.MEDIA_URL, document_root=settings.MEDIA_ROOT)
