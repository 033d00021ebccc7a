from django.urls import path

from .views import PhotoDetailAPIView, PhotoListBulkAPIView, PhotoUploadAPIView

urlpatterns = [
    path("photos/", PhotoListBulkAPIView.as_view(), name="photo-list"),
    path("photos/upload/", PhotoUploadAPIView.as_view(), name="photo-upload"),
    path("photos/<str:photo_id>/", PhotoDetailAPIView.as_view(), name="photo-detail"),
]
