from django.urls import path

from .views import AdminUserDetailAPIView, AdminUserListAPIView, ProfileView

urlpatterns = [
    path("profile/", ProfileView.as_view(), name="profile-detail"),
    path("admin/users/", AdminUserListAPIView.as_view(), name="admin-user-list"),
    path("admin/users/<int:pk>/", AdminUserDetailAPIView.as_view(), name="admin-user-detail"),
]
