from django.urls import path

from .views import CheckDomainAPIView, DomainPricingListAPIView

urlpatterns = [
    path("check-domain/", CheckDomainAPIView.as_view(), name="check-domain"),
    path("domains/pricing/", DomainPricingListAPIView.as_view(), name="domain-pricing"),
]
