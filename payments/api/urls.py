from django.urls import path

from .views import CheckoutSessionAPIView, PaymentIntentAPIView, VerifySessionAPIView

urlpatterns = [
    path("create-payment-intent/", PaymentIntentAPIView.as_view(), name="payment-intent"),
    path("stripe/checkout/", CheckoutSessionAPIView.as_view(), name="stripe-checkout"),
    path("auth/verify-session/", VerifySessionAPIView.as_view(), name="verify-session"),
]
