"""Payments API views.

- POST/GET/PUT /api/create-payment-intent/   Stripe Payment Intents
- POST /api/stripe/checkout/                 order + hosted Checkout Session
- GET  /api/auth/verify-session/?session_id= reconcile a paid session with
  the local account (manual login recovery)

Stripe is reached only through the payment bridge. Session verification is
read-only; an unpaid session is answered before any database access.
"""

import logging
from decimal import Decimal

import stripe
from django.contrib.auth import get_user_model
from rest_framework import status
from rest_framework.exceptions import NotFound, ValidationError
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from common.exceptions import ExternalServiceFailure
from common.site_settings import load_site_settings
from common.throttling import CheckoutThrottle, VerifySessionThrottle
from orders.models import Order
from payments.bridge import from_cents, get_payment_bridge, session_metadata
from site_templates.models import Template
from .serializers import (
    CheckoutSerializer,
    CreatePaymentIntentSerializer,
    UpdatePaymentIntentSerializer,
)

logger = logging.getLogger(__name__)

User = get_user_model()


def _intent_payload(intent, include_metadata=False) -> dict:
    out = {
        "paymentIntentId": intent.id,
        "clientSecret": intent.client_secret,
        "amount": from_cents(intent.amount),
        "currency": intent.currency,
        "status": intent.status,
    }
    if include_metadata:
        out["metadata"] = dict(intent.metadata or {})
    return out


def _stripe_failure(action: str, exc) -> ExternalServiceFailure:
    return ExternalServiceFailure(
        "stripe",
        detail=f"{action}: {getattr(exc, 'user_message', None) or exc}",
        public_message="Error processing the payment",
    )


class PaymentIntentAPIView(APIView):
    """Create, read and update a Payment Intent for the embedded checkout form."""

    authentication_classes = []
    permission_classes = [AllowAny]

    def post(self, request):
        ser = CreatePaymentIntentSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        data = ser.validated_data

        try:
            intent = get_payment_bridge().create_payment_intent(
                data["amount"], metadata=data.get("metadata"), currency=data["currency"]
            )
        except stripe.StripeError as exc:
            raise _stripe_failure("create payment intent", exc)
        return Response(_intent_payload(intent), status=status.HTTP_201_CREATED)

    def get(self, request):
        payment_intent_id = request.query_params.get("payment_intent_id")
        if not payment_intent_id:
            raise ValidationError({"payment_intent_id": ["This parameter is required."]})
        try:
            intent = get_payment_bridge().retrieve_payment_intent(payment_intent_id)
        except stripe.StripeError as exc:
            logger.warning("Payment intent %s not retrievable: %s", payment_intent_id, exc)
            raise NotFound("Payment intent not found")
        return Response(_intent_payload(intent, include_metadata=True))

    def put(self, request):
        ser = UpdatePaymentIntentSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        data = ser.validated_data

        try:
            intent = get_payment_bridge().update_payment_intent(
                data["paymentIntentId"],
                amount=data.get("amount"),
                metadata=data.get("metadata"),
            )
        except stripe.StripeError as exc:
            raise _stripe_failure("update payment intent", exc)
        return Response(_intent_payload(intent))


class CheckoutSessionAPIView(APIView):
    """POST /api/stripe/checkout/ creates a PENDING order and its Checkout Session.

    The price is the selected template's price, or the offer price from the
    site settings when no template is chosen. The Stripe call runs outside any
    database transaction; if it fails, the order is deleted again.
    """

    permission_classes = [AllowAny]
    throttle_classes = [CheckoutThrottle]

    def post(self, request):
        ser = CheckoutSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        data = ser.validated_data

        template = None
        if data.get("templateId") is not None:
            template = Template.objects.filter(pk=data["templateId"], active=True).first()
            if template is None:
                raise ValidationError({"templateId": ["Template not found or inactive."]})
            price = template.price
        else:
            offer = load_site_settings()["templatePricing"]["offerPrice"]
            price = Decimal(str(offer))

        user = request.user if request.user.is_authenticated else None
        bridge = get_payment_bridge()

        order = Order.objects.create(
            user=user,
            template=template,
            salon_name=data["businessName"],
            owner_name=data["name"],
            email=data["email"],
            phone=data.get("phone", ""),
            domain=data.get("domain", ""),
            domain_extension=data.get("domainExtension", ""),
            total=price,
        )
        try:
            session = bridge.create_checkout_session(
                order,
                amount=price,
                customer_name=data["name"],
                business_type=data.get("businessType", ""),
            )
        except stripe.StripeError as exc:
            order.delete()
            raise _stripe_failure("create checkout session", exc)

        order.stripe_session_id = session.id
        order.save(update_fields=["stripe_session_id", "updated_at"])

        return Response(
            {
                "success": True,
                "url": session.url,
                "sessionId": session.id,
                "orderId": str(order.pk),
            },
            status=status.HTTP_201_CREATED,
        )


class VerifySessionAPIView(APIView):
    """GET /api/auth/verify-session/?session_id= for manual login recovery."""

    authentication_classes = []
    permission_classes = [AllowAny]
    throttle_classes = [VerifySessionThrottle]

    def get(self, request):
        session_id = request.query_params.get("session_id")
        if not session_id:
            raise ValidationError({"session_id": ["Session ID required"]})

        try:
            session = get_payment_bridge().retrieve_checkout_session(session_id)
        except stripe.StripeError as exc:
            logger.warning("Failed to retrieve Stripe session %s: %s", session_id, exc)
            raise NotFound("Invalid session ID")

        if session.payment_status != "paid":
            return Response(
                {"error": "Payment not completed", "paymentStatus": session.payment_status},
                status=status.HTTP_400_BAD_REQUEST,
            )

        email = session_metadata(session, "customer_email")
        if not email:
            logger.error("Stripe session %s has no customer_email metadata", session_id)
            return Response(
                {"error": "Session missing required data"},
                status=status.HTTP_400_BAD_REQUEST,
            )

        user = User.objects.select_related("profile").filter(email__iexact=email).first()
        if user is None:
            logger.error("Paid session %s has no local account for %s", session_id, email)
            return Response(
                {
                    "error": "User account not created. Please contact support.",
                    "email": email,
                    "sessionId": session_id,
                },
                status=status.HTTP_404_NOT_FOUND,
            )

        order = Order.objects.filter(stripe_session_id=session_id).first()
        prof = getattr(user, "profile", None)
        return Response(
            {
                "success": True,
                "email": user.email,
                "user": {
                    "name": getattr(prof, "name", "") or user.get_full_name(),
                    "salonName": getattr(prof, "salon_name", ""),
                    "hasCompletedOnboarding": getattr(prof, "has_completed_onboarding", False),
                    "accountCreated": user.date_joined,
                },
                "order": None
                if order is None
                else {
                    "id": str(order.pk),
                    "status": order.status,
                    "total": float(order.total),
                    "salonName": order.salon_name,
                    "completedAt": order.completed_at,
                },
                "paymentInfo": {
                    "sessionId": session_id,
                    "paymentStatus": session.payment_status,
                    "amountTotal": from_cents(session.amount_total),
                    "currency": session.currency,
                },
            }
        )
