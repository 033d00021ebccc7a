"""Stripe payment bridge.

Wraps a `stripe.StripeClient` and builds the Payment Intents and Checkout
Sessions of the storefront. Stripe errors (`stripe.StripeError`) propagate to
the caller, which decides how they are reported.

The bridge is an explicitly constructed object; the running process keeps one
on the payments AppConfig (see `get_payment_bridge`) and tests substitute their
own.
"""

import logging
import time
from decimal import ROUND_HALF_UP, Decimal

import stripe
from django.apps import apps
from django.utils import timezone

logger = logging.getLogger(__name__)

SOURCE_TAG = "peluquerias-checkout"
CHECKOUT_EXPIRY_SECONDS = 30 * 60
PRODUCT_NAME = "Web profesional para peluquería"
PRODUCT_DESCRIPTION = "Diseño, dominio, hosting y configuración de tu web"


def to_cents(amount) -> int:
    """Euros to integer cents, halves rounded up."""
    cents = Decimal(str(amount)) * 100
    return int(cents.to_integral_value(rounding=ROUND_HALF_UP))


def from_cents(amount) -> float:
    return (amount or 0) / 100


def _metadata_value(value) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return ""
    return str(value)


def stripe_metadata(metadata) -> dict:
    """Stripe metadata values are strings."""
    return {str(k): _metadata_value(v) for k, v in (metadata or {}).items()}


class PaymentBridge:
    def __init__(self, client, currency="eur", success_url="", cancel_url=""):
        self.client = client
        self.currency = currency
        self.success_url = success_url
        self.cancel_url = cancel_url

    @classmethod
    def from_secret_key(cls, secret_key: str, **kwargs):
        return cls(stripe.StripeClient(secret_key), **kwargs)

    # ------------------------------ payment intents ------------------------------

    def create_payment_intent(self, amount, metadata=None, currency=None):
        meta = stripe_metadata(metadata)
        meta["createdAt"] = timezone.now().isoformat()
        meta["source"] = SOURCE_TAG
        intent = self.client.payment_intents.create(
            params={
                "amount": to_cents(amount),
                "currency": currency or self.currency,
                "automatic_payment_methods": {"enabled": True},
                "metadata": meta,
            }
        )
        logger.info("Payment intent %s created", intent.id)
        return intent

    def retrieve_payment_intent(self, payment_intent_id: str):
        return self.client.payment_intents.retrieve(payment_intent_id)

    def update_payment_intent(self, payment_intent_id: str, amount=None, metadata=None):
        params = {}
        if amount is not None:
            params["amount"] = to_cents(amount)
        if metadata is not None:
            meta = stripe_metadata(metadata)
            meta["updatedAt"] = timezone.now().isoformat()
            params["metadata"] = meta
        return self.client.payment_intents.update(payment_intent_id, params=params)

    # ------------------------------ checkout sessions ------------------------------

    def create_checkout_session(self, order, amount, customer_name: str, business_type: str = ""):
        """Hosted checkout for one website order; metadata links it back to the order."""
        metadata = stripe_metadata(
            {
                "customer_email": order.email,
                "customer_name": customer_name,
                "customer_phone": order.phone,
                "business_name": order.salon_name,
                "business_type": business_type,
                "order_id": order.pk,
                "source": SOURCE_TAG,
                "created_at": timezone.now().isoformat(),
            }
        )
        session = self.client.checkout.sessions.create(
            params={
                "mode": "payment",
                "payment_method_types": ["card"],
                "billing_address_collection": "required",
                "submit_type": "pay",
                "locale": "es",
                "expires_at": int(time.time()) + CHECKOUT_EXPIRY_SECONDS,
                "line_items": [
                    {
                        "price_data": {
                            "currency": self.currency,
                            "product_data": {
                                "name": PRODUCT_NAME,
                                "description": PRODUCT_DESCRIPTION,
                            },
                            "unit_amount": to_cents(amount),
                        },
                        "quantity": 1,
                    }
                ],
                "success_url": f"{self.success_url}?session_id={{CHECKOUT_SESSION_ID}}",
                "cancel_url": self.cancel_url,
                "customer_email": order.email,
                "customer_creation": "always",
                "metadata": metadata,
            }
        )
        logger.info("Checkout session %s created for order %s", session.id, order.pk)
        return session

    def retrieve_checkout_session(self, session_id: str):
        return self.client.checkout.sessions.retrieve(session_id)


def get_payment_bridge() -> PaymentBridge:
    return apps.get_app_config("payments").payment_bridge()


def session_metadata(session, key: str):
    """Value of a Checkout Session metadata key, or None."""
    try:
        return session.metadata[key] or None
    except (KeyError, TypeError, AttributeError):
        return None
