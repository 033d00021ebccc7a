from django.apps import AppConfig


class PaymentsConfig(AppConfig):
    """Holds the process-wide payment bridge.

    The bridge is built on first use from the configured Stripe secret and
    rebuilt when an admin changes the secret in the site settings.
    """

    name = "payments"
    default_auto_field = "django.db.models.BigAutoField"

    def ready(self):
        self._bridge = None
        self._bridge_key = None

    def payment_bridge(self):
        from django.conf import settings

        from common.exceptions import ExternalServiceFailure
        from common.site_settings import stripe_secret_key
        from .bridge import PaymentBridge

        key = stripe_secret_key()
        if not key:
            raise ExternalServiceFailure(
                "stripe",
                detail="STRIPE_SECRET_KEY is not configured",
                public_message="Payments are not configured",
            )
        if self._bridge is None or self._bridge_key != key:
            self._bridge = PaymentBridge.from_secret_key(
                key,
                currency=settings.STRIPE_CURRENCY,
                success_url=settings.CHECKOUT_SUCCESS_URL,
                cancel_url=settings.CHECKOUT_CANCEL_URL,
            )
            self._bridge_key = key
        return self._bridge
