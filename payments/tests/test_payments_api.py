# payments/tests/test_payments_api.py
import json
import os
import shutil
import tempfile
from types import SimpleNamespace
from unittest.mock import MagicMock, patch

import stripe
from django.contrib.auth import get_user_model
from django.core.cache import caches
from django.db import connection
from django.test import override_settings
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase, APITransactionTestCase

from orders.models import Order
from profiles.models import Profile
from site_templates.models import Template

User = get_user_model()


def paid_session(**overrides):
    data = {
        "id": "cs_test_1",
        "payment_status": "paid",
        "metadata": {"customer_email": "ana@example.com"},
        "amount_total": 19900,
        "currency": "eur",
        "url": "https://checkout.stripe.test/cs_test_1",
    }
    data.update(overrides)
    return SimpleNamespace(**data)


class PaymentIntentTests(APITestCase):
    def setUp(self):
        self.bridge = MagicMock()
        patcher = patch("payments.api.views.get_payment_bridge", return_value=self.bridge)
        patcher.start()
        self.addCleanup(patcher.stop)
        self.url = reverse("payment-intent")

    def intent(self, **overrides):
        data = {
            "id": "pi_1",
            "client_secret": "pi_1_secret",
            "amount": 19900,
            "currency": "eur",
            "status": "requires_payment_method",
            "metadata": {"source": "peluquerias-checkout"},
        }
        data.update(overrides)
        return SimpleNamespace(**data)

    def test_create(self):
        self.bridge.create_payment_intent.return_value = self.intent()
        res = self.client.post(self.url, {"amount": 199, "metadata": {"salonName": "Luna"}}, format="json")
        self.assertEqual(res.status_code, status.HTTP_201_CREATED)
        self.assertEqual(res.data["paymentIntentId"], "pi_1")
        self.assertEqual(res.data["clientSecret"], "pi_1_secret")
        self.assertEqual(res.data["amount"], 199.0)
        self.assertEqual(self.bridge.create_payment_intent.call_args.kwargs["currency"], "eur")

    def test_create_rejects_string_amount(self):
        res = self.client.post(self.url, {"amount": "199"}, format="json")
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)
        self.bridge.create_payment_intent.assert_not_called()

    def test_create_stripe_error_is_500(self):
        self.bridge.create_payment_intent.side_effect = stripe.StripeError("card declined")
        res = self.client.post(self.url, {"amount": 199}, format="json")
        self.assertEqual(res.status_code, status.HTTP_500_INTERNAL_SERVER_ERROR)
        self.assertEqual(res.data["error"], "Error processing the payment")

    def test_get_requires_id(self):
        res = self.client.get(self.url)
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)

    def test_get_unknown_intent_is_404(self):
        self.bridge.retrieve_payment_intent.side_effect = stripe.StripeError("No such payment_intent")
        res = self.client.get(self.url, {"payment_intent_id": "pi_missing"})
        self.assertEqual(res.status_code, status.HTTP_404_NOT_FOUND)

    def test_get_includes_metadata(self):
        self.bridge.retrieve_payment_intent.return_value = self.intent()
        res = self.client.get(self.url, {"payment_intent_id": "pi_1"})
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(res.data["metadata"], {"source": "peluquerias-checkout"})

    def test_update(self):
        self.bridge.update_payment_intent.return_value = self.intent(amount=25000)
        res = self.client.put(self.url, {"paymentIntentId": "pi_1", "amount": 250}, format="json")
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(res.data["amount"], 250.0)


class CheckoutTests(APITestCase):
    def setUp(self):
        caches["throttle"].clear()
        self.bridge = MagicMock()
        self.bridge.create_checkout_session.return_value = paid_session(payment_status="unpaid")
        patcher = patch("payments.api.views.get_payment_bridge", return_value=self.bridge)
        patcher.start()
        self.addCleanup(patcher.stop)

        tmp = tempfile.mkdtemp()
        self.addCleanup(shutil.rmtree, tmp, ignore_errors=True)
        self.settings_file = os.path.join(tmp, "site_settings.json")
        override = override_settings(SITE_SETTINGS_FILE=self.settings_file)
        override.enable()
        self.addCleanup(override.disable)

        self.template = Template.objects.create(name="Profesional", price=399)
        self.url = reverse("stripe-checkout")

    def payload(self, **overrides):
        data = {
            "email": " Ana@Example.com ",
            "name": "Ana",
            "businessName": "Salón Luna",
            "phone": "600000000",
        }
        data.update(overrides)
        return data

    def test_checkout_with_template(self):
        res = self.client.post(self.url, self.payload(templateId=self.template.pk), format="json")
        self.assertEqual(res.status_code, status.HTTP_201_CREATED)
        self.assertEqual(res.data["sessionId"], "cs_test_1")
        self.assertEqual(res.data["url"], "https://checkout.stripe.test/cs_test_1")

        order = Order.objects.get(pk=res.data["orderId"])
        self.assertEqual(order.status, Order.Status.PENDING)
        self.assertEqual(order.email, "ana@example.com")
        self.assertEqual(order.total, 399)
        self.assertEqual(order.stripe_session_id, "cs_test_1")
        self.assertEqual(self.bridge.create_checkout_session.call_args.kwargs["amount"], 399)

    def test_checkout_without_template_uses_offer_price(self):
        with open(self.settings_file, "w", encoding="utf-8") as fh:
            json.dump({"templatePricing": {"offerPrice": 149, "originalPrice": 799}}, fh)
        res = self.client.post(self.url, self.payload(), format="json")
        self.assertEqual(res.status_code, status.HTTP_201_CREATED)
        order = Order.objects.get(pk=res.data["orderId"])
        self.assertEqual(order.total, 149)
        self.assertIsNone(order.template_id)

    def test_inactive_template_is_400(self):
        self.template.active = False
        self.template.save()
        res = self.client.post(self.url, self.payload(templateId=self.template.pk), format="json")
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertFalse(Order.objects.exists())

    def test_stripe_failure_leaves_no_order(self):
        self.bridge.create_checkout_session.side_effect = stripe.StripeError("api down")
        res = self.client.post(self.url, self.payload(templateId=self.template.pk), format="json")
        self.assertEqual(res.status_code, status.HTTP_500_INTERNAL_SERVER_ERROR)
        self.assertEqual(res.data["error"], "Error processing the payment")
        self.assertFalse(Order.objects.exists())


class CheckoutOutsideTransactionTests(APITransactionTestCase):
    def setUp(self):
        caches["throttle"].clear()
        self.template = Template.objects.create(name="Profesional", price=399)
        self.bridge = MagicMock()
        patcher = patch("payments.api.views.get_payment_bridge", return_value=self.bridge)
        patcher.start()
        self.addCleanup(patcher.stop)
        self.url = reverse("stripe-checkout")
        self.payload = {
            "email": "ana@example.com",
            "name": "Ana",
            "businessName": "Salón Luna",
            "templateId": self.template.pk,
        }

    def test_stripe_is_called_with_the_order_committed(self):
        seen = {}

        def create_session(order, **kwargs):
            seen["in_atomic_block"] = connection.in_atomic_block
            seen["order_saved"] = Order.objects.filter(pk=order.pk).exists()
            return paid_session(payment_status="unpaid")

        self.bridge.create_checkout_session.side_effect = create_session
        res = self.client.post(self.url, self.payload, format="json")
        self.assertEqual(res.status_code, status.HTTP_201_CREATED)
        self.assertEqual(seen, {"in_atomic_block": False, "order_saved": True})

    def test_stripe_failure_deletes_the_order(self):
        self.bridge.create_checkout_session.side_effect = stripe.APIConnectionError("timeout")
        res = self.client.post(self.url, self.payload, format="json")
        self.assertEqual(res.status_code, status.HTTP_500_INTERNAL_SERVER_ERROR)
        self.assertFalse(Order.objects.exists())


class VerifySessionTests(APITestCase):
    def setUp(self):
        caches["throttle"].clear()
        self.bridge = MagicMock()
        patcher = patch("payments.api.views.get_payment_bridge", return_value=self.bridge)
        patcher.start()
        self.addCleanup(patcher.stop)
        self.url = reverse("verify-session")

    def test_missing_session_id_is_400(self):
        res = self.client.get(self.url)
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)

    def test_invalid_session_is_404(self):
        self.bridge.retrieve_checkout_session.side_effect = stripe.StripeError("No such session")
        res = self.client.get(self.url, {"session_id": "cs_bad"})
        self.assertEqual(res.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(res.data["error"], "Invalid session ID")

    def test_unpaid_session_does_not_touch_the_database(self):
        self.bridge.retrieve_checkout_session.return_value = paid_session(payment_status="unpaid")
        with self.assertNumQueries(0):
            res = self.client.get(self.url, {"session_id": "cs_test_1"})
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(res.data, {"error": "Payment not completed", "paymentStatus": "unpaid"})

    def test_session_without_email_is_400(self):
        self.bridge.retrieve_checkout_session.return_value = paid_session(metadata={})
        res = self.client.get(self.url, {"session_id": "cs_test_1"})
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(res.data["error"], "Session missing required data")

    def test_paid_session_without_account_is_404(self):
        self.bridge.retrieve_checkout_session.return_value = paid_session()
        res = self.client.get(self.url, {"session_id": "cs_test_1"})
        self.assertEqual(res.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(res.data["email"], "ana@example.com")
        self.assertEqual(res.data["sessionId"], "cs_test_1")

    def test_paid_session_returns_account_and_order(self):
        user = User.objects.create_user("ana@example.com", "ana@example.com", "pass12345")
        Profile.objects.create(user=user, name="Ana", salon_name="Salón Luna")
        order = Order.objects.create(
            user=user, salon_name="Salón Luna", email="ana@example.com", total=199, stripe_session_id="cs_test_1"
        )
        self.bridge.retrieve_checkout_session.return_value = paid_session()

        res = self.client.get(self.url, {"session_id": "cs_test_1"})
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertTrue(res.data["success"])
        self.assertEqual(res.data["user"]["name"], "Ana")
        self.assertEqual(res.data["user"]["salonName"], "Salón Luna")
        self.assertFalse(res.data["user"]["hasCompletedOnboarding"])
        self.assertEqual(res.data["order"]["id"], str(order.pk))
        self.assertEqual(res.data["paymentInfo"]["amountTotal"], 199.0)

    def test_paid_session_without_order(self):
        User.objects.create_user("ana@example.com", "ana@example.com", "pass12345")
        self.bridge.retrieve_checkout_session.return_value = paid_session()
        res = self.client.get(self.url, {"session_id": "cs_test_1"})
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertIsNone(res.data["order"])
