# orders/tests/test_client_dashboard.py
from unittest.mock import patch

from django.contrib.auth import get_user_model
from django.core import mail
from django.test import override_settings
from django.urls import reverse
from rest_framework import status
from rest_framework.authtoken.models import Token
from rest_framework.test import APITestCase

from orders.models import Order

User = get_user_model()


class ClientDashboardTests(APITestCase):
    def setUp(self):
        self.user = User.objects.create_user("sofia@example.com", "sofia@example.com", "pass12345")
        self.other = User.objects.create_user("leo@example.com", "leo@example.com", "pass12345")
        self.token = Token.objects.create(user=self.user)
        self.other_token = Token.objects.create(user=self.other)

        def make(user, **extra):
            return Order.objects.create(user=user, salon_name="Sofía Hair", email=user.email, **extra)

        self.processing = make(
            self.user, status=Order.Status.PROCESSING, total=399, setup_step=Order.SetupStep.PHOTOS_UPLOAD
        )
        make(self.user, status=Order.Status.COMPLETED, total=199, setup_completed=True,
             setup_step=Order.SetupStep.COMPLETED)
        make(self.user, status=Order.Status.PENDING, total=799)
        make(self.user, status=Order.Status.REFUNDED, total=199)
        make(self.other, status=Order.Status.PROCESSING, total=999)

    def auth(self, token):
        self.client.credentials(HTTP_AUTHORIZATION=f"Token {token.key}")

    def test_stats(self):
        self.auth(self.token)
        res = self.client.get(reverse("client-stats"))
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(
            res.data,
            {
                "totalOrders": 4,
                "pendingOrders": 1,
                "processingOrders": 1,
                "completedOrders": 1,
                "cancelledOrders": 1,
                "activeProjects": 2,
                "totalSpent": 598.0,
            },
        )

    def test_projects_only_list_own_orders(self):
        self.auth(self.token)
        res = self.client.get(reverse("client-projects"))
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(len(res.data), 4)
        project = next(p for p in res.data if p["id"] == str(self.processing.id))
        self.assertEqual(project["projectStatus"], "development")
        self.assertEqual(project["progress"], 75)
        self.assertEqual(len(project["milestones"]), 6)

    def test_projects_require_authentication(self):
        res = self.client.get(reverse("client-projects"))
        self.assertEqual(res.status_code, status.HTTP_401_UNAUTHORIZED)


@override_settings(EMAIL_BACKEND="django.core.mail.backends.locmem.EmailBackend", EMAIL_RETRY_DELAY=0)
class SendConfirmationTests(APITestCase):
    def setUp(self):
        self.user = User.objects.create_user("sofia@example.com", "sofia@example.com", "pass12345")
        self.other = User.objects.create_user("leo@example.com", "leo@example.com", "pass12345")
        self.token = Token.objects.create(user=self.user)
        self.other_token = Token.objects.create(user=self.other)
        self.order = Order.objects.create(
            user=self.user, salon_name="Sofía Hair", owner_name="Sofía", email="sofia@example.com", total=399
        )
        self.url = reverse("order-send-confirmation", kwargs={"order_id": self.order.id})

    def auth(self, token):
        self.client.credentials(HTTP_AUTHORIZATION=f"Token {token.key}")

    def test_sends_email_to_order_address(self):
        self.auth(self.token)
        res = self.client.post(self.url)
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(res.data, {"success": True, "attempts": 1})
        self.assertEqual(len(mail.outbox), 1)
        self.assertEqual(mail.outbox[0].to, ["sofia@example.com"])
        self.assertIn("Sofía Hair", mail.outbox[0].subject)

    def test_foreign_order_is_404(self):
        self.auth(self.other_token)
        res = self.client.post(self.url)
        self.assertEqual(res.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(len(mail.outbox), 0)

    @patch("django.core.mail.EmailMultiAlternatives.send", side_effect=ConnectionError("smtp down"))
    def test_failure_after_retries_is_500(self, send):
        self.auth(self.token)
        res = self.client.post(self.url)
        self.assertEqual(res.status_code, status.HTTP_500_INTERNAL_SERVER_ERROR)
        self.assertEqual(res.data["error"], "Failed to send confirmation email")
        self.assertEqual(send.call_count, 3)
