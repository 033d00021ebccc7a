# dashboard/tests/test_dashboard_api.py
from datetime import timedelta
from unittest.mock import patch

from django.contrib.auth import get_user_model
from django.urls import reverse
from django.utils import timezone
from rest_framework import status
from rest_framework.authtoken.models import Token
from rest_framework.test import APITestCase

from contact.models import ContactMessage
from dashboard.aggregation import month_bounds
from orders.models import Order
from profiles.models import Profile
from site_templates.models import Template

User = get_user_model()


class DashboardStatsTests(APITestCase):
    def setUp(self):
        self.admin = User.objects.create_user("admin@example.com", "admin@example.com", "pass12345")
        Profile.objects.create(user=self.admin, role=Profile.Role.ADMIN)
        self.client_user = User.objects.create_user("cli@example.com", "cli@example.com", "pass12345")
        Profile.objects.create(
            user=self.client_user, business_type="BARBERIA", has_completed_onboarding=True
        )
        self.admin_token = Token.objects.create(user=self.admin)
        self.client_token = Token.objects.create(user=self.client_user)

        template = Template.objects.create(name="Esencial", price=199)
        Template.objects.create(name="Antigua", price=99, active=False)

        last_month, this_month, _ = month_bounds()
        Order.objects.create(
            salon_name="Nuevo", email="a@example.com", template=template, total=300,
            status=Order.Status.COMPLETED,
        )
        Order.objects.create(salon_name="Pendiente", email="b@example.com", total=199)
        old = Order.objects.create(
            salon_name="Viejo", email="c@example.com", total=200, status=Order.Status.COMPLETED
        )
        Order.objects.filter(pk=old.pk).update(created_at=last_month + timedelta(days=1))

        ContactMessage.objects.create(name="Ana", email="ana@example.com", message="Hola, quiero info")
        ContactMessage.objects.create(
            name="Luis", email="luis@example.com", message="Gracias por todo", status=ContactMessage.Status.REPLIED
        )

    def auth(self, token):
        self.client.credentials(HTTP_AUTHORIZATION=f"Token {token.key}")

    def test_dashboard_overview(self):
        self.auth(self.admin_token)
        res = self.client.get(reverse("admin-stats"))
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        data = res.data
        self.assertEqual(data["totalUsers"], 2)
        self.assertEqual(data["totalOrders"], 3)
        self.assertEqual(data["monthlyOrders"], 2)
        self.assertEqual(data["monthlyRevenue"], 300.0)
        self.assertEqual(data["pendingOrders"], 1)
        self.assertEqual(data["completedOrders"], 1)
        self.assertEqual(data["newMessages"], 1)
        self.assertEqual(data["activeTemplates"], 1)
        self.assertEqual(len(data["recentOrders"]), 3)
        self.assertEqual(data["recentOrders"][0]["salonName"], "Pendiente")
        self.assertEqual(
            data["monthlyGrowth"], {"users": 100, "orders": 100, "revenue": 50}
        )

    def test_dashboard_read_failure_is_500(self):
        self.auth(self.admin_token)
        with patch("dashboard.aggregation.run_batch", side_effect=RuntimeError("db gone")):
            res = self.client.get(reverse("admin-stats"))
        self.assertEqual(res.status_code, status.HTTP_500_INTERNAL_SERVER_ERROR)
        self.assertEqual(res.data["error"], "Internal server error")

    def test_recent_orders(self):
        self.auth(self.admin_token)
        res = self.client.get(reverse("admin-orders-recent"), {"limit": 2})
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(len(res.data), 2)

        res = self.client.get(reverse("admin-orders-recent"), {"status": "COMPLETED"})
        self.assertEqual({row["salonName"] for row in res.data}, {"Nuevo", "Viejo"})
        nuevo = next(row for row in res.data if row["salonName"] == "Nuevo")
        self.assertEqual(nuevo["template"], {"name": "Esencial", "category": "BASIC"})
        self.assertEqual(nuevo["amount"], 300.0)

    def test_recent_orders_rejects_bad_parameters(self):
        self.auth(self.admin_token)
        self.assertEqual(
            self.client.get(reverse("admin-orders-recent"), {"limit": "ten"}).status_code,
            status.HTTP_400_BAD_REQUEST,
        )
        self.assertEqual(
            self.client.get(reverse("admin-orders-recent"), {"status": "LOST"}).status_code,
            status.HTTP_400_BAD_REQUEST,
        )

    def test_user_stats(self):
        self.auth(self.admin_token)
        res = self.client.get(reverse("admin-user-stats"))
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(res.data["total"], 2)
        self.assertEqual(res.data["byRole"], {"CLIENT": 1, "ADMIN": 1})
        self.assertEqual(res.data["byBusinessType"], {"BARBERIA": 1, "SALON": 1})
        self.assertEqual(res.data["completedOnboarding"], 1)
        self.assertEqual(res.data["recentSignups"], 2)

    def test_message_stats(self):
        self.auth(self.admin_token)
        res = self.client.get(reverse("admin-message-stats"))
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(
            res.data,
            {"total": 2, "unread": 1, "read": 0, "replied": 1, "archived": 0, "recentMessages": 2},
        )

    def test_client_is_forbidden(self):
        self.auth(self.client_token)
        for name in ("admin-stats", "admin-orders-recent", "admin-user-stats", "admin-message-stats"):
            with self.subTest(name=name):
                self.assertEqual(self.client.get(reverse(name)).status_code, status.HTTP_403_FORBIDDEN)
