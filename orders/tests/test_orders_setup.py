# orders/tests/test_orders_setup.py
from django.contrib.auth import get_user_model
from django.urls import reverse
from rest_framework import status
from rest_framework.authtoken.models import Token
from rest_framework.test import APITestCase

from orders.models import Order, SiteContent
from profiles.models import Profile

User = get_user_model()


class OrderSetupTests(APITestCase):
    def setUp(self):
        self.owner = User.objects.create_user("owner@example.com", "owner@example.com", "pass12345")
        self.other = User.objects.create_user("other@example.com", "other@example.com", "pass12345")
        Profile.objects.create(user=self.owner, name="Lucía", salon_name="Salón Luna")
        Profile.objects.create(user=self.other, name="Marta", salon_name="Pelos")
        self.owner_token = Token.objects.create(user=self.owner)
        self.other_token = Token.objects.create(user=self.other)

        self.order = Order.objects.create(
            user=self.owner,
            salon_name="Salón Luna",
            owner_name="Lucía",
            email="owner@example.com",
            status=Order.Status.PROCESSING,
        )
        self.domain_url = reverse("order-update-domain", kwargs={"order_id": self.order.id})
        self.content_url = reverse("order-update-content", kwargs={"order_id": self.order.id})

    def auth(self, token):
        self.client.credentials(HTTP_AUTHORIZATION=f"Token {token.key}")

    def domain_payload(self, **overrides):
        payload = {
            "domain": "salonluna",
            "domainExtension": ".es",
            "domainPrice": 12.99,
            "domainUserPrice": 12.99,
        }
        payload.update(overrides)
        return payload

    def test_update_domain_moves_to_business_info(self):
        self.auth(self.owner_token)
        res = self.client.post(self.domain_url, self.domain_payload(), format="json")
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(res.data["order"]["domain"], "salonluna")
        self.assertEqual(res.data["order"]["setupStep"], "BUSINESS_INFO")
        self.assertEqual(res.data["order"]["progress"], 30)

        self.order.refresh_from_db()
        self.assertEqual(self.order.setup_step, Order.SetupStep.BUSINESS_INFO)
        self.assertEqual(self.order.domain_extension, ".es")

    def test_update_domain_of_foreign_order_is_404_and_untouched(self):
        self.auth(self.other_token)
        res = self.client.post(self.domain_url, self.domain_payload(), format="json")
        self.assertEqual(res.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(res.data["error"], "Order not found")

        self.order.refresh_from_db()
        self.assertEqual(self.order.domain, "")
        self.assertEqual(self.order.setup_step, Order.SetupStep.DOMAIN_SELECTION)

    def test_update_domain_requires_authentication(self):
        res = self.client.post(self.domain_url, self.domain_payload(), format="json")
        self.assertEqual(res.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_update_domain_rejects_wrong_types(self):
        self.auth(self.owner_token)
        cases = [
            self.domain_payload(domainPrice="12.99"),
            self.domain_payload(domain=12345),
            self.domain_payload(domain="ab"),
            self.domain_payload(domainUserPrice=-1),
        ]
        for payload in cases:
            with self.subTest(payload=payload):
                res = self.client.post(self.domain_url, payload, format="json")
                self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)
                self.assertIn("details", res.data)
        self.order.refresh_from_db()
        self.assertEqual(self.order.domain, "")

    def test_update_domain_rejects_price_wider_than_column(self):
        self.auth(self.owner_token)
        for field in ("domainPrice", "domainUserPrice"):
            with self.subTest(field=field):
                res = self.client.post(
                    self.domain_url, self.domain_payload(**{field: 123456789012.5}), format="json"
                )
                self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)
                self.assertIn(field, res.data["details"])

        self.order.refresh_from_db()
        self.assertEqual(self.order.setup_step, Order.SetupStep.DOMAIN_SELECTION)
        self.assertIsNone(self.order.domain_price)

        res = self.client.get(reverse("order-current"))
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(str(res.data["order"]["id"]), str(self.order.id))

    def test_update_domain_rounds_prices_to_cents(self):
        self.auth(self.owner_token)
        res = self.client.post(
            self.domain_url,
            self.domain_payload(domainPrice=12.345, domainUserPrice=9999999.99),
            format="json",
        )
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.order.refresh_from_db()
        self.assertEqual(str(self.order.domain_price), "12.35")
        self.assertEqual(str(self.order.domain_user_price), "9999999.99")

    def test_update_content_reports_stored_photo_count(self):
        self.auth(self.owner_token)
        res = self.client.post(
            self.content_url,
            {"aboutText": "Peluquería familiar", "services": ["Corte"], "photoCount": 3},
            format="json",
        )
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(res.data["order"]["setupStep"], "CONTENT_UPLOAD")
        self.assertEqual(res.data["order"]["progress"], 60)
        self.assertEqual(res.data["contentData"]["aboutText"], "Peluquería familiar")
        self.assertEqual(res.data["contentData"]["photoCount"], 3)
        self.assertEqual(res.data["photoCount"], 0)
        self.assertTrue(SiteContent.objects.filter(order=self.order).exists())

    def test_update_content_rejects_string_photo_count(self):
        self.auth(self.owner_token)
        res = self.client.post(self.content_url, {"photoCount": "3"}, format="json")
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertFalse(SiteContent.objects.filter(order=self.order).exists())

    def test_update_content_of_foreign_order_is_404(self):
        self.auth(self.other_token)
        res = self.client.post(self.content_url, {"aboutText": "hola"}, format="json")
        self.assertEqual(res.status_code, status.HTTP_404_NOT_FOUND)
        self.assertFalse(SiteContent.objects.filter(order=self.order).exists())


class CurrentOrderTests(APITestCase):
    def setUp(self):
        self.user = User.objects.create_user("eva@example.com", "eva@example.com", "pass12345")
        self.other = User.objects.create_user("ivan@example.com", "ivan@example.com", "pass12345")
        self.admin = User.objects.create_user("admin@example.com", "admin@example.com", "pass12345")
        Profile.objects.create(user=self.admin, role=Profile.Role.ADMIN)
        self.user_token = Token.objects.create(user=self.user)
        self.admin_token = Token.objects.create(user=self.admin)
        self.url = reverse("order-current")

    def auth(self, token):
        self.client.credentials(HTTP_AUTHORIZATION=f"Token {token.key}")

    def make_order(self, user, **extra):
        return Order.objects.create(user=user, salon_name="Salón", email=user.email, **extra)

    def test_returns_open_order(self):
        order = self.make_order(self.user)
        self.auth(self.user_token)
        res = self.client.get(self.url)
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(res.data["order"]["id"], str(order.id))

    def test_all_completed(self):
        self.make_order(self.user, status=Order.Status.COMPLETED, setup_completed=True)
        self.auth(self.user_token)
        res = self.client.get(self.url)
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(res.data, {"message": "All orders are completed", "hasCompletedOrders": True})

    def test_no_orders(self):
        self.auth(self.user_token)
        res = self.client.get(self.url)
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(res.data["message"], "No active order found")
        self.assertIsNone(res.data["order"])

    def test_client_cannot_read_another_user(self):
        self.make_order(self.other)
        self.auth(self.user_token)
        res = self.client.get(self.url, {"userId": self.other.id})
        self.assertEqual(res.status_code, status.HTTP_403_FORBIDDEN)

    def test_client_may_name_itself(self):
        self.make_order(self.user)
        self.auth(self.user_token)
        res = self.client.get(self.url, {"userId": self.user.id})
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertIsNotNone(res.data["order"])

    def test_admin_can_read_any_user(self):
        order = self.make_order(self.other)
        self.auth(self.admin_token)
        res = self.client.get(self.url, {"userId": self.other.id})
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(res.data["order"]["id"], str(order.id))

    def test_requires_authentication(self):
        res = self.client.get(self.url)
        self.assertEqual(res.status_code, status.HTTP_401_UNAUTHORIZED)
