# profiles/api/tests/test_profiles.py
from django.contrib.auth import get_user_model
from django.urls import reverse
from rest_framework import status
from rest_framework.authtoken.models import Token
from rest_framework.test import APITestCase

from orders.models import Order
from profiles.models import Profile

User = get_user_model()


class OwnProfileTests(APITestCase):
    def setUp(self):
        self.user = User.objects.create_user("marta@example.com", "marta@example.com", "pass12345")
        self.token = Token.objects.create(user=self.user)
        self.client.credentials(HTTP_AUTHORIZATION=f"Token {self.token.key}")
        self.url = reverse("profile-detail")

    def test_profile_is_created_on_first_read(self):
        res = self.client.get(self.url)
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(res.data["email"], "marta@example.com")
        self.assertEqual(res.data["role"], "CLIENT")
        self.assertTrue(Profile.objects.filter(user=self.user).exists())

    def test_patch_updates_only_given_fields(self):
        Profile.objects.create(user=self.user, name="Marta", city="Sevilla")
        res = self.client.patch(self.url, {"salonName": "Marta Hair", "hasCompletedOnboarding": True}, format="json")
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(res.data["salonName"], "Marta Hair")
        self.assertEqual(res.data["city"], "Sevilla")
        self.assertTrue(res.data["hasCompletedOnboarding"])

    def test_role_cannot_be_self_assigned(self):
        Profile.objects.create(user=self.user)
        self.client.patch(self.url, {"role": "ADMIN"}, format="json")
        self.assertEqual(Profile.objects.get(user=self.user).role, Profile.Role.CLIENT)


class AdminUserTests(APITestCase):
    def setUp(self):
        self.admin = User.objects.create_user("admin@example.com", "admin@example.com", "pass12345")
        Profile.objects.create(user=self.admin, role=Profile.Role.ADMIN, name="Admin")
        self.user = User.objects.create_user("marta@example.com", "marta@example.com", "pass12345")
        Profile.objects.create(user=self.user, name="Marta", salon_name="Marta Hair")
        Order.objects.create(user=self.user, salon_name="Marta Hair", email="marta@example.com")
        self.admin_token = Token.objects.create(user=self.admin)
        self.user_token = Token.objects.create(user=self.user)
        self.client.credentials(HTTP_AUTHORIZATION=f"Token {self.admin_token.key}")

    def test_list_with_filters(self):
        res = self.client.get(reverse("admin-user-list"))
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(res.data["count"], 2)

        res = self.client.get(reverse("admin-user-list"), {"role": "CLIENT"})
        self.assertEqual([u["email"] for u in res.data["results"]], ["marta@example.com"])
        self.assertEqual(res.data["results"][0]["orderCount"], 1)

        res = self.client.get(reverse("admin-user-list"), {"search": "hair"})
        self.assertEqual(res.data["count"], 1)

    def test_unknown_role_filter_is_400(self):
        res = self.client.get(reverse("admin-user-list"), {"role": "OWNER"})
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)

    def test_detail_lists_orders(self):
        res = self.client.get(reverse("admin-user-detail", kwargs={"pk": self.user.pk}))
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(len(res.data["orders"]), 1)
        self.assertEqual(res.data["orders"][0]["salonName"], "Marta Hair")

    def test_deactivate_and_promote(self):
        url = reverse("admin-user-detail", kwargs={"pk": self.user.pk})
        res = self.client.patch(url, {"isActive": False, "role": "ADMIN"}, format="json")
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertFalse(res.data["isActive"])
        self.assertEqual(res.data["role"], "ADMIN")

    def test_admin_cannot_delete_itself(self):
        res = self.client.delete(reverse("admin-user-detail", kwargs={"pk": self.admin.pk}))
        self.assertEqual(res.status_code, status.HTTP_403_FORBIDDEN)
        self.assertTrue(User.objects.filter(pk=self.admin.pk).exists())

    def test_delete_user_keeps_orders(self):
        res = self.client.delete(reverse("admin-user-detail", kwargs={"pk": self.user.pk}))
        self.assertEqual(res.status_code, status.HTTP_204_NO_CONTENT)
        self.assertFalse(User.objects.filter(pk=self.user.pk).exists())
        self.assertIsNone(Order.objects.get().user_id)

    def test_client_is_forbidden(self):
        self.client.credentials(HTTP_AUTHORIZATION=f"Token {self.user_token.key}")
        res = self.client.get(reverse("admin-user-list"))
        self.assertEqual(res.status_code, status.HTTP_403_FORBIDDEN)
