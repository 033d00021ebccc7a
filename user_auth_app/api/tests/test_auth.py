# user_auth_app/api/tests/test_auth.py
import json
import os
import shutil
import tempfile

from django.contrib.auth import get_user_model
from django.test import override_settings
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from profiles.models import Profile

User = get_user_model()

PASSWORD = "Tijeras-Doradas-42"


class AuthTests(APITestCase):
    def setUp(self):
        tmp = tempfile.mkdtemp()
        self.addCleanup(shutil.rmtree, tmp, ignore_errors=True)
        self.settings_file = os.path.join(tmp, "site_settings.json")
        override = override_settings(SITE_SETTINGS_FILE=self.settings_file)
        override.enable()
        self.addCleanup(override.disable)

    def register(self, **overrides):
        payload = {
            "name": "Carmen",
            "email": "Carmen@Example.com",
            "password": PASSWORD,
            "repeated_password": PASSWORD,
            "salonName": "Carmen Estilistas",
            "phone": "600111222",
        }
        payload.update(overrides)
        return self.client.post(reverse("registration"), payload, format="json")

    def test_registration_creates_client_profile(self):
        res = self.register()
        self.assertEqual(res.status_code, status.HTTP_201_CREATED)
        self.assertEqual(res.data["email"], "carmen@example.com")
        self.assertEqual(res.data["name"], "Carmen")
        self.assertEqual(res.data["role"], "CLIENT")
        self.assertIn("token", res.data)

        prof = Profile.objects.get(user_id=res.data["user_id"])
        self.assertEqual(prof.salon_name, "Carmen Estilistas")
        self.assertEqual(prof.role, Profile.Role.CLIENT)

    def test_duplicate_email_is_rejected(self):
        self.register()
        res = self.register(email="carmen@example.com")
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("email", res.data["details"])
        self.assertEqual(User.objects.count(), 1)

    def test_password_mismatch(self):
        res = self.register(repeated_password="Otra-Cosa-Distinta-9")
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("repeated_password", res.data["details"])

    def test_closed_registrations(self):
        with open(self.settings_file, "w", encoding="utf-8") as fh:
            json.dump({"allowRegistrations": False}, fh)
        res = self.register()
        self.assertEqual(res.status_code, status.HTTP_403_FORBIDDEN)
        self.assertEqual(res.data["error"], "Registrations are currently closed.")
        self.assertFalse(User.objects.exists())

    def test_login(self):
        self.register()
        res = self.client.post(
            reverse("login"), {"email": "CARMEN@example.com", "password": PASSWORD}, format="json"
        )
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(res.data["role"], "CLIENT")
        self.assertIsNotNone(User.objects.get(email="carmen@example.com").last_login)

    def test_login_with_wrong_password(self):
        self.register()
        res = self.client.post(reverse("login"), {"email": "carmen@example.com", "password": "nope"}, format="json")
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)
