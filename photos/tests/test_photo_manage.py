# photos/tests/test_photo_manage.py
import shutil
import tempfile
from unittest.mock import MagicMock, patch

from django.contrib.auth import get_user_model
from django.test import override_settings
from django.urls import reverse
from rest_framework import status
from rest_framework.authtoken.models import Token
from rest_framework.test import APITestCase

from orders.models import Order
from photos.models import Photo

User = get_user_model()


def make_photo(photo_id, user=None, order=None, **extra):
    data = {
        "filename": f"{photo_id}.jpg",
        "stored_name": f"{photo_id}.jpg",
        "original_url": f"/uploads/photos/{photo_id}.jpg",
        "thumbnail_url": f"/uploads/thumbnails/thumb_{photo_id}.jpg",
        "size": 1234,
        "mime_type": "image/jpeg",
        "upload_status": Photo.UploadStatus.COMPLETED,
    }
    data.update(extra)
    return Photo.objects.create(id=photo_id, user=user, order=order, **data)


class PhotoManageTests(APITestCase):
    def setUp(self):
        self.media_root = tempfile.mkdtemp()
        media = override_settings(MEDIA_ROOT=self.media_root)
        media.enable()
        self.addCleanup(media.disable)
        self.addCleanup(shutil.rmtree, self.media_root, ignore_errors=True)

        self.user = User.objects.create_user("nora@example.com", "nora@example.com", "pass12345")
        self.other = User.objects.create_user("tom@example.com", "tom@example.com", "pass12345")
        self.token = Token.objects.create(user=self.user)
        self.order = Order.objects.create(user=self.user, salon_name="Nora", email="nora@example.com")
        self.other_order = Order.objects.create(user=self.other, salon_name="Tom", email="tom@example.com")

        self.mine_a = make_photo("a", user=self.user, order=self.order, sort_order=0)
        self.mine_b = make_photo("b", user=self.user, order=self.order, sort_order=1)
        self.foreign = make_photo("x", user=self.other, order=self.other_order, alt="original")
        self.list_url = reverse("photo-list")
        self.client.credentials(HTTP_AUTHORIZATION=f"Token {self.token.key}")

    def test_list_by_order(self):
        res = self.client.get(self.list_url, {"orderId": str(self.order.id)})
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(res.data["count"], 2)
        self.assertEqual([p["id"] for p in res.data["photos"]], ["a", "b"])

    def test_list_foreign_order_is_404(self):
        res = self.client.get(self.list_url, {"orderId": str(self.other_order.id)})
        self.assertEqual(res.status_code, status.HTTP_404_NOT_FOUND)

    def test_list_other_user_is_403(self):
        res = self.client.get(self.list_url, {"userId": self.other.id})
        self.assertEqual(res.status_code, status.HTTP_403_FORBIDDEN)

    def test_get_foreign_photo_is_404(self):
        res = self.client.get(reverse("photo-detail", kwargs={"photo_id": "x"}))
        self.assertEqual(res.status_code, status.HTTP_404_NOT_FOUND)

    def test_update_alt_and_sort_order(self):
        url = reverse("photo-detail", kwargs={"photo_id": "a"})
        res = self.client.put(url, {"alt": "Fachada", "sortOrder": 5}, format="json")
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.mine_a.refresh_from_db()
        self.assertEqual(self.mine_a.alt, "Fachada")
        self.assertEqual(self.mine_a.sort_order, 5)

    def test_delete_with_missing_files_succeeds(self):
        res = self.client.delete(reverse("photo-detail", kwargs={"photo_id": "a"}))
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(res.data, {"success": True, "message": "Photo deleted successfully"})
        self.assertFalse(Photo.objects.filter(pk="a").exists())

    def test_delete_survives_storage_errors(self):
        storage = MagicMock()
        storage.delete.side_effect = PermissionError("read-only filesystem")
        with patch("photos.ingestion.default_storage", storage):
            res = self.client.delete(reverse("photo-detail", kwargs={"photo_id": "a"}))
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(storage.delete.call_count, 2)
        self.assertFalse(Photo.objects.filter(pk="a").exists())

    def test_delete_foreign_photo_is_404(self):
        res = self.client.delete(reverse("photo-detail", kwargs={"photo_id": "x"}))
        self.assertEqual(res.status_code, status.HTTP_404_NOT_FOUND)
        self.assertTrue(Photo.objects.filter(pk="x").exists())

    def test_bulk_reorder(self):
        res = self.client.put(
            self.list_url, {"action": "reorder", "photoIds": ["b", "a"], "data": [0, 1]}, format="json"
        )
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(res.data["affectedCount"], 2)
        self.mine_a.refresh_from_db()
        self.mine_b.refresh_from_db()
        self.assertEqual((self.mine_b.sort_order, self.mine_a.sort_order), (0, 1))

    def test_bulk_update_alt(self):
        res = self.client.put(
            self.list_url,
            {"action": "update_alt", "photoIds": ["a", "b"], "data": {"alt": "Interior"}},
            format="json",
        )
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(set(Photo.objects.filter(alt="Interior").values_list("id", flat=True)), {"a", "b"})

    def test_bulk_delete(self):
        res = self.client.put(self.list_url, {"action": "delete", "photoIds": ["a", "b"]}, format="json")
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(list(Photo.objects.values_list("id", flat=True)), ["x"])

    def test_bulk_with_foreign_photo_changes_nothing(self):
        res = self.client.put(
            self.list_url,
            {"action": "update_alt", "photoIds": ["a", "x"], "data": {"alt": "hijacked"}},
            format="json",
        )
        self.assertEqual(res.status_code, status.HTTP_403_FORBIDDEN)
        self.assertEqual(res.data["error"], "Some photos not found or unauthorized")
        self.foreign.refresh_from_db()
        self.mine_a.refresh_from_db()
        self.assertEqual(self.foreign.alt, "original")
        self.assertEqual(self.mine_a.alt, "")

    def test_bulk_delete_with_foreign_photo_keeps_everything(self):
        res = self.client.put(self.list_url, {"action": "delete", "photoIds": ["a", "x"]}, format="json")
        self.assertEqual(res.status_code, status.HTTP_403_FORBIDDEN)
        self.assertEqual(Photo.objects.count(), 3)

    def test_bulk_reorder_needs_one_value_per_photo(self):
        res = self.client.put(
            self.list_url, {"action": "reorder", "photoIds": ["a", "b"], "data": [0]}, format="json"
        )
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)
