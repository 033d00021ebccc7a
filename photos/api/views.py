"""Photos API views.

- POST /api/photos/upload/       multipart upload (throttled)
- GET  /api/photos/              list the caller's photos (by order or user)
- PUT  /api/photos/              bulk reorder / delete / update_alt
- GET/PUT/DELETE /api/photos/{id}/

A photo belongs to the caller when it was uploaded by the caller or is
attached to one of the caller's orders. Photos of other accounts are reported
as 404; a bulk request naming any of them is rejected as a whole with 403.
"""

import logging
import uuid

from django.db import transaction
from django.db.models import Q
from rest_framework import status
from rest_framework.exceptions import NotFound, PermissionDenied
from rest_framework.parsers import FormParser, MultiPartParser
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from common.throttling import PhotoUploadThrottle
from orders.models import Order
from photos.ingestion import delete_photo_files, ingest_upload
from photos.models import Photo
from .serializers import (
    BulkPhotoSerializer,
    PhotoSerializer,
    PhotoUpdateSerializer,
    PhotoUploadSerializer,
)

logger = logging.getLogger(__name__)


# ----------------------------- helpers (module-level) -----------------------------

def _owned_photos(user):
    return Photo.objects.filter(Q(user=user) | Q(order__user=user))


def _owned_photo_or_404(user, photo_id):
    photo = _owned_photos(user).filter(pk=photo_id).first()
    if photo is None:
        raise NotFound("Photo not found")
    return photo


def _parse_uuid(raw):
    try:
        return uuid.UUID(str(raw))
    except ValueError:
        raise NotFound("Order not found")


def _owned_order_or_404(user, order_id):
    order = Order.objects.filter(pk=order_id, user=user).first()
    if order is None:
        raise NotFound("Order not found")
    return order


# --------------------------------------- views ---------------------------------------

class PhotoUploadAPIView(APIView):
    """POST /api/photos/upload/ stores one image for the caller."""

    permission_classes = [IsAuthenticated]
    parser_classes = (MultiPartParser, FormParser)
    throttle_classes = [PhotoUploadThrottle]

    def post(self, request):
        ser = PhotoUploadSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        data = ser.validated_data

        order = None
        if data.get("orderId"):
            order = _owned_order_or_404(request.user, data["orderId"])

        photo = ingest_upload(data["file"], data["photoId"], order=order, user=request.user)
        return Response(
            {"success": True, "photo": PhotoSerializer(photo).data},
            status=status.HTTP_201_CREATED,
        )


class PhotoListBulkAPIView(APIView):
    """GET lists photos; PUT applies one bulk action to a set of photos."""

    permission_classes = [IsAuthenticated]

    def get(self, request):
        params = request.query_params
        order_id = params.get("orderId")
        user_id = params.get("userId")

        if order_id:
            order = _owned_order_or_404(request.user, _parse_uuid(order_id))
            qs = Photo.objects.filter(order=order)
        elif user_id:
            if user_id != str(request.user.id):
                raise PermissionDenied("You may only list your own photos.")
            qs = Photo.objects.filter(user=request.user)
        else:
            qs = Photo.objects.filter(user=request.user)

        upload_status = params.get("status")
        if upload_status in Photo.UploadStatus.values:
            qs = qs.filter(upload_status=upload_status)

        photos = PhotoSerializer(qs.order_by("sort_order", "created_at"), many=True).data
        return Response({"success": True, "photos": photos, "count": len(photos)})

    def put(self, request):
        ser = BulkPhotoSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        action = ser.validated_data["action"]
        photo_ids = ser.validated_data["photoIds"]
        data = ser.validated_data.get("data")

        wanted = set(photo_ids)
        photos = list(_owned_photos(request.user).filter(pk__in=wanted))
        if len(photos) != len(wanted):
            raise PermissionDenied("Some photos not found or unauthorized")

        with transaction.atomic():
            if action == "reorder":
                for photo_id, sort_order in zip(photo_ids, data):
                    Photo.objects.filter(pk=photo_id).update(sort_order=sort_order)
            elif action == "update_alt":
                Photo.objects.filter(pk__in=wanted).update(alt=data["alt"])
            else:
                for photo in photos:
                    delete_photo_files(photo)
                Photo.objects.filter(pk__in=wanted).delete()

        logger.info("Bulk %s on %s photo(s) by user %s", action, len(wanted), request.user.pk)
        return Response(
            {
                "success": True,
                "message": f"{action} completed successfully",
                "affectedCount": len(photo_ids),
            }
        )


class PhotoDetailAPIView(APIView):
    """GET/PUT/DELETE /api/photos/{id}/ for one of the caller's photos."""

    permission_classes = [IsAuthenticated]

    def get(self, request, photo_id):
        photo = _owned_photo_or_404(request.user, photo_id)
        return Response({"photo": PhotoSerializer(photo).data})

    def put(self, request, photo_id):
        ser = PhotoUpdateSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        photo = _owned_photo_or_404(request.user, photo_id)

        fields = []
        if "alt" in ser.validated_data:
            photo.alt = ser.validated_data["alt"]
            fields.append("alt")
        if "sortOrder" in ser.validated_data:
            photo.sort_order = ser.validated_data["sortOrder"]
            fields.append("sort_order")
        if fields:
            photo.save(update_fields=fields + ["updated_at"])

        return Response({"success": True, "photo": PhotoSerializer(photo).data})

    def delete(self, request, photo_id):
        photo = _owned_photo_or_404(request.user, photo_id)
        delete_photo_files(photo)
        photo.delete()
        return Response({"success": True, "message": "Photo deleted successfully"})
