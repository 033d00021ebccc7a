"""Contact API views.

- POST /api/contact/                          public contact form (throttled)
- GET  /api/admin/messages/?status=&search=   message inbox
- GET/DELETE /api/admin/messages/{id}/        opening an UNREAD message marks it READ
- PATCH /api/admin/messages/{id}/status/
- POST  /api/admin/messages/{id}/reply/       email the sender, mark REPLIED
"""

import logging

from django.db.models import Q
from django.utils import timezone
from rest_framework import generics, status
from rest_framework.exceptions import NotFound, ValidationError
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from common.api.permissions import IsAdminRole
from common.exceptions import ExternalServiceFailure
from common.pagination import AdminPagination
from common.throttling import ContactMessageThrottle
from contact.emails import send_reply
from contact.models import ContactMessage
from .serializers import (
    ContactMessageCreateSerializer,
    ContactMessageSerializer,
    MessageStatusSerializer,
    ReplySerializer,
)

logger = logging.getLogger(__name__)


def _message_or_404(pk) -> ContactMessage:
    try:
        return ContactMessage.objects.get(pk=pk)
    except ContactMessage.DoesNotExist:
        raise NotFound("Message not found")


class ContactMessageCreateAPIView(generics.CreateAPIView):
    """Public contact form."""

    authentication_classes = []
    permission_classes = [AllowAny]
    throttle_classes = [ContactMessageThrottle]
    serializer_class = ContactMessageCreateSerializer

    def create(self, request, *args, **kwargs):
        ser = self.get_serializer(data=request.data)
        ser.is_valid(raise_exception=True)
        message = ser.save()
        logger.info("Contact message %s received from %s", message.pk, message.email)
        return Response(
            {"success": True, "message": ContactMessageSerializer(message).data},
            status=status.HTTP_201_CREATED,
        )


class AdminMessageListAPIView(generics.ListAPIView):
    permission_classes = [IsAdminRole]
    serializer_class = ContactMessageSerializer
    pagination_class = AdminPagination

    def get_queryset(self):
        qs = ContactMessage.objects.all()
        params = self.request.query_params

        status_filter = params.get("status")
        if status_filter and status_filter.upper() != "ALL":
            if status_filter not in ContactMessage.Status.values:
                raise ValidationError({"status": [f"Unknown status '{status_filter}'."]})
            qs = qs.filter(status=status_filter)

        search = (params.get("search") or "").strip()
        if search:
            qs = qs.filter(
                Q(name__icontains=search)
                | Q(email__icontains=search)
                | Q(subject__icontains=search)
                | Q(message__icontains=search)
            )
        return qs.order_by("-created_at")


class AdminMessageDetailAPIView(APIView):
    permission_classes = [IsAdminRole]

    def get(self, request, pk):
        message = _message_or_404(pk)
        if message.status == ContactMessage.Status.UNREAD:
            message.status = ContactMessage.Status.READ
            message.save(update_fields=["status", "updated_at"])
        return Response(ContactMessageSerializer(message).data)

    def delete(self, request, pk):
        message = _message_or_404(pk)
        message.delete()
        logger.info("Contact message %s deleted by %s", pk, request.user.email or request.user.pk)
        return Response(status=status.HTTP_204_NO_CONTENT)


class AdminMessageStatusAPIView(APIView):
    permission_classes = [IsAdminRole]

    def patch(self, request, pk):
        ser = MessageStatusSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        message = _message_or_404(pk)
        message.status = ser.validated_data["status"]
        message.save(update_fields=["status", "updated_at"])
        return Response(ContactMessageSerializer(message).data)


class AdminMessageReplyAPIView(APIView):
    permission_classes = [IsAdminRole]

    def post(self, request, pk):
        ser = ReplySerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        data = ser.validated_data
        message = _message_or_404(pk)

        result = send_reply(
            message,
            subject=data["subject"],
            body=data["replyContent"],
            cc=data.get("cc"),
            bcc=data.get("bcc"),
        )
        if not result.success:
            raise ExternalServiceFailure(
                "email", detail=result.error, public_message="Failed to send the reply"
            )

        message.status = ContactMessage.Status.REPLIED
        message.replied_at = timezone.now()
        message.save(update_fields=["status", "replied_at", "updated_at"])
        logger.info("Reply to contact message %s sent by %s", message.pk, request.user.email or request.user.pk)
        return Response(
            {"success": True, "attempts": result.attempts, "message": ContactMessageSerializer(message).data}
        )
