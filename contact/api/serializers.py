from rest_framework import serializers

from common.fields import StrictCharField
from contact.models import ContactMessage


class ContactMessageCreateSerializer(serializers.ModelSerializer):
    name = StrictCharField(min_length=2, max_length=150)
    phone = StrictCharField(required=False, allow_blank=True, max_length=50)
    subject = StrictCharField(required=False, allow_blank=True, max_length=200)
    message = StrictCharField(min_length=10, max_length=5000)

    class Meta:
        model = ContactMessage
        fields = ["name", "email", "phone", "subject", "message"]


class ContactMessageSerializer(serializers.ModelSerializer):
    repliedAt = serializers.DateTimeField(source="replied_at", read_only=True)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)
    updatedAt = serializers.DateTimeField(source="updated_at", read_only=True)

    class Meta:
        model = ContactMessage
        fields = [
            "id",
            "name",
            "email",
            "phone",
            "subject",
            "message",
            "status",
            "repliedAt",
            "createdAt",
            "updatedAt",
        ]


class MessageStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=ContactMessage.Status.choices)


class ReplySerializer(serializers.Serializer):
    subject = StrictCharField(max_length=200)
    replyContent = StrictCharField()
    cc = serializers.ListField(child=serializers.EmailField(), required=False)
    bcc = serializers.ListField(child=serializers.EmailField(), required=False)
