from django.db import models


class ContactMessage(models.Model):
    """Inquiry sent through the public contact form."""

    class Status(models.TextChoices):
        UNREAD = "UNREAD", "UNREAD"
        READ = "READ", "READ"
        REPLIED = "REPLIED", "REPLIED"
        ARCHIVED = "ARCHIVED", "ARCHIVED"

    name = models.CharField(max_length=150)
    email = models.EmailField()
    phone = models.CharField(max_length=50, blank=True, default="")
    subject = models.CharField(max_length=200, blank=True, default="")
    message = models.TextField()
    status = models.CharField(max_length=20, choices=Status.choices, default=Status.UNREAD)
    replied_at = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]

    def __str__(self) -> str:
        return f"{self.name} <{self.email}>: {self.subject or self.message[:40]}"
