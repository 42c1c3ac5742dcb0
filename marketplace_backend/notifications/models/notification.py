# notifications/models/notification.py

import uuid

from django.conf import settings
from django.db import models

User = settings.AUTH_USER_MODEL


class Notification(models.Model):
    """
    In-app notification addressed to one user.

    recipient_type records the capacity the user was notified in
    (the same admin can also be a buyer).
    """

    RECIPIENT_ADMIN = "admin"
    RECIPIENT_USER = "user"
    RECIPIENT_SELLER = "seller"

    RECIPIENT_CHOICES = [
        (RECIPIENT_ADMIN, "Admin"),
        (RECIPIENT_USER, "User"),
        (RECIPIENT_SELLER, "Seller"),
    ]

    KIND_INFO = "info"
    KIND_SUCCESS = "success"
    KIND_WARNING = "warning"
    KIND_ERROR = "error"

    KIND_CHOICES = [
        (KIND_INFO, "Info"),
        (KIND_SUCCESS, "Success"),
        (KIND_WARNING, "Warning"),
        (KIND_ERROR, "Error"),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    recipient = models.ForeignKey(
        User,
        on_delete=models.CASCADE,
        related_name="notifications",
    )
    recipient_type = models.CharField(
        max_length=16, choices=RECIPIENT_CHOICES, default=RECIPIENT_USER
    )

    kind = models.CharField(max_length=16, choices=KIND_CHOICES, default=KIND_INFO)
    title = models.CharField(max_length=255)
    message = models.TextField()
    data = models.JSONField(default=dict, blank=True)

    order_id = models.UUIDField(null=True, blank=True, db_index=True)
    actor_id = models.UUIDField(
        null=True,
        blank=True,
        help_text="User whose action triggered the notification, if any",
    )

    is_read = models.BooleanField(default=False)
    read_at = models.DateTimeField(null=True, blank=True)
    action_url = models.CharField(max_length=255, blank=True, default="")

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["recipient", "is_read"], name="notification_unread_idx"),
        ]

    def __str__(self):
        return f"{self.title} -> {self.recipient_id}"
