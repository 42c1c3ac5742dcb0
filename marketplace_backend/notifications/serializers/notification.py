from rest_framework import serializers

from notifications.models import Notification


class NotificationSerializer(serializers.ModelSerializer):
    class Meta:
        model = Notification
        fields = [
            "id",
            "recipient_type",
            "kind",
            "title",
            "message",
            "data",
            "order_id",
            "actor_id",
            "is_read",
            "read_at",
            "action_url",
            "created_at",
        ]
        read_only_fields = fields
