# notifications/views/inbox.py

"""
NOTIFICATION INBOX

- GET  /                 my notifications (newest first, ?is_read=true|false)
- GET  /unread-count/    {"unread": n}
- POST /{id}/read/       mark one as read
- POST /read-all/        mark all as read -> {"updated": n}
"""

from drf_spectacular.utils import extend_schema
from rest_framework import mixins, status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from notifications.models import Notification
from notifications.serializers import NotificationSerializer
from notifications.services import notification_service


class NotificationViewSet(
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    viewsets.GenericViewSet,
):
    serializer_class = NotificationSerializer
    permission_classes = [IsAuthenticated]
    filterset_fields = ["is_read", "kind"]

    def get_queryset(self):
        if getattr(self, "swagger_fake_view", False):
            return Notification.objects.none()
        return notification_service.inbox_for(self.request.user)

    @action(detail=False, methods=["get"], url_path="unread-count")
    def unread_count(self, request):
        return Response({"unread": notification_service.unread_count(request.user)})

    @extend_schema(request=None, responses={200: NotificationSerializer})
    @action(detail=True, methods=["post"], url_path="read")
    def mark_read(self, request, pk=None):
        notification = self.get_object()
        notification = notification_service.mark_read(user=request.user, notification_id=notification.pk)
        return Response(NotificationSerializer(notification).data, status=status.HTTP_200_OK)

    @extend_schema(request=None)
    @action(detail=False, methods=["post"], url_path="read-all")
    def mark_all_read(self, request):
        updated = notification_service.mark_all_read(user=request.user)
        return Response({"updated": updated}, status=status.HTTP_200_OK)
