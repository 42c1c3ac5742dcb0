# notifications/tests/test_inbox.py

import uuid

from django.contrib.auth import get_user_model
from django.test import TestCase
from rest_framework import status
from rest_framework.test import APIClient

from notifications.models import Notification
from notifications.services.notification_service import Recipient, create_order_notification

User = get_user_model()


class NotificationServiceTests(TestCase):
    def setUp(self):
        self.user = User.objects.create_user(email="user@example.com", password="pass")
        self.admin = User.objects.create_user(email="admin@example.com", password="pass", role="admin")

    def test_one_row_per_recipient(self):
        order_id = uuid.uuid4()
        rows = create_order_notification(
            title="New order received",
            body="Order wanttar-00001 was placed.",
            kind=Notification.KIND_INFO,
            order_id=order_id,
            user_id=self.user.pk,
            recipients=[
                Recipient(user_id=self.user.pk),
                Recipient(user_id=self.admin.pk, recipient_type=Notification.RECIPIENT_ADMIN),
                Recipient(user_id=self.admin.pk, recipient_type=Notification.RECIPIENT_ADMIN),
            ],
        )

        self.assertEqual(len(rows), 2)
        self.assertEqual(Notification.objects.filter(order_id=order_id).count(), 2)
        self.assertEqual(Notification.objects.get(recipient=self.admin).actor_id, self.user.pk)

    def test_no_recipients_writes_nothing(self):
        self.assertEqual(create_order_notification(title="t", body="b", recipients=[]), [])
        self.assertEqual(Notification.objects.count(), 0)


class NotificationInboxApiTests(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.user = User.objects.create_user(email="user@example.com", password="pass")
        self.other = User.objects.create_user(email="other@example.com", password="pass")

        for i in range(3):
            Notification.objects.create(recipient=self.user, title=f"n{i}", message="hello")
        Notification.objects.create(recipient=self.other, title="not yours", message="hello")

        self.client.force_authenticate(self.user)

    def test_list_only_mine(self):
        res = self.client.get("/api/notifications/")

        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(res.data["count"], 3)

    def test_unread_count_and_mark_one(self):
        self.assertEqual(self.client.get("/api/notifications/unread-count/").data["unread"], 3)

        target = Notification.objects.filter(recipient=self.user).first()
        res = self.client.post(f"/api/notifications/{target.pk}/read/")

        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertTrue(res.data["is_read"])
        self.assertIsNotNone(res.data["read_at"])
        self.assertEqual(self.client.get("/api/notifications/unread-count/").data["unread"], 2)

    def test_mark_all_read(self):
        res = self.client.post("/api/notifications/read-all/")

        self.assertEqual(res.data["updated"], 3)
        self.assertEqual(self.client.get("/api/notifications/unread-count/").data["unread"], 0)
        self.assertFalse(Notification.objects.get(recipient=self.other).is_read)

    def test_cannot_read_someone_elses(self):
        foreign = Notification.objects.get(recipient=self.other)
        res = self.client.post(f"/api/notifications/{foreign.pk}/read/")
        self.assertEqual(res.status_code, status.HTTP_404_NOT_FOUND)
