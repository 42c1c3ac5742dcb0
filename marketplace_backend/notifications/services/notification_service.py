# notifications/services/notification_service.py

"""
NOTIFICATION SERVICE

One canonical write path for order notifications:

    create_order_notification(title=..., body=..., kind=..., order_id=...,
                              user_id=..., recipients=[Recipient(...), ...])

plus the inbox operations used by the API (list / unread count / mark read).
"""

from __future__ import annotations

from dataclasses import dataclass

from django.db import transaction
from django.utils import timezone

from notifications.models import Notification


@dataclass(frozen=True)
class Recipient:
    user_id: object
    recipient_type: str = Notification.RECIPIENT_USER


def _dedupe(recipients) -> list[Recipient]:
    seen = set()
    out = []
    for r in recipients or []:
        if r.user_id is None:
            continue
        key = (str(r.user_id), r.recipient_type)
        if key in seen:
            continue
        seen.add(key)
        out.append(r)
    return out


@transaction.atomic
def create_order_notification(
    *,
    title: str,
    body: str,
    kind: str = Notification.KIND_INFO,
    order_id=None,
    user_id=None,
    recipients=None,
    data=None,
    action_url: str = "",
) -> list[Notification]:
    """
    Create one Notification per recipient.

    user_id: the acting user (stored as actor_id), if any.
    """
    rows = [
        Notification(
            recipient_id=r.user_id,
            recipient_type=r.recipient_type,
            kind=kind,
            title=title,
            message=body,
            data=dict(data or {}),
            order_id=order_id,
            actor_id=user_id,
            action_url=action_url,
        )
        for r in _dedupe(recipients)
    ]
    if not rows:
        return []
    return Notification.objects.bulk_create(rows)


# ============================================================
# INBOX
# ============================================================


def inbox_for(user):
    return Notification.objects.filter(recipient=user)


def unread_count(user) -> int:
    return inbox_for(user).filter(is_read=False).count()


def mark_read(*, user, notification_id) -> Notification:
    notification = inbox_for(user).get(pk=notification_id)
    if not notification.is_read:
        notification.is_read = True
        notification.read_at = timezone.now()
        notification.save(update_fields=["is_read", "read_at"])
    return notification


def mark_all_read(*, user) -> int:
    return inbox_for(user).filter(is_read=False).update(is_read=True, read_at=timezone.now())
