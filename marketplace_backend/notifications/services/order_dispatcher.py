# notifications/services/order_dispatcher.py

"""
======================================================
PATH: notifications/services/order_dispatcher.py
======================================================
ORDER NOTIFICATION / EMAIL DISPATCHER

The order core's only entry point into notifications and email.

Failure policy:
- Every function here is SOFT-FAIL: any error is logged on the
  "notifications" logger and reported in the returned DispatchReport.
  Nothing is raised, so a dispatch failure can never abort or roll back
  an order operation.

Recipients:
- new order        -> seller (shop owner) + every admin
- refund requested -> seller + every admin
- status changed   -> buyer; admins too for Cancelled / Refund Success
- emails           -> buyer (user snapshot email)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from django.contrib.auth import get_user_model
from django.db.models import Q

from notifications.models import Notification
from notifications.services import email_sender
from notifications.services.notification_service import Recipient, create_order_notification
from permissions.roles import ROLE_ADMIN
from shops.models import Shop

logger = logging.getLogger("notifications")

ADMIN_ALERT_STATUSES = {"Cancelled", "Refund Success"}

STATUS_KINDS = {
    "Delivered": Notification.KIND_SUCCESS,
    "Refund Success": Notification.KIND_SUCCESS,
    "Cancelled": Notification.KIND_WARNING,
    "Processing refund": Notification.KIND_WARNING,
}


@dataclass
class DispatchReport:
    notified: bool = True
    email_sent: bool = False
    warnings: list[str] = field(default_factory=list)


# ============================================================
# RECIPIENTS
# ============================================================


def _admin_recipients() -> list[Recipient]:
    User = get_user_model()
    ids = (
        User.objects.filter(is_active=True)
        .filter(Q(role=ROLE_ADMIN) | Q(is_superuser=True))
        .values_list("id", flat=True)
    )
    return [Recipient(user_id=uid, recipient_type=Notification.RECIPIENT_ADMIN) for uid in ids]


def _seller_recipients(order) -> list[Recipient]:
    if order.is_platform_order:
        return []
    owner_id = Shop.objects.filter(pk=order.shop_ref).values_list("owner_id", flat=True).first()
    if owner_id is None:
        return []
    return [Recipient(user_id=owner_id, recipient_type=Notification.RECIPIENT_SELLER)]


def _buyer_recipients(order) -> list[Recipient]:
    if order.buyer_id is None:
        return []
    return [Recipient(user_id=order.buyer_id, recipient_type=Notification.RECIPIENT_USER)]


# ============================================================
# DELIVERY (soft-fail)
# ============================================================


def _notify(order, *, event: str, title: str, body: str, kind: str, recipients) -> DispatchReport:
    report = DispatchReport()
    try:
        create_order_notification(
            title=title,
            body=body,
            kind=kind,
            order_id=order.pk,
            user_id=order.buyer_id,
            recipients=recipients,
            data={"order_number": order.order_number, "status": order.status},
            action_url=f"/orders/{order.pk}",
        )
    except Exception as exc:
        logger.exception(
            "Order notification failed",
            extra={"order_id": str(order.pk), "event": event},
        )
        report.notified = False
        report.warnings.append(f"Notification '{event}' was not delivered: {exc}")
    return report


def _email(order, *, event: str, subject: str, template: str) -> DispatchReport:
    report = DispatchReport()
    try:
        html = email_sender.render(template, {"order": order, "items": list(order.items.all())})
        report.email_sent = email_sender.send(to=order.buyer_email, subject=subject, html=html)
    except Exception as exc:
        logger.exception(
            "Order email failed",
            extra={"order_id": str(order.pk), "event": event},
        )
        report.warnings.append(f"Email '{event}' was not sent: {exc}")
    return report


# ============================================================
# ORDER EVENTS
# ============================================================


def notify_new_order(order) -> DispatchReport:
    return _notify(
        order,
        event="new_order",
        title="New order received",
        body=f"Order {order.order_number} was placed for {order.total_price}.",
        kind=Notification.KIND_INFO,
        recipients=_seller_recipients(order) + _admin_recipients(),
    )


def notify_refund_requested(order) -> DispatchReport:
    return _notify(
        order,
        event="refund_requested",
        title="Refund requested",
        body=f"A refund was requested for order {order.order_number}.",
        kind=Notification.KIND_WARNING,
        recipients=_seller_recipients(order) + _admin_recipients(),
    )


def notify_status_changed(order) -> DispatchReport:
    recipients = _buyer_recipients(order)
    if order.status in ADMIN_ALERT_STATUSES:
        recipients += _admin_recipients()

    return _notify(
        order,
        event="status_changed",
        title="Order status updated",
        body=f"Order {order.order_number} is now '{order.status}'.",
        kind=STATUS_KINDS.get(order.status, Notification.KIND_INFO),
        recipients=recipients,
    )


def send_confirmation_email(order) -> DispatchReport:
    return _email(
        order,
        event="order_confirmation",
        subject=f"Order confirmed: {order.order_number}",
        template="order_confirmation.html",
    )


def send_cancellation_email(order) -> DispatchReport:
    return _email(
        order,
        event="order_cancelled",
        subject=f"Order cancelled: {order.order_number}",
        template="order_cancelled.html",
    )


def send_refund_email(order) -> DispatchReport:
    return _email(
        order,
        event="refund_success",
        subject=f"Refund processed: {order.order_number}",
        template="refund_success.html",
    )
