# notifications/services/email_sender.py

"""
TRANSACTIONAL EMAIL SENDER

send(to=..., subject=..., html=...) over Django's configured email backend.
Templates live under notifications/templates/notifications/email/.
"""

from __future__ import annotations

import smtplib

from django.conf import settings
from django.core.mail import BadHeaderError, send_mail
from django.template.loader import render_to_string
from django.utils.html import strip_tags

from orders.services.exceptions import NotificationDispatchError


def emails_enabled() -> bool:
    return bool(settings.MARKETPLACE.get("ORDER_EMAILS_ENABLED", True))


def render(template_name: str, context: dict) -> str:
    return render_to_string(f"notifications/email/{template_name}", context)


def send(*, to: str, subject: str, html: str) -> bool:
    """
    Returns True when the backend accepted the message, False when email is
    switched off or there is no recipient. Transport failures raise
    NotificationDispatchError.
    """
    to = (to or "").strip()
    if not to or not emails_enabled():
        return False

    try:
        sent = send_mail(
            subject=subject,
            message=strip_tags(html),
            from_email=settings.DEFAULT_FROM_EMAIL,
            recipient_list=[to],
            html_message=html,
            fail_silently=False,
        )
    except (smtplib.SMTPException, BadHeaderError, OSError) as exc:
        raise NotificationDispatchError(f"Email to {to} failed: {exc}") from exc

    return bool(sent)
