# orders/services/payments.py

"""
PAYMENT CLASSIFICATION

A declared payment type is resolved ONCE, at checkout, into a closed
PaymentKind. Everything downstream reads Order.payment_kind.
"""

from __future__ import annotations

from django.conf import settings

from orders.models import PaymentKind


def _normalize(value) -> str:
    return str(value or "").strip().lower()


def cod_payment_types() -> set[str]:
    configured = settings.MARKETPLACE.get("COD_PAYMENT_TYPES") or []
    return {_normalize(v) for v in configured if _normalize(v)}


def classify_payment_type(payment_type, *, cod_types=None) -> str:
    known = cod_payment_types() if cod_types is None else {_normalize(v) for v in cod_types}
    if _normalize(payment_type) in known:
        return PaymentKind.COD
    return PaymentKind.PREPAID
