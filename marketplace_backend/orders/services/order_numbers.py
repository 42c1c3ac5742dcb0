# orders/services/order_numbers.py

"""
ORDER NUMBER GENERATOR

Format: <prefix>-<zero-padded sequence>, e.g. wanttar-00001.

The sequence lives in one OrderSequence row that is locked
(SELECT ... FOR UPDATE) while it is incremented, so concurrent
checkouts never draw the same number.
"""

from __future__ import annotations

from django.conf import settings
from django.db import transaction

from orders.models import OrderSequence

SEQUENCE_NAME = "order"


def format_order_number(value: int, *, prefix: str | None = None, width: int | None = None) -> str:
    cfg = settings.MARKETPLACE
    prefix = cfg.get("ORDER_NUMBER_PREFIX", "wanttar") if prefix is None else prefix
    width = int(cfg.get("ORDER_NUMBER_WIDTH", 5)) if width is None else int(width)
    return f"{prefix}-{int(value):0{width}d}"


@transaction.atomic
def next_order_number() -> str:
    seq, _ = OrderSequence.objects.select_for_update().get_or_create(name=SEQUENCE_NAME)
    seq.value += 1
    seq.save(update_fields=["value"])
    return format_order_number(seq.value)
