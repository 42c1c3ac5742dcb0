# products/services/inventory.py

"""
======================================================
PATH: products/services/inventory.py
======================================================
INVENTORY SERVICE

Purpose:
- The single write path for Product.stock / Product.sold_out.

Rules:
- Quantities are integer units.
- Updates are atomic increments at the storage layer
  (UPDATE ... SET stock = stock + delta), so two orders touching the same
  product concurrently cannot lose each other's update.
- A missing product is a hard error; callers decide whether earlier
  mutations are kept.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from django.db.models import F

from products.models import Product

logger = logging.getLogger(__name__)


class InventoryError(Exception):
    """Base inventory exception"""


class ProductMissingError(InventoryError):
    pass


@dataclass(frozen=True)
class StockDelta:
    product_id: object
    delta_stock: int
    delta_sold_out: int


def _to_int_delta(value, *, field_name: str) -> int:
    if isinstance(value, bool):
        raise InventoryError(f"{field_name} must be an integer")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise InventoryError(f"{field_name} must be an integer")


def update_stock(*, product_id, delta_stock, delta_sold_out) -> StockDelta:
    """
    Apply (delta_stock, delta_sold_out) to one product atomically.

    Fulfilment commits stock with (-qty, +qty); cancellation and refunds
    restore it with (+qty, -qty).
    """
    if product_id is None:
        raise ProductMissingError("product reference is required")

    d_stock = _to_int_delta(delta_stock, field_name="delta_stock")
    d_sold = _to_int_delta(delta_sold_out, field_name="delta_sold_out")

    updated = Product.objects.filter(pk=product_id).update(
        stock=F("stock") + d_stock,
        sold_out=F("sold_out") + d_sold,
    )
    if not updated:
        raise ProductMissingError(f"Product {product_id} not found")

    logger.info(
        "Stock updated",
        extra={"product_id": str(product_id), "delta_stock": d_stock, "delta_sold_out": d_sold},
    )
    return StockDelta(product_id=product_id, delta_stock=d_stock, delta_sold_out=d_sold)
