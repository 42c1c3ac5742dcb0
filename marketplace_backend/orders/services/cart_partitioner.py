# orders/services/cart_partitioner.py

"""
CART PARTITIONER

Purpose:
- Group a combined (multi-seller) cart by seller identity.

Rules:
- Every input line lands in exactly one group.
- Line order inside a group follows the input cart.
- Group order follows the first occurrence of each seller in the input cart.
- Lines without a seller belong to PLATFORM_SELLER (platform-owned catalog).
- An empty cart yields an empty mapping; rejecting it is the caller's job.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal

from orders.models.order import PLATFORM_SELLER


@dataclass(frozen=True)
class CartLine:
    product_id: object
    quantity: int
    discount_price: Decimal
    shop_ref: str = PLATFORM_SELLER
    shop_name: str = ""
    name: str = ""
    original_price: Decimal | None = None
    final_price: Decimal | None = None
    selected_attributes: dict = field(default_factory=dict)
    position: int = 0

    @property
    def effective_unit_price(self) -> Decimal:
        # Variant / attribute specific price wins over the base discount price.
        if self.final_price is not None:
            return Decimal(str(self.final_price))
        return Decimal(str(self.discount_price or 0))

    @property
    def line_value(self) -> Decimal:
        return self.effective_unit_price * int(self.quantity)


def seller_of(line: CartLine) -> str:
    ref = str(line.shop_ref or "").strip()
    return ref or PLATFORM_SELLER


def partition_cart(lines) -> dict[str, list[CartLine]]:
    groups: dict[str, list[CartLine]] = {}
    for line in lines:
        groups.setdefault(seller_of(line), []).append(line)
    return groups
