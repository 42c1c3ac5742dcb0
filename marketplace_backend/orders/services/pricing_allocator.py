# orders/services/pricing_allocator.py

"""
PRICING ALLOCATOR

Purpose:
- Split cart-wide charges (shipping, discount, tax) across sellers in
  proportion to each seller's share of the total cart value.

Rules:
- share = (seller_sub_total / cart_total_value) * aggregate_charge
- seller_total = sub_total + shipping + tax - discount
- cart_total_value == 0 -> every share is zero (never divide by zero)
- No rounding here. Values are Decimals; rounding to cents happens when
  an order is persisted.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

ZERO = Decimal("0")


def _dec(value) -> Decimal:
    if value is None or value == "":
        return ZERO
    return Decimal(str(value))


@dataclass(frozen=True)
class AggregateCharges:
    shipping: Decimal = ZERO
    discount: Decimal = ZERO
    tax: Decimal = ZERO

    @classmethod
    def from_values(cls, *, shipping=None, discount=None, tax=None) -> "AggregateCharges":
        return cls(shipping=_dec(shipping), discount=_dec(discount), tax=_dec(tax))


@dataclass(frozen=True)
class SellerAllocation:
    sub_total: Decimal
    shipping: Decimal
    discount: Decimal
    tax: Decimal

    @property
    def total(self) -> Decimal:
        return self.sub_total + self.shipping + self.tax - self.discount


def cart_value(lines) -> Decimal:
    return sum((line.line_value for line in lines), ZERO)


def allocate(*, lines, cart_total_value, charges: AggregateCharges) -> SellerAllocation:
    sub_total = cart_value(lines)
    total_value = _dec(cart_total_value)

    if total_value == ZERO:
        return SellerAllocation(sub_total=sub_total, shipping=ZERO, discount=ZERO, tax=ZERO)

    ratio = sub_total / total_value
    return SellerAllocation(
        sub_total=sub_total,
        shipping=ratio * charges.shipping,
        discount=ratio * charges.discount,
        tax=ratio * charges.tax,
    )


def allocate_groups(groups: dict, charges: AggregateCharges) -> dict[str, SellerAllocation]:
    """
    Allocate for every seller group of one partitioned cart.
    Keys and their order follow `groups`.
    """
    total_value = sum((cart_value(lines) for lines in groups.values()), ZERO)
    return {
        seller: allocate(lines=lines, cart_total_value=total_value, charges=charges)
        for seller, lines in groups.items()
    }
