# orders/services/settlement.py

"""
======================================================
PATH: orders/services/settlement.py
======================================================
SETTLEMENT ENGINE

Decides WHEN a seller wallet is credited for an order, and by how much.

Rules:
- net amount = order.total_price * (1 - SERVICE_CHARGE_RATE)
- ON_CREATION: prepaid orders only
- ON_DELIVERY: cash-on-delivery orders only, and only once the order is Delivered
- PLATFORM_SELLER orders are never credited (there is no wallet)
- An order is credited at most once: the credit is claimed by a conditional
  update that flips settled_at from NULL, so replays and racing deliveries
  cannot double-credit.
- Wallets are never debited by the order flow.

Failure policy:
- Settlement failures (e.g. the shop does not exist) are SOFT: logged on the
  "settlement" logger and reported in the result, never raised to the caller.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

from django.conf import settings
from django.db import transaction
from django.utils import timezone

from orders.models import Order, PaymentKind
from orders.services.exceptions import SettlementError
from shops.services.wallet import ShopWalletNotFoundError, WalletError, credit_balance

logger = logging.getLogger("settlement")

TWOPLACES = Decimal("0.01")


class SettlementPhase(str, enum.Enum):
    ON_CREATION = "on_creation"
    ON_DELIVERY = "on_delivery"


@dataclass(frozen=True)
class SettlementResult:
    credited: bool
    amount: Decimal | None = None
    reason: str = ""


def service_charge_rate() -> Decimal:
    return Decimal(str(settings.MARKETPLACE.get("SERVICE_CHARGE_RATE", "0.10")))


def net_amount(total_price, *, rate=None) -> Decimal:
    rate = service_charge_rate() if rate is None else Decimal(str(rate))
    gross = Decimal(str(total_price or 0))
    return (gross * (Decimal("1") - rate)).quantize(TWOPLACES, rounding=ROUND_HALF_UP)


def _skip_reason(*, order: Order, phase: SettlementPhase, payment_kind: str) -> str:
    if order.is_platform_order:
        return "platform seller has no wallet"

    if phase == SettlementPhase.ON_CREATION and payment_kind == PaymentKind.COD:
        return "cash on delivery settles at delivery"

    if phase == SettlementPhase.ON_DELIVERY:
        if payment_kind != PaymentKind.COD:
            return "prepaid orders settle at creation"
        if order.status != Order.STATUS_DELIVERED:
            return "order is not delivered"

    return ""


def settle(*, order: Order, phase: SettlementPhase, payment_kind: str | None = None) -> SettlementResult:
    """
    Credit the seller wallet for `order` if `phase` is its settlement point.

    payment_kind defaults to the kind resolved at checkout (order.payment_kind).
    """
    phase = SettlementPhase(phase)
    kind = payment_kind or order.payment_kind

    reason = _skip_reason(order=order, phase=phase, payment_kind=kind)
    if reason:
        return SettlementResult(credited=False, reason=reason)

    amount = net_amount(order.total_price)
    settled_at = timezone.now()

    try:
        with transaction.atomic():
            claimed = Order.objects.filter(pk=order.pk, settled_at__isnull=True).update(
                settled_at=settled_at,
                settled_amount=amount,
            )
            if not claimed:
                return SettlementResult(credited=False, reason="already settled")

            try:
                credit_balance(shop_id=order.shop_ref, amount=amount)
            except ShopWalletNotFoundError as exc:
                raise SettlementError(f"Shop {order.shop_ref} not found") from exc
            except WalletError as exc:
                raise SettlementError(str(exc)) from exc
    except SettlementError as exc:
        logger.warning(
            "Seller wallet credit failed",
            extra={
                "order_id": str(order.pk),
                "shop_id": order.shop_ref,
                "amount": str(amount),
                "phase": phase.value,
                "error": str(exc),
            },
        )
        return SettlementResult(credited=False, amount=amount, reason=str(exc))

    order.settled_at = settled_at
    order.settled_amount = amount

    logger.info(
        "Seller wallet credited",
        extra={
            "order_id": str(order.pk),
            "shop_id": order.shop_ref,
            "amount": str(amount),
            "phase": phase.value,
        },
    )
    return SettlementResult(credited=True, amount=amount)
