# orders/services/order_service.py

"""
======================================================
PATH: orders/services/order_service.py
======================================================
ORDER SERVICE (APPLICATION SERVICE)

Purpose:
- create_order: carve one combined cart into per-seller orders
- transition_status: move an order forward along the fulfilment path
- request_refund / confirm_refund: buyer-initiated refund track
- cancel_order: cancel with compensating stock restoration

Hard-fail (abort + surface to caller):
- order / product lookups, malformed input, illegal transitions
- status, stock and order persistence

Soft-fail (caught, logged, reported in the outcome's flags/warnings):
- wallet settlement
- notifications and email

Notes:
- Order rows for one checkout are written in ONE transaction
  (orders + items + first history entry + order numbers).
- Settlement and dispatch run only after that transaction commits.
- Lifecycle mutations (stock, status, history, wallet) are independent writes:
  a failure partway does not undo the writes that already happened.
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal

from django.core.exceptions import ValidationError
from django.db import transaction
from django.utils import timezone

from notifications.services import order_dispatcher
from notifications.services.order_dispatcher import DispatchReport
from orders.models import Order, OrderItem, OrderStatusEvent, PaymentKind
from orders.models.order import PLATFORM_SELLER
from orders.services import lifecycle
from orders.services.cart_partitioner import CartLine, partition_cart
from orders.services.exceptions import (
    InvalidRequestError,
    OrderNotFoundError,
    ProductNotFoundError,
    ShopNotFoundError,
)
from orders.services.order_numbers import next_order_number
from orders.services.payments import classify_payment_type
from orders.services.pricing_allocator import AggregateCharges, allocate_groups, cart_value
from orders.services.settlement import SettlementPhase, settle
from products.models import Product
from products.services.inventory import ProductMissingError, update_stock
from shops.models import Shop

logger = logging.getLogger(__name__)

TWOPLACES = Decimal("0.01")


def _money(v) -> Decimal:
    if v is None or v == "":
        return Decimal("0.00")
    return Decimal(str(v)).quantize(TWOPLACES, rounding=ROUND_HALF_UP)


# ============================================================
# OUTCOMES
# ============================================================


@dataclass
class OrderOutcome:
    order: Order
    notified: bool = True
    email_sent: bool = False
    wallet_credited: bool = False
    warnings: list[str] = field(default_factory=list)

    def absorb(self, report: DispatchReport, *, email: bool = False):
        if email:
            self.email_sent = self.email_sent or report.email_sent
        else:
            self.notified = self.notified and report.notified
        self.warnings.extend(report.warnings)


@dataclass
class CheckoutOutcome:
    checkout_id: uuid.UUID
    outcomes: list[OrderOutcome] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def orders(self) -> list[Order]:
        return [o.order for o in self.outcomes]

    @property
    def notified(self) -> bool:
        return all(o.notified for o in self.outcomes)

    @property
    def email_sent(self) -> bool:
        return any(o.email_sent for o in self.outcomes)

    @property
    def wallet_credited(self) -> bool:
        return any(o.wallet_credited for o in self.outcomes)

    @property
    def all_warnings(self) -> list[str]:
        out = list(self.warnings)
        for o in self.outcomes:
            out.extend(o.warnings)
        return out


# ============================================================
# HELPERS
# ============================================================


def _get_order(order_id) -> Order:
    try:
        return Order.objects.get(pk=order_id)
    except (Order.DoesNotExist, ValidationError, ValueError):
        raise OrderNotFoundError(f"Order {order_id} not found")


def _normalize_shop_ref(raw) -> str:
    ref = str(raw or "").strip()
    if not ref or ref == PLATFORM_SELLER:
        return PLATFORM_SELLER
    try:
        return str(uuid.UUID(ref))
    except ValueError:
        raise InvalidRequestError(f"Invalid shop reference '{ref}'")


def _seller_ref_for(product: Product, *, claimed, idx: int) -> str:
    """
    The seller is always the product's own shop (or the platform sentinel).
    A client-sent shop_id is only cross-checked against it.
    """
    seller = PLATFORM_SELLER if product.shop_id is None else str(product.shop_id)
    if claimed in (None, ""):
        return seller

    claimed = _normalize_shop_ref(claimed)
    if claimed == seller:
        return seller
    if claimed != PLATFORM_SELLER and not Shop.objects.filter(pk=claimed).exists():
        raise ShopNotFoundError(f"Shop {claimed} not found")
    raise InvalidRequestError(
        f"Cart line {idx}: product {product.pk} is not sold by shop '{claimed}'"
    )


def _build_cart_lines(cart) -> list[CartLine]:
    """
    Normalize raw cart dicts into CartLines.

    Each line: {product_id, quantity, discount_price?, final_price?, original_price?,
                name?, shop_id?, shop_name?, selected_attributes?}
    The seller always comes from the Product row; a client shop_id must match it.
    Missing price details are filled from the Product row.
    """
    if not cart:
        raise InvalidRequestError("Cart is empty")

    product_ids = []
    for idx, raw in enumerate(cart):
        if not isinstance(raw, dict) or not raw.get("product_id"):
            raise InvalidRequestError(f"Cart line {idx} is missing product_id")
        try:
            product_ids.append(str(uuid.UUID(str(raw["product_id"]))))
        except ValueError:
            raise InvalidRequestError(f"Cart line {idx} has an invalid product_id")

    products = Product.objects.select_related("shop").in_bulk(product_ids)
    products = {str(k): v for k, v in products.items()}

    lines = []
    for idx, raw in enumerate(cart):
        pid = product_ids[idx]
        product = products.get(pid)
        if product is None:
            raise ProductNotFoundError(f"Product {pid} not found")

        try:
            qty = int(raw.get("quantity") or 0)
        except (TypeError, ValueError):
            raise InvalidRequestError(f"Cart line {idx} has an invalid quantity")
        if qty < 1:
            raise InvalidRequestError(f"Cart line {idx} quantity must be at least 1")

        shop_ref = _seller_ref_for(product, claimed=raw.get("shop_id"), idx=idx)
        if product.shop is not None:
            shop_name = product.shop.name
        else:
            shop_name = str(raw.get("shop_name") or "").strip()

        discount_price = raw.get("discount_price")
        if discount_price in (None, ""):
            discount_price = product.discount_price
        final_price = raw.get("final_price")
        original_price = raw.get("original_price")
        if original_price in (None, ""):
            original_price = product.original_price

        lines.append(
            CartLine(
                product_id=product.pk,
                quantity=qty,
                discount_price=Decimal(str(discount_price)),
                final_price=None if final_price in (None, "") else Decimal(str(final_price)),
                original_price=None if original_price in (None, "") else Decimal(str(original_price)),
                shop_ref=shop_ref,
                shop_name=shop_name,
                name=str(raw.get("name") or product.name),
                selected_attributes=dict(raw.get("selected_attributes") or {}),
                position=idx,
            )
        )

    return lines


def _resolve_shop_name(shop_ref: str, lines: list[CartLine]) -> str:
    for line in lines:
        if line.shop_name:
            return line.shop_name
    if shop_ref == PLATFORM_SELLER:
        return "Platform"
    shop = Shop.objects.filter(pk=shop_ref).only("name").first()
    return shop.name if shop else ""


def _append_history(order: Order, status: str, note: str | None) -> OrderStatusEvent:
    return OrderStatusEvent.objects.create(
        order=order,
        status=status,
        note=(note or "").strip() or lifecycle.default_note_for(status),
    )


def _apply_stock(order: Order, *, sign: int):
    """
    sign = -1 commits stock (stock -q, sold_out +q); sign = +1 restores it.
    Items are processed in cart order; a missing product stops the loop and
    keeps the mutations already applied.
    """
    for item in order.items.all():
        try:
            update_stock(
                product_id=item.product_id,
                delta_stock=sign * item.quantity,
                delta_sold_out=-sign * item.quantity,
            )
        except ProductMissingError as exc:
            raise ProductNotFoundError(str(exc)) from exc


def _claim_inventory_flag(order: Order, *, committed: bool) -> bool:
    """
    Flip inventory_committed with a conditional UPDATE; only the caller that
    wins the flip moves stock, so racing transitions cannot apply it twice.
    """
    claimed = Order.objects.filter(pk=order.pk, inventory_committed=not committed).update(
        inventory_committed=committed, updated_at=timezone.now()
    )
    order.inventory_committed = committed
    return bool(claimed)


def _commit_stock_once(order: Order):
    if _claim_inventory_flag(order, committed=True):
        _apply_stock(order, sign=-1)


def _restore_stock_if_committed(order: Order):
    if _claim_inventory_flag(order, committed=False):
        _apply_stock(order, sign=+1)


# ============================================================
# CREATE
# ============================================================


def create_order(
    *,
    cart,
    shipping_address,
    user,
    payment_info=None,
    aggregate_totals=None,
) -> CheckoutOutcome:
    """
    Place one checkout. Returns one Order per seller group.

    aggregate_totals: {shipping_price, discount_price, tax, total_price?}
    payment_info: {id?, status?, type}
    """
    payment_info = dict(payment_info or {})
    aggregate_totals = dict(aggregate_totals or {})

    if not isinstance(shipping_address, dict) or not shipping_address:
        raise InvalidRequestError("shippingAddress is required")

    lines = _build_cart_lines(cart)

    try:
        charges = AggregateCharges.from_values(
            shipping=aggregate_totals.get("shipping_price"),
            discount=aggregate_totals.get("discount_price"),
            tax=aggregate_totals.get("tax"),
        )
    except ArithmeticError:
        raise InvalidRequestError("Aggregate totals must be numeric")

    payment_kind = classify_payment_type(payment_info.get("type"))
    groups = partition_cart(lines)
    allocations = allocate_groups(groups, charges)

    checkout = CheckoutOutcome(checkout_id=uuid.uuid4())

    declared_total = aggregate_totals.get("total_price")
    if declared_total not in (None, ""):
        computed = cart_value(lines) + charges.shipping + charges.tax - charges.discount
        if _money(declared_total) != _money(computed):
            logger.warning(
                "Checkout total mismatch",
                extra={
                    "checkout_id": str(checkout.checkout_id),
                    "declared_total": str(_money(declared_total)),
                    "computed_total": str(_money(computed)),
                },
            )
            checkout.warnings.append("Declared total does not match the cart; server totals were used.")

    snapshot = user.snapshot() if hasattr(user, "snapshot") else dict(user or {})
    buyer = user if getattr(user, "pk", None) else None

    with transaction.atomic():
        for shop_ref, group_lines in groups.items():
            alloc = allocations[shop_ref]

            order = Order.objects.create(
                order_number=next_order_number(),
                checkout_id=checkout.checkout_id,
                buyer=buyer,
                user_snapshot=snapshot,
                shipping_address=dict(shipping_address),
                shop_ref=shop_ref,
                shop_name=_resolve_shop_name(shop_ref, group_lines),
                sub_total_price=_money(alloc.sub_total),
                shipping_price=_money(alloc.shipping),
                discount_price=_money(alloc.discount),
                tax=_money(alloc.tax),
                total_price=_money(alloc.total),
                status=Order.STATUS_PROCESSING,
                payment_id=str(payment_info.get("id") or ""),
                payment_status=str(payment_info.get("status") or ""),
                payment_type=str(payment_info.get("type") or ""),
                payment_kind=payment_kind,
            )

            OrderItem.objects.bulk_create(
                [
                    OrderItem(
                        order=order,
                        position=line.position,
                        product_id=line.product_id,
                        name=line.name,
                        quantity=line.quantity,
                        discount_price=_money(line.discount_price),
                        original_price=None if line.original_price is None else _money(line.original_price),
                        final_price=None if line.final_price is None else _money(line.final_price),
                        selected_attributes=line.selected_attributes,
                        line_total=_money(line.line_value),
                    )
                    for line in group_lines
                ]
            )

            _append_history(order, Order.STATUS_PROCESSING, lifecycle.CREATION_NOTE)
            checkout.outcomes.append(OrderOutcome(order=order))

    for outcome in checkout.outcomes:
        order = outcome.order

        result = settle(order=order, phase=SettlementPhase.ON_CREATION)
        outcome.wallet_credited = result.credited
        if not result.credited and result.amount is not None:
            outcome.warnings.append(f"Seller wallet was not credited: {result.reason}")

        outcome.absorb(order_dispatcher.notify_new_order(order))

        if order.payment_kind == PaymentKind.PREPAID:
            outcome.absorb(order_dispatcher.send_confirmation_email(order), email=True)

    logger.info(
        "Checkout placed",
        extra={
            "checkout_id": str(checkout.checkout_id),
            "orders": [o.order_number for o in checkout.orders],
            "payment_kind": payment_kind,
        },
    )
    return checkout


# ============================================================
# LIFECYCLE
# ============================================================


def transition_status(*, order_id, new_status, note=None, tracking=None) -> OrderOutcome:
    """
    Move an order forward along the fulfilment path.
    A request for Cancelled is routed to cancel_order (note becomes the reason).
    """
    target = lifecycle.require_known_status(new_status)
    order = _get_order(order_id)

    if target == Order.STATUS_CANCELLED:
        return cancel_order(order_id=order.pk, reason=note)

    lifecycle.validate_advance(order=order, target_status=target)

    if lifecycle.commits_inventory(order=order, target_status=target):
        _commit_stock_once(order)

    previous_status = order.status
    order.status = target
    update_fields = ["status", "updated_at"]

    tracking = dict(tracking or {})
    for key in ("tracking_number", "courier_partner", "estimated_delivery"):
        if tracking.get(key) not in (None, ""):
            setattr(order, key, tracking[key])
            update_fields.append(key)

    if target == Order.STATUS_DELIVERED:
        order.delivered_at = timezone.now()
        order.payment_status = Order.PAYMENT_STATUS_SUCCEEDED
        update_fields += ["delivered_at", "payment_status"]

    order.save(update_fields=update_fields)
    _append_history(order, target, note)

    outcome = OrderOutcome(order=order)

    if target == Order.STATUS_DELIVERED:
        result = settle(order=order, phase=SettlementPhase.ON_DELIVERY)
        outcome.wallet_credited = result.credited
        if not result.credited and result.amount is not None:
            outcome.warnings.append(f"Seller wallet was not credited: {result.reason}")

    outcome.absorb(order_dispatcher.notify_status_changed(order))

    logger.info(
        "Order status changed",
        extra={"order_id": str(order.pk), "from": previous_status, "to": target},
    )
    return outcome


def request_refund(*, order_id, requested_status=Order.STATUS_PROCESSING_REFUND, note=None) -> OrderOutcome:
    """
    Buyer-initiated. Only moves the status onto the refund track; no money
    or stock moves until the seller confirms.
    """
    target = lifecycle.require_known_status(requested_status)
    order = _get_order(order_id)
    lifecycle.validate_refund_request(order=order, requested_status=target)

    order.status = target
    order.save(update_fields=["status", "updated_at"])
    _append_history(order, target, note)

    outcome = OrderOutcome(order=order)
    outcome.absorb(order_dispatcher.notify_status_changed(order))
    outcome.absorb(order_dispatcher.notify_refund_requested(order))

    logger.info("Refund requested", extra={"order_id": str(order.pk)})
    return outcome


def confirm_refund(*, order_id, note=None) -> OrderOutcome:
    order = _get_order(order_id)
    lifecycle.validate_refund_confirmation(order=order)

    _restore_stock_if_committed(order)

    order.status = Order.STATUS_REFUND_SUCCESS
    order.payment_status = Order.PAYMENT_STATUS_REFUNDED
    order.save(update_fields=["status", "payment_status", "updated_at"])
    _append_history(order, Order.STATUS_REFUND_SUCCESS, note)

    outcome = OrderOutcome(order=order)
    outcome.absorb(order_dispatcher.notify_status_changed(order))
    outcome.absorb(order_dispatcher.send_refund_email(order), email=True)

    logger.info("Refund confirmed", extra={"order_id": str(order.pk)})
    return outcome


def cancel_order(*, order_id, reason=None) -> OrderOutcome:
    order = _get_order(order_id)
    lifecycle.validate_cancel(order=order)

    _restore_stock_if_committed(order)

    reason = (reason or "").strip() or lifecycle.DEFAULT_CANCELLATION_REASON
    previous_status = order.status

    order.status = Order.STATUS_CANCELLED
    order.cancelled_at = timezone.now()
    order.cancellation_reason = reason
    order.save(update_fields=["status", "cancelled_at", "cancellation_reason", "updated_at"])
    _append_history(order, Order.STATUS_CANCELLED, reason)

    outcome = OrderOutcome(order=order)
    outcome.absorb(order_dispatcher.notify_status_changed(order))
    outcome.absorb(order_dispatcher.send_cancellation_email(order), email=True)

    logger.info(
        "Order cancelled",
        extra={"order_id": str(order.pk), "from": previous_status, "reason": reason},
    )
    return outcome
