"""
ORDER LIFECYCLE DOMAIN RULES

This module defines the ONLY allowed lifecycle transitions
for Order entities.

DESIGN PRINCIPLES:
- No database writes
- No stock mutation
- No side effects
- Single source of truth
"""

from orders.models import Order
from orders.services.exceptions import IllegalTransitionError, InvalidRequestError

# ============================================================
# STATE DEFINITIONS
# ============================================================

MAIN_PROGRESSION = [
    Order.STATUS_PROCESSING,
    Order.STATUS_TRANSFERRED,
    Order.STATUS_SHIPPING,
    Order.STATUS_RECEIVED,
    Order.STATUS_ON_THE_WAY,
    Order.STATUS_DELIVERED,
]

KNOWN_STATES = {value for value, _ in Order.STATUS_CHOICES}

TERMINAL_STATES = {
    Order.STATUS_DELIVERED,
    Order.STATUS_CANCELLED,
    Order.STATUS_REFUND_SUCCESS,
}

# A pending refund is still cancellable; only terminal orders are not.
NOT_CANCELLABLE = set(TERMINAL_STATES)

# Reaching any of these means the order's stock has left the warehouse.
INVENTORY_COMMIT_STATES = set(MAIN_PROGRESSION[1:])

REFUND_REQUEST_FROM = {Order.STATUS_DELIVERED}
REFUND_REQUEST_STATES = {Order.STATUS_PROCESSING_REFUND}

CREATION_NOTE = "Order placed successfully"
DEFAULT_CANCELLATION_REASON = "Cancelled by admin"
FALLBACK_NOTE = "Status updated"

DEFAULT_NOTES = {
    Order.STATUS_PROCESSING: "Your order is being prepared",
    Order.STATUS_TRANSFERRED: "Order picked up by delivery partner",
    Order.STATUS_SHIPPING: "Order is in transit",
    Order.STATUS_RECEIVED: "Order reached destination city",
    Order.STATUS_ON_THE_WAY: "Delivery executive is on the way",
    Order.STATUS_DELIVERED: "Order delivered successfully",
    Order.STATUS_PROCESSING_REFUND: "Refund requested by customer",
    Order.STATUS_REFUND_SUCCESS: "Refund processed successfully",
    Order.STATUS_CANCELLED: DEFAULT_CANCELLATION_REASON,
}


# ============================================================
# DOMAIN RULES
# ============================================================


def default_note_for(status: str) -> str:
    return DEFAULT_NOTES.get(status, FALLBACK_NOTE)


def require_known_status(status) -> str:
    value = str(status or "").strip()
    if not value:
        raise InvalidRequestError("status is required")
    if value not in KNOWN_STATES:
        raise InvalidRequestError(f"Unknown order status '{value}'")
    return value


def can_advance(*, from_status: str, to_status: str) -> bool:
    if from_status in TERMINAL_STATES:
        return False
    if from_status not in MAIN_PROGRESSION or to_status not in MAIN_PROGRESSION:
        return False
    return MAIN_PROGRESSION.index(to_status) > MAIN_PROGRESSION.index(from_status)


def validate_advance(*, order: Order, target_status: str):
    if not can_advance(from_status=order.status, to_status=target_status):
        raise IllegalTransitionError(
            f"Order {order.order_number} cannot transition from "
            f"'{order.status}' to '{target_status}'"
        )


def can_cancel(status: str) -> bool:
    return status not in NOT_CANCELLABLE


def validate_cancel(*, order: Order):
    if not can_cancel(order.status):
        raise IllegalTransitionError(
            f"Order {order.order_number} cannot be cancelled from '{order.status}'"
        )


def validate_refund_request(*, order: Order, requested_status: str):
    if requested_status not in REFUND_REQUEST_STATES:
        raise IllegalTransitionError(
            f"'{requested_status}' is not a refund request status"
        )
    if order.status not in REFUND_REQUEST_FROM:
        raise IllegalTransitionError(
            f"Order {order.order_number} cannot request a refund from '{order.status}'"
        )


def validate_refund_confirmation(*, order: Order):
    if order.status != Order.STATUS_PROCESSING_REFUND:
        raise IllegalTransitionError(
            f"Order {order.order_number} has no pending refund (status '{order.status}')"
        )


def commits_inventory(*, order: Order, target_status: str) -> bool:
    return (not order.inventory_committed) and target_status in INVENTORY_COMMIT_STATES
