# orders/models/__init__.py

"""
ORDERS MODELS PACKAGE EXPORTS

Purpose:
- Central export surface for orders app models.
"""

from .order import Order, PaymentKind
from .order_item import OrderItem
from .order_sequence import OrderSequence
from .order_status_event import OrderStatusEvent

__all__ = [
    "Order",
    "OrderItem",
    "OrderSequence",
    "OrderStatusEvent",
    "PaymentKind",
]
