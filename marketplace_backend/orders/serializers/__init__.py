from .commands import (
    CancelOrderSerializer,
    CheckoutInputSerializer,
    ConfirmRefundSerializer,
    RefundRequestSerializer,
    StatusUpdateSerializer,
)
from .order import OrderItemSerializer, OrderSerializer, OrderStatusEventSerializer

__all__ = [
    "CancelOrderSerializer",
    "CheckoutInputSerializer",
    "ConfirmRefundSerializer",
    "OrderItemSerializer",
    "OrderSerializer",
    "OrderStatusEventSerializer",
    "RefundRequestSerializer",
    "StatusUpdateSerializer",
]
