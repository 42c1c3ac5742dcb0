# orders/services/exceptions.py

"""
ORDER SERVICE ERRORS

Centralized domain errors for the order core.

Hard-fail (abort the operation, surfaced to the caller):
- NotFoundError and its subclasses
- InvalidRequestError
- IllegalTransitionError

Soft-fail (caught where they happen, logged, never surfaced as a request failure):
- SettlementError
- NotificationDispatchError
"""


class OrderServiceError(Exception):
    """Base exception for all order core failures."""


class NotFoundError(OrderServiceError):
    """Raised when a referenced record does not exist."""


class OrderNotFoundError(NotFoundError):
    pass


class ProductNotFoundError(NotFoundError):
    pass


class ShopNotFoundError(NotFoundError):
    pass


class InvalidRequestError(OrderServiceError):
    """Raised on malformed input, before any side effect is performed."""


class IllegalTransitionError(OrderServiceError):
    """Raised when a status change is not allowed from the current status."""


class SettlementError(OrderServiceError):
    """Raised when a seller wallet cannot be credited."""


class NotificationDispatchError(OrderServiceError):
    """Raised when a notification or email cannot be delivered."""
