# orders/views/errors.py

from rest_framework import status
from rest_framework.response import Response

from orders.services.exceptions import (
    IllegalTransitionError,
    InvalidRequestError,
    NotFoundError,
    OrderNotFoundError,
    OrderServiceError,
    ProductNotFoundError,
    ShopNotFoundError,
)


# ======================================================
# API ERROR NORMALIZATION
# ======================================================

def error_response(*, code: str, message: str, http_status: int):
    """
    Canonical API error response.
    """
    return Response(
        {"error": {"code": code, "message": message}},
        status=http_status,
    )


def service_error_response(exc: OrderServiceError):
    if isinstance(exc, OrderNotFoundError):
        return error_response(code="ORDER_NOT_FOUND", message=str(exc), http_status=status.HTTP_404_NOT_FOUND)

    if isinstance(exc, ProductNotFoundError):
        return error_response(code="PRODUCT_NOT_FOUND", message=str(exc), http_status=status.HTTP_404_NOT_FOUND)

    if isinstance(exc, ShopNotFoundError):
        return error_response(code="SHOP_NOT_FOUND", message=str(exc), http_status=status.HTTP_404_NOT_FOUND)

    if isinstance(exc, NotFoundError):
        return error_response(code="NOT_FOUND", message=str(exc), http_status=status.HTTP_404_NOT_FOUND)

    if isinstance(exc, InvalidRequestError):
        return error_response(code="INVALID_REQUEST", message=str(exc), http_status=status.HTTP_400_BAD_REQUEST)

    if isinstance(exc, IllegalTransitionError):
        return error_response(code="ILLEGAL_TRANSITION", message=str(exc), http_status=status.HTTP_409_CONFLICT)

    return error_response(code="ORDER_ERROR", message=str(exc), http_status=status.HTTP_400_BAD_REQUEST)
