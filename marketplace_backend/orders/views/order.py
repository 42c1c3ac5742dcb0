# orders/views/order.py

"""
ORDER VIEWSET

Endpoints (mounted under /api/orders/):
- GET  /                          buyer: my orders (newest first)
- GET  /{id}/                     buyer / shop owner / admin: order detail
- POST /checkout/                 place one combined cart -> one order per seller
- GET  /seller/                   seller: orders of the shops I own
- GET  /all/                      admin: every order (delivered first, newest first)
- POST /{id}/status/              seller / admin: advance fulfilment status
- POST /{id}/refund-request/      buyer: request a refund for a delivered order
- POST /{id}/refund-confirm/      seller / admin: confirm a pending refund
- POST /{id}/cancel/              admin: cancel with stock restoration

All list endpoints accept ?status=<exact status>.
"""

from django.db.models import F, Q
from drf_spectacular.utils import extend_schema
from rest_framework import mixins, status, viewsets
from rest_framework.decorators import action
from rest_framework.exceptions import PermissionDenied
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from orders.models import Order
from orders.serializers import (
    CancelOrderSerializer,
    CheckoutInputSerializer,
    ConfirmRefundSerializer,
    OrderSerializer,
    RefundRequestSerializer,
    StatusUpdateSerializer,
)
from orders.services import order_service
from orders.services.exceptions import OrderServiceError
from orders.views.errors import service_error_response
from permissions.roles import (
    CAP_ORDER_CANCEL,
    CAP_ORDER_CONFIRM_REFUND,
    CAP_ORDER_FULFIL,
    CAP_ORDER_PLACE,
    CAP_ORDER_REQUEST_REFUND,
    CAP_ORDER_VIEW_ALL,
    CAP_ORDER_VIEW_SHOP,
    HasCapability,
    user_has_capability,
)
from shops.models import Shop

ACTION_CAPABILITIES = {
    "checkout": CAP_ORDER_PLACE,
    "seller": CAP_ORDER_VIEW_SHOP,
    "all_orders": CAP_ORDER_VIEW_ALL,
    "update_status": CAP_ORDER_FULFIL,
    "request_refund": CAP_ORDER_REQUEST_REFUND,
    "confirm_refund": CAP_ORDER_CONFIRM_REFUND,
    "cancel": CAP_ORDER_CANCEL,
}


def _owned_shop_refs(user) -> list[str]:
    return [str(pk) for pk in Shop.objects.filter(owner=user).values_list("id", flat=True)]


def _outcome_payload(outcome) -> dict:
    return {
        "order": OrderSerializer(outcome.order).data,
        "notified": outcome.notified,
        "email_sent": outcome.email_sent,
        "wallet_credited": outcome.wallet_credited,
        "warnings": outcome.warnings,
    }


class OrderViewSet(
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    viewsets.GenericViewSet,
):
    serializer_class = OrderSerializer
    permission_classes = [IsAuthenticated]
    filterset_fields = ["status"]

    # Capability hook used by HasCapability
    required_capability = None

    def get_permissions(self):
        capability = ACTION_CAPABILITIES.get(self.action)
        if capability:
            self.required_capability = capability
            return [IsAuthenticated(), HasCapability()]
        return [IsAuthenticated()]

    def get_throttles(self):
        if self.action == "checkout":
            self.throttle_scope = "checkout"
        return super().get_throttles()

    def get_queryset(self):
        if getattr(self, "swagger_fake_view", False):
            return Order.objects.none()

        user = self.request.user
        qs = Order.objects.select_related("buyer").prefetch_related("items", "status_history")

        if self.action == "list":
            return qs.filter(buyer=user).order_by("-created_at")

        if self.action == "seller":
            qs = qs.filter(shop_ref__in=_owned_shop_refs(user))
            shop_id = (self.request.query_params.get("shop_id") or "").strip()
            if shop_id:
                qs = qs.filter(shop_ref=shop_id)
            return qs.order_by("-created_at")

        if self.action == "all_orders":
            return qs.order_by(F("delivered_at").desc(nulls_last=True), "-created_at")

        # Detail actions: any order the user is a party to.
        if user_has_capability(user, CAP_ORDER_VIEW_ALL):
            return qs
        return qs.filter(Q(buyer=user) | Q(shop_ref__in=_owned_shop_refs(user)))

    # --------------------------------------------------
    # helpers
    # --------------------------------------------------

    def _assert_shop_owner(self, order: Order):
        user = self.request.user
        if user_has_capability(user, CAP_ORDER_VIEW_ALL):
            return
        if order.shop_ref not in _owned_shop_refs(user):
            raise PermissionDenied("Only the seller of this order can do that.")

    def _assert_buyer(self, order: Order):
        user = self.request.user
        if user_has_capability(user, CAP_ORDER_VIEW_ALL):
            return
        if order.buyer_id != user.id:
            raise PermissionDenied("Only the buyer of this order can do that.")

    def _paginated(self, queryset):
        queryset = self.filter_queryset(queryset)
        page = self.paginate_queryset(queryset)
        if page is not None:
            return self.get_paginated_response(OrderSerializer(page, many=True).data)
        return Response(OrderSerializer(queryset, many=True).data)

    # --------------------------------------------------
    # CHECKOUT
    # --------------------------------------------------

    @extend_schema(request=CheckoutInputSerializer, responses={201: OrderSerializer(many=True)})
    @action(detail=False, methods=["post"], url_path="checkout")
    def checkout(self, request):
        serializer = CheckoutInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            result = order_service.create_order(**serializer.to_service_kwargs(user=request.user))
        except OrderServiceError as exc:
            return service_error_response(exc)

        return Response(
            {
                "checkout_id": str(result.checkout_id),
                "orders": OrderSerializer(result.orders, many=True).data,
                "notified": result.notified,
                "email_sent": result.email_sent,
                "wallet_credited": result.wallet_credited,
                "warnings": result.all_warnings,
            },
            status=status.HTTP_201_CREATED,
        )

    # --------------------------------------------------
    # LISTINGS
    # --------------------------------------------------

    @action(detail=False, methods=["get"], url_path="seller")
    def seller(self, request):
        return self._paginated(self.get_queryset())

    @action(detail=False, methods=["get"], url_path="all")
    def all_orders(self, request):
        return self._paginated(self.get_queryset())

    # --------------------------------------------------
    # LIFECYCLE
    # --------------------------------------------------

    @extend_schema(request=StatusUpdateSerializer, responses={200: OrderSerializer})
    @action(detail=True, methods=["post"], url_path="status")
    def update_status(self, request, pk=None):
        order = self.get_object()
        self._assert_shop_owner(order)

        serializer = StatusUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        target = serializer.validated_data["status"]

        if target == Order.STATUS_CANCELLED and not user_has_capability(request.user, CAP_ORDER_CANCEL):
            raise PermissionDenied("Only admins can cancel orders.")

        try:
            outcome = order_service.transition_status(
                order_id=order.pk,
                new_status=target,
                note=serializer.validated_data.get("note"),
                tracking=serializer.tracking(),
            )
        except OrderServiceError as exc:
            return service_error_response(exc)

        return Response(_outcome_payload(outcome), status=status.HTTP_200_OK)

    @extend_schema(request=RefundRequestSerializer, responses={200: OrderSerializer})
    @action(detail=True, methods=["post"], url_path="refund-request")
    def request_refund(self, request, pk=None):
        order = self.get_object()
        self._assert_buyer(order)

        serializer = RefundRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            outcome = order_service.request_refund(
                order_id=order.pk,
                requested_status=serializer.validated_data["status"],
                note=serializer.validated_data.get("note"),
            )
        except OrderServiceError as exc:
            return service_error_response(exc)

        return Response(_outcome_payload(outcome), status=status.HTTP_200_OK)

    @extend_schema(request=ConfirmRefundSerializer, responses={200: OrderSerializer})
    @action(detail=True, methods=["post"], url_path="refund-confirm")
    def confirm_refund(self, request, pk=None):
        order = self.get_object()
        self._assert_shop_owner(order)

        serializer = ConfirmRefundSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            outcome = order_service.confirm_refund(
                order_id=order.pk,
                note=serializer.validated_data.get("note"),
            )
        except OrderServiceError as exc:
            return service_error_response(exc)

        return Response(_outcome_payload(outcome), status=status.HTTP_200_OK)

    @extend_schema(request=CancelOrderSerializer, responses={200: OrderSerializer})
    @action(detail=True, methods=["post"], url_path="cancel")
    def cancel(self, request, pk=None):
        order = self.get_object()

        serializer = CancelOrderSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            outcome = order_service.cancel_order(
                order_id=order.pk,
                reason=serializer.validated_data.get("reason"),
            )
        except OrderServiceError as exc:
            return service_error_response(exc)

        return Response(_outcome_payload(outcome), status=status.HTTP_200_OK)
