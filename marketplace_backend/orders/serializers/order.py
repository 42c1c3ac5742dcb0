# orders/serializers/order.py

from rest_framework import serializers

from orders.models import Order, OrderItem, OrderStatusEvent


class OrderItemSerializer(serializers.ModelSerializer):
    product_id = serializers.UUIDField(read_only=True)

    class Meta:
        model = OrderItem
        fields = [
            "id",
            "position",
            "product_id",
            "name",
            "quantity",
            "discount_price",
            "original_price",
            "final_price",
            "selected_attributes",
            "line_total",
        ]
        read_only_fields = fields


class OrderStatusEventSerializer(serializers.ModelSerializer):
    class Meta:
        model = OrderStatusEvent
        fields = ["status", "note", "timestamp"]
        read_only_fields = fields


class OrderSerializer(serializers.ModelSerializer):
    """
    Read model for one seller order.

    Everything is read-only: orders change only through the lifecycle endpoints.
    """

    items = OrderItemSerializer(many=True, read_only=True)
    status_history = OrderStatusEventSerializer(many=True, read_only=True)
    payment_info = serializers.SerializerMethodField()
    buyer_id = serializers.UUIDField(read_only=True)

    class Meta:
        model = Order
        fields = [
            "id",
            "order_number",
            "checkout_id",
            "buyer_id",
            "user_snapshot",
            "shipping_address",
            "shop_ref",
            "shop_name",
            "items",
            "sub_total_price",
            "shipping_price",
            "discount_price",
            "tax",
            "total_price",
            "status",
            "status_history",
            "payment_info",
            "payment_kind",
            "tracking_number",
            "courier_partner",
            "estimated_delivery",
            "delivered_at",
            "cancelled_at",
            "cancellation_reason",
            "settled_at",
            "settled_amount",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields

    def get_payment_info(self, obj):
        return obj.payment_info
