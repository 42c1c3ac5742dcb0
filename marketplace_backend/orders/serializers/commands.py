# orders/serializers/commands.py

"""
ORDER COMMAND SERIALIZERS

Document ONLY what the client is allowed to send.
Money is validated here; per-seller totals are always computed server-side.
"""

from rest_framework import serializers

from orders.models import Order


class CartLineInputSerializer(serializers.Serializer):
    product_id = serializers.UUIDField()
    quantity = serializers.IntegerField(min_value=1)

    name = serializers.CharField(required=False, allow_blank=True, default="")
    shop_id = serializers.CharField(
        required=False,
        allow_blank=True,
        default="",
        help_text="Optional cross-check; must equal the product's shop id (or 'platform').",
    )
    shop_name = serializers.CharField(required=False, allow_blank=True, default="")

    discount_price = serializers.DecimalField(
        max_digits=12, decimal_places=2, min_value=0, required=False, allow_null=True
    )
    original_price = serializers.DecimalField(
        max_digits=12, decimal_places=2, min_value=0, required=False, allow_null=True
    )
    final_price = serializers.DecimalField(
        max_digits=12,
        decimal_places=2,
        min_value=0,
        required=False,
        allow_null=True,
        help_text="Variant / attribute specific unit price; wins over discount_price",
    )
    selected_attributes = serializers.DictField(required=False, default=dict)


class PaymentInfoInputSerializer(serializers.Serializer):
    id = serializers.CharField(required=False, allow_blank=True, default="")
    status = serializers.CharField(required=False, allow_blank=True, default="")
    type = serializers.CharField(help_text="Gateway name, or a cash-on-delivery variant such as 'COD'")


class CheckoutInputSerializer(serializers.Serializer):
    """
    One combined cart spanning any number of sellers.
    The server splits it into one order per seller.
    """

    cart = CartLineInputSerializer(many=True, allow_empty=False)
    shipping_address = serializers.DictField(allow_empty=False)
    payment_info = PaymentInfoInputSerializer()

    shipping_price = serializers.DecimalField(max_digits=14, decimal_places=2, min_value=0, default=0)
    discount_price = serializers.DecimalField(max_digits=14, decimal_places=2, min_value=0, default=0)
    tax = serializers.DecimalField(max_digits=14, decimal_places=2, min_value=0, default=0)
    total_price = serializers.DecimalField(
        max_digits=14,
        decimal_places=2,
        required=False,
        allow_null=True,
        help_text="Client-side total, checked against the server computation",
    )

    def to_service_kwargs(self, *, user) -> dict:
        data = self.validated_data
        return {
            "cart": [dict(line) for line in data["cart"]],
            "shipping_address": dict(data["shipping_address"]),
            "user": user,
            "payment_info": dict(data["payment_info"]),
            "aggregate_totals": {
                "shipping_price": data.get("shipping_price"),
                "discount_price": data.get("discount_price"),
                "tax": data.get("tax"),
                "total_price": data.get("total_price"),
            },
        }


class StatusUpdateSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=[value for value, _ in Order.STATUS_CHOICES])
    note = serializers.CharField(required=False, allow_blank=True, default="")
    tracking_number = serializers.CharField(required=False, allow_blank=True, default="")
    courier_partner = serializers.CharField(required=False, allow_blank=True, default="")
    estimated_delivery = serializers.DateTimeField(required=False, allow_null=True, default=None)

    def tracking(self) -> dict:
        data = self.validated_data
        return {
            "tracking_number": data.get("tracking_number"),
            "courier_partner": data.get("courier_partner"),
            "estimated_delivery": data.get("estimated_delivery"),
        }


class RefundRequestSerializer(serializers.Serializer):
    status = serializers.CharField(default=Order.STATUS_PROCESSING_REFUND)
    note = serializers.CharField(required=False, allow_blank=True, default="")


class ConfirmRefundSerializer(serializers.Serializer):
    note = serializers.CharField(required=False, allow_blank=True, default="")


class CancelOrderSerializer(serializers.Serializer):
    reason = serializers.CharField(required=False, allow_blank=True, default="")
