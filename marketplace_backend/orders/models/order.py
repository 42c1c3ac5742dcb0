# orders/models/order.py

import uuid
from decimal import Decimal

from django.conf import settings
from django.db import models

User = settings.AUTH_USER_MODEL

PLATFORM_SELLER = "platform"


class PaymentKind(models.TextChoices):
    PREPAID = "prepaid", "Prepaid"
    COD = "cod", "Cash on delivery"


class Order(models.Model):
    """
    One seller's share of one checkout event.

    GUARANTEES:
    - Monetary fields are seller-scoped, derived once at checkout, never recomputed
    - user_snapshot / shipping_address are denormalized at placement time
    - status moves ONLY through orders.services.order_service
    - status_history (OrderStatusEvent) is append-only
    - settled_at is set exactly once, when the seller wallet is credited

    shop_ref:
    - the seller identifier captured from the cart (a Shop UUID as text),
      or PLATFORM_SELLER for platform-owned catalog entries
    """

    STATUS_PROCESSING = "Processing"
    STATUS_TRANSFERRED = "Transferred to delivery partner"
    STATUS_SHIPPING = "Shipping"
    STATUS_RECEIVED = "Received"
    STATUS_ON_THE_WAY = "On the way"
    STATUS_DELIVERED = "Delivered"
    STATUS_PROCESSING_REFUND = "Processing refund"
    STATUS_REFUND_SUCCESS = "Refund Success"
    STATUS_CANCELLED = "Cancelled"

    STATUS_CHOICES = [
        (STATUS_PROCESSING, "Processing"),
        (STATUS_TRANSFERRED, "Transferred to delivery partner"),
        (STATUS_SHIPPING, "Shipping"),
        (STATUS_RECEIVED, "Received"),
        (STATUS_ON_THE_WAY, "On the way"),
        (STATUS_DELIVERED, "Delivered"),
        (STATUS_PROCESSING_REFUND, "Processing refund"),
        (STATUS_REFUND_SUCCESS, "Refund Success"),
        (STATUS_CANCELLED, "Cancelled"),
    ]

    PAYMENT_STATUS_SUCCEEDED = "Succeeded"
    PAYMENT_STATUS_REFUNDED = "Refunded"

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    order_number = models.CharField(
        max_length=64,
        unique=True,
        help_text="Human-facing sequential order number, e.g. wanttar-00001",
    )

    checkout_id = models.UUIDField(
        db_index=True,
        help_text="Groups the seller orders carved from one cart",
    )

    buyer = models.ForeignKey(
        User,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="orders",
    )
    user_snapshot = models.JSONField(default=dict)
    shipping_address = models.JSONField(default=dict)

    shop_ref = models.CharField(max_length=64, db_index=True)
    shop_name = models.CharField(max_length=255, blank=True, default="")

    # Money fields (seller-scoped)
    sub_total_price = models.DecimalField(
        max_digits=14, decimal_places=2, default=Decimal("0.00")
    )
    shipping_price = models.DecimalField(
        max_digits=14, decimal_places=2, default=Decimal("0.00")
    )
    discount_price = models.DecimalField(
        max_digits=14, decimal_places=2, default=Decimal("0.00")
    )
    tax = models.DecimalField(max_digits=14, decimal_places=2, default=Decimal("0.00"))
    total_price = models.DecimalField(
        max_digits=14, decimal_places=2, default=Decimal("0.00")
    )

    status = models.CharField(
        max_length=40, choices=STATUS_CHOICES, default=STATUS_PROCESSING
    )

    # Payment info
    payment_id = models.CharField(max_length=128, blank=True, default="")
    payment_status = models.CharField(max_length=40, blank=True, default="")
    payment_type = models.CharField(max_length=64, blank=True, default="")
    payment_kind = models.CharField(
        max_length=16, choices=PaymentKind.choices, default=PaymentKind.PREPAID
    )

    # Delivery metadata
    tracking_number = models.CharField(max_length=128, blank=True, default="")
    courier_partner = models.CharField(max_length=128, blank=True, default="")
    estimated_delivery = models.DateTimeField(null=True, blank=True)
    delivered_at = models.DateTimeField(null=True, blank=True)
    cancelled_at = models.DateTimeField(null=True, blank=True)
    cancellation_reason = models.CharField(max_length=255, blank=True, default="")

    # Side-effect bookkeeping
    inventory_committed = models.BooleanField(
        default=False,
        help_text="True while this order's quantities are deducted from product stock",
    )
    settled_at = models.DateTimeField(null=True, blank=True)
    settled_amount = models.DecimalField(
        max_digits=14, decimal_places=2, null=True, blank=True
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["status"], name="order_status_idx"),
            models.Index(fields=["shop_ref", "created_at"], name="order_shop_created_idx"),
            models.Index(fields=["buyer", "created_at"], name="order_buyer_created_idx"),
        ]

    @property
    def is_platform_order(self) -> bool:
        return self.shop_ref == PLATFORM_SELLER

    @property
    def payment_info(self) -> dict:
        return {
            "id": self.payment_id,
            "status": self.payment_status,
            "type": self.payment_type,
        }

    @property
    def buyer_email(self) -> str:
        return str((self.user_snapshot or {}).get("email") or "").strip()

    def __str__(self):
        return f"{self.order_number} | {self.shop_name or self.shop_ref} | {self.status}"
