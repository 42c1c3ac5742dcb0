# orders/models/order_item.py

from decimal import Decimal

from django.core.validators import MinValueValidator
from django.db import models

from products.models import Product


class OrderItem(models.Model):
    """
    Cart line snapshot belonging to one seller order.

    Prices are captured as the buyer saw them; final_price is the
    variant/attribute-specific price and wins over discount_price when set.
    """

    order = models.ForeignKey(
        "orders.Order",
        on_delete=models.CASCADE,
        related_name="items",
    )

    position = models.PositiveIntegerField(
        default=0,
        help_text="Original position of the line in the combined cart",
    )

    product = models.ForeignKey(
        Product,
        on_delete=models.PROTECT,
        related_name="order_items",
    )

    name = models.CharField(max_length=255, blank=True, default="")
    quantity = models.PositiveIntegerField(validators=[MinValueValidator(1)])

    discount_price = models.DecimalField(
        max_digits=12, decimal_places=2, default=Decimal("0.00")
    )
    original_price = models.DecimalField(
        max_digits=12, decimal_places=2, null=True, blank=True
    )
    final_price = models.DecimalField(
        max_digits=12, decimal_places=2, null=True, blank=True
    )
    selected_attributes = models.JSONField(default=dict, blank=True)

    line_total = models.DecimalField(
        max_digits=14,
        decimal_places=2,
        default=Decimal("0.00"),
        help_text="effective unit price * quantity (server computed)",
    )

    class Meta:
        ordering = ["position", "id"]

    @property
    def effective_unit_price(self) -> Decimal:
        if self.final_price is not None:
            return Decimal(self.final_price)
        return Decimal(self.discount_price or 0)

    def __str__(self):
        return f"{self.name or self.product_id} x{self.quantity}"
