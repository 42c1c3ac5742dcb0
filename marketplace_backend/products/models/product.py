# products/models/product.py

import uuid
from decimal import Decimal

from django.core.exceptions import ValidationError
from django.db import models

from shops.models import Shop


class Product(models.Model):
    """
    Represents a sellable catalog entry.

    OWNERSHIP:
    - shop is the seller; NULL means a platform-owned catalog entry
      (no seller wallet, never credited by settlement)

    STOCK MODEL (IMPORTANT):
    - stock / sold_out are mutated ONLY by products.services.inventory.update_stock
      as a side effect of order lifecycle transitions
    - updates are atomic increments; stock may go negative on oversell and is
      reported, not blocked
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    shop = models.ForeignKey(
        Shop,
        on_delete=models.CASCADE,
        null=True,
        blank=True,
        related_name="products",
    )

    name = models.CharField(max_length=255, db_index=True)
    description = models.TextField(blank=True)

    original_price = models.DecimalField(
        max_digits=12, decimal_places=2, null=True, blank=True
    )
    discount_price = models.DecimalField(max_digits=12, decimal_places=2)

    stock = models.IntegerField(default=0)
    sold_out = models.IntegerField(default=0)

    is_active = models.BooleanField(default=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["shop", "is_active"], name="product_shop_active_idx"),
        ]

    def __str__(self):
        return self.name

    @property
    def is_platform_owned(self) -> bool:
        return self.shop_id is None

    def clean(self):
        if self.discount_price is None or Decimal(self.discount_price) < Decimal("0.00"):
            raise ValidationError("discount_price must be zero or greater")

        if self.original_price is not None and Decimal(self.original_price) < Decimal(
            self.discount_price
        ):
            raise ValidationError("original_price cannot be lower than discount_price")
