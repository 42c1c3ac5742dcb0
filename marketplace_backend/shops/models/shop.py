# shops/models/shop.py

import uuid
from decimal import Decimal

from django.conf import settings
from django.db import models


class Shop(models.Model):
    """
    Represents a seller on the marketplace.

    WALLET RULES:
    - available_balance is mutated ONLY by the settlement engine
      (shops.services.wallet.credit_balance), via atomic increments
    - the order flow never decrements it (withdrawals are a separate concern)
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    owner = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name="shops",
    )

    name = models.CharField(max_length=255)
    email = models.EmailField(blank=True)
    phone_number = models.CharField(max_length=40, blank=True)
    address = models.TextField(blank=True)

    available_balance = models.DecimalField(
        max_digits=14,
        decimal_places=2,
        default=Decimal("0.00"),
        help_text="Seller proceeds net of platform service charge.",
    )

    is_active = models.BooleanField(default=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["name"]

    def __str__(self):
        return self.name
