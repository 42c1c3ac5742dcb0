# shops/services/wallet.py

"""
SHOP WALLET SERVICE

Rules:
- Credits are atomic increments at the storage layer (UPDATE ... SET x = x + n),
  never read-modify-write, so concurrent settlements cannot lose updates.
- Amounts are stored to the cent (ROUND_HALF_UP).
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

from django.db.models import F

from shops.models import Shop

TWOPLACES = Decimal("0.01")


class WalletError(Exception):
    """Base wallet exception"""


class ShopWalletNotFoundError(WalletError):
    pass


def find_shop(shop_id) -> Shop | None:
    return Shop.objects.filter(pk=shop_id).first()


def credit_balance(*, shop_id, amount) -> Decimal:
    """
    Atomically add `amount` to the shop's available balance.
    Returns the amount actually credited (cent-rounded).
    """
    credited = Decimal(str(amount)).quantize(TWOPLACES, rounding=ROUND_HALF_UP)
    if credited < Decimal("0.00"):
        raise WalletError("Wallet credits must not be negative")

    updated = Shop.objects.filter(pk=shop_id).update(
        available_balance=F("available_balance") + credited
    )
    if not updated:
        raise ShopWalletNotFoundError(f"Shop {shop_id} not found")

    return credited
