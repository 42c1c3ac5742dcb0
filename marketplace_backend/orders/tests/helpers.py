# orders/tests/helpers.py

from __future__ import annotations

from decimal import Decimal

from django.conf import settings
from django.contrib.auth import get_user_model

from products.models import Product
from shops.models import Shop

User = get_user_model()


def marketplace(**overrides) -> dict:
    cfg = dict(settings.MARKETPLACE)
    cfg.update(
        {
            "ORDER_NUMBER_PREFIX": "wanttar",
            "ORDER_NUMBER_WIDTH": 5,
            "SERVICE_CHARGE_RATE": "0.10",
            "ORDER_EMAILS_ENABLED": True,
        }
    )
    cfg.update(overrides)
    return cfg


def make_user(email: str, *, role: str = "customer", **extra):
    return User.objects.create_user(
        email=email,
        password="pass-1234",
        first_name=extra.pop("first_name", "Test"),
        last_name=extra.pop("last_name", "User"),
        role=role,
        **extra,
    )


def make_shop(owner, name: str = "Shop") -> Shop:
    return Shop.objects.create(owner=owner, name=name, email=f"{name.lower().replace(' ', '')}@shops.test")


def make_product(shop=None, *, name: str = "Product", price="100.00", stock: int = 10) -> Product:
    return Product.objects.create(
        shop=shop,
        name=name,
        discount_price=Decimal(price),
        original_price=Decimal(price),
        stock=stock,
    )


def cart_line(product, quantity: int = 1, **extra) -> dict:
    line = {
        "product_id": product.pk,
        "quantity": quantity,
        "discount_price": product.discount_price,
        "name": product.name,
        "shop_id": str(product.shop_id) if product.shop_id else "platform",
    }
    line.update(extra)
    return line


ADDRESS = {
    "line1": "12 Market Road",
    "city": "Lagos",
    "country": "NG",
    "zip": "100001",
}
