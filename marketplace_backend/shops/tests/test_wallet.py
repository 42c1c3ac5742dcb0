# shops/tests/test_wallet.py

import uuid
from decimal import Decimal

from django.contrib.auth import get_user_model
from django.test import TestCase
from rest_framework import status
from rest_framework.test import APIClient

from shops.models import Shop
from shops.services.wallet import ShopWalletNotFoundError, WalletError, credit_balance, find_shop

User = get_user_model()


class WalletServiceTests(TestCase):
    """
    GUARANTEES:
    - credits are atomic increments, rounded to the cent
    - negative credits are refused
    - unknown shops raise
    """

    def setUp(self):
        self.owner = User.objects.create_user(email="seller@example.com", password="pass", role="seller")
        self.shop = Shop.objects.create(owner=self.owner, name="Shop A")

    def test_credits_accumulate(self):
        credit_balance(shop_id=self.shop.pk, amount=Decimal("103.50"))
        credited = credit_balance(shop_id=self.shop.pk, amount="10.005")

        self.assertEqual(credited, Decimal("10.01"))
        self.assertEqual(find_shop(self.shop.pk).available_balance, Decimal("113.51"))

    def test_negative_credit_refused(self):
        with self.assertRaises(WalletError):
            credit_balance(shop_id=self.shop.pk, amount="-1")
        self.assertEqual(find_shop(self.shop.pk).available_balance, Decimal("0.00"))

    def test_unknown_shop(self):
        with self.assertRaises(ShopWalletNotFoundError):
            credit_balance(shop_id=uuid.uuid4(), amount="5")


class ShopApiTests(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.seller = User.objects.create_user(email="seller@example.com", password="pass", role="seller")
        self.customer = User.objects.create_user(email="buyer@example.com", password="pass")

    def test_seller_opens_shop_with_zero_balance(self):
        self.client.force_authenticate(self.seller)
        res = self.client.post(
            "/api/shops/",
            {"name": "Shop A", "available_balance": "999.00"},
            format="json",
        )

        self.assertEqual(res.status_code, status.HTTP_201_CREATED, res.data)
        self.assertEqual(Decimal(res.data["available_balance"]), Decimal("0.00"))
        self.assertEqual(Shop.objects.get().owner, self.seller)

    def test_customer_cannot_open_shop(self):
        self.client.force_authenticate(self.customer)
        res = self.client.post("/api/shops/", {"name": "Nope"}, format="json")
        self.assertEqual(res.status_code, status.HTTP_403_FORBIDDEN)

    def test_seller_sees_only_own_shops(self):
        Shop.objects.create(owner=self.seller, name="Mine")
        other = User.objects.create_user(email="other@example.com", password="pass", role="seller")
        Shop.objects.create(owner=other, name="Theirs")

        self.client.force_authenticate(self.seller)
        res = self.client.get("/api/shops/")

        self.assertEqual(res.data["count"], 1)
        self.assertEqual(res.data["results"][0]["name"], "Mine")
