# products/tests/test_inventory.py

import uuid
from decimal import Decimal

from django.test import TestCase

from products.models import Product
from products.services.inventory import InventoryError, ProductMissingError, update_stock


class InventoryServiceTests(TestCase):
    def setUp(self):
        self.product = Product.objects.create(name="Lamp", discount_price=Decimal("10.00"), stock=10)

    def _counters(self):
        p = Product.objects.get(pk=self.product.pk)
        return p.stock, p.sold_out

    def test_commit_and_restore_are_symmetric(self):
        update_stock(product_id=self.product.pk, delta_stock=-3, delta_sold_out=3)
        self.assertEqual(self._counters(), (7, 3))

        update_stock(product_id=self.product.pk, delta_stock=3, delta_sold_out=-3)
        self.assertEqual(self._counters(), (10, 0))

    def test_update_uses_current_row_values(self):
        stale = Product.objects.get(pk=self.product.pk)
        update_stock(product_id=self.product.pk, delta_stock=-2, delta_sold_out=2)
        update_stock(product_id=stale.pk, delta_stock=-1, delta_sold_out=1)

        self.assertEqual(self._counters(), (7, 3))

    def test_missing_product(self):
        with self.assertRaises(ProductMissingError):
            update_stock(product_id=uuid.uuid4(), delta_stock=1, delta_sold_out=-1)

    def test_non_integer_delta_rejected(self):
        with self.assertRaises(InventoryError):
            update_stock(product_id=self.product.pk, delta_stock="many", delta_sold_out=0)
        with self.assertRaises(InventoryError):
            update_stock(product_id=self.product.pk, delta_stock=True, delta_sold_out=0)
