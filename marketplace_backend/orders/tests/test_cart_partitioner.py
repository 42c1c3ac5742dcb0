# orders/tests/test_cart_partitioner.py

from collections import Counter
from decimal import Decimal

from django.test import SimpleTestCase

from orders.models.order import PLATFORM_SELLER
from orders.services.cart_partitioner import CartLine, partition_cart


def _line(pid, shop, qty=1, price="10.00", position=0):
    return CartLine(
        product_id=pid,
        quantity=qty,
        discount_price=Decimal(price),
        shop_ref=shop,
        position=position,
    )


class CartPartitionerTests(SimpleTestCase):
    """
    GUARANTEES:
    - every line lands in exactly one group
    - groups follow first occurrence order
    - lines keep cart order inside a group
    """

    def setUp(self):
        self.cart = [
            _line("p1", "shop-b", position=0),
            _line("p2", "shop-a", position=1),
            _line("p3", "", position=2),
            _line("p4", "shop-b", position=3),
            _line("p5", PLATFORM_SELLER, position=4),
            _line("p6", "shop-a", position=5),
        ]

    def test_empty_cart_yields_no_groups(self):
        self.assertEqual(partition_cart([]), {})

    def test_union_of_groups_equals_cart(self):
        groups = partition_cart(self.cart)

        flattened = [line for lines in groups.values() for line in lines]
        self.assertEqual(len(flattened), len(self.cart))
        self.assertEqual(Counter(l.product_id for l in flattened), Counter(l.product_id for l in self.cart))

    def test_group_order_follows_first_occurrence(self):
        groups = partition_cart(self.cart)
        self.assertEqual(list(groups.keys()), ["shop-b", "shop-a", PLATFORM_SELLER])

    def test_item_order_preserved_within_group(self):
        groups = partition_cart(self.cart)

        self.assertEqual([l.product_id for l in groups["shop-b"]], ["p1", "p4"])
        self.assertEqual([l.product_id for l in groups["shop-a"]], ["p2", "p6"])

    def test_lines_without_seller_join_platform_group(self):
        groups = partition_cart(self.cart)
        self.assertEqual([l.product_id for l in groups[PLATFORM_SELLER]], ["p3", "p5"])

    def test_effective_price_prefers_final_price(self):
        line = CartLine(
            product_id="p",
            quantity=2,
            discount_price=Decimal("10.00"),
            final_price=Decimal("12.50"),
        )
        self.assertEqual(line.effective_unit_price, Decimal("12.50"))
        self.assertEqual(line.line_value, Decimal("25.00"))
