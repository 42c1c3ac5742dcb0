# orders/tests/test_checkout.py

import uuid
from decimal import Decimal

from django.core import mail
from django.test import TestCase, override_settings

from notifications.models import Notification
from orders.models import Order, OrderStatusEvent, PaymentKind
from orders.models.order import PLATFORM_SELLER
from orders.services.exceptions import InvalidRequestError, ProductNotFoundError, ShopNotFoundError
from orders.services.order_service import create_order
from shops.models import Shop

from .helpers import ADDRESS, cart_line, make_product, make_shop, make_user, marketplace


@override_settings(MARKETPLACE=marketplace())
class CheckoutTests(TestCase):
    """
    GUARANTEES:
    - one order per seller, carved from one cart
    - cart-wide charges split by share of cart value
    - prepaid sellers credited at creation, COD sellers are not
    - the platform seller is never credited
    - the seller is always the product's shop, whatever the client sends
    """

    def setUp(self):
        self.buyer = make_user("buyer@example.com")
        self.admin = make_user("admin@example.com", role="admin")
        self.seller_a = make_user("seller-a@example.com", role="seller")
        self.seller_b = make_user("seller-b@example.com", role="seller")

        self.shop_a = make_shop(self.seller_a, "Shop A")
        self.shop_b = make_shop(self.seller_b, "Shop B")

        self.product_a = make_product(self.shop_a, name="Lamp", price="100.00")
        self.product_b = make_product(self.shop_b, name="Mug", price="50.00")

    def _checkout(self, payment_type, **totals):
        totals.setdefault("shipping_price", "30")
        return create_order(
            cart=[cart_line(self.product_a, 1), cart_line(self.product_b, 2)],
            shipping_address=ADDRESS,
            user=self.buyer,
            payment_info={"id": "pay_1", "status": "pending", "type": payment_type},
            aggregate_totals=totals,
        )

    def _balance(self, shop):
        return Shop.objects.get(pk=shop.pk).available_balance

    def test_cod_checkout_splits_and_defers_settlement(self):
        result = self._checkout("COD")

        self.assertEqual(len(result.orders), 2)
        order_a, order_b = result.orders

        self.assertEqual(order_a.shop_ref, str(self.shop_a.pk))
        self.assertEqual(order_b.shop_ref, str(self.shop_b.pk))

        for order in (order_a, order_b):
            order.refresh_from_db()
            self.assertEqual(order.sub_total_price, Decimal("100.00"))
            self.assertEqual(order.shipping_price, Decimal("15.00"))
            self.assertEqual(order.total_price, Decimal("115.00"))
            self.assertEqual(order.payment_kind, PaymentKind.COD)
            self.assertIsNone(order.settled_at)

        self.assertEqual(self._balance(self.shop_a), Decimal("0.00"))
        self.assertEqual(self._balance(self.shop_b), Decimal("0.00"))
        self.assertFalse(result.wallet_credited)

    def test_prepaid_checkout_credits_each_seller_net_of_fee(self):
        result = self._checkout("Credit Card")

        self.assertTrue(result.wallet_credited)
        self.assertEqual(self._balance(self.shop_a), Decimal("103.50"))
        self.assertEqual(self._balance(self.shop_b), Decimal("103.50"))

        for order in result.orders:
            order.refresh_from_db()
            self.assertEqual(order.settled_amount, Decimal("103.50"))
            self.assertIsNotNone(order.settled_at)

    def test_orders_share_checkout_and_get_sequential_numbers(self):
        result = self._checkout("COD")

        self.assertEqual({o.checkout_id for o in result.orders}, {result.checkout_id})
        self.assertEqual([o.order_number for o in result.orders], ["wanttar-00001", "wanttar-00002"])

    def test_snapshots_and_first_history_entry(self):
        result = self._checkout("COD")
        order = Order.objects.get(pk=result.orders[0].pk)

        self.assertEqual(order.user_snapshot["email"], "buyer@example.com")
        self.assertEqual(order.shipping_address, ADDRESS)
        self.assertEqual(order.status, Order.STATUS_PROCESSING)

        history = list(order.status_history.all())
        self.assertEqual(len(history), 1)
        self.assertEqual(history[0].status, Order.STATUS_PROCESSING)
        self.assertEqual(history[0].note, "Order placed successfully")

    def test_items_keep_cart_position_and_prices(self):
        result = create_order(
            cart=[
                cart_line(self.product_b, 1),
                cart_line(self.product_a, 1, final_price=Decimal("80.00")),
                cart_line(self.product_b, 3),
            ],
            shipping_address=ADDRESS,
            user=self.buyer,
            payment_info={"type": "COD"},
        )

        order_b, order_a = result.orders
        self.assertEqual([i.position for i in order_b.items.all()], [0, 2])
        self.assertEqual(order_a.items.get().line_total, Decimal("80.00"))
        self.assertEqual(order_a.sub_total_price, Decimal("80.00"))

    def test_platform_items_are_never_credited(self):
        platform_product = make_product(None, name="House brand", price="40.00")

        result = create_order(
            cart=[cart_line(platform_product, 1)],
            shipping_address=ADDRESS,
            user=self.buyer,
            payment_info={"type": "paystack"},
        )

        order = result.orders[0]
        order.refresh_from_db()
        self.assertEqual(order.shop_ref, PLATFORM_SELLER)
        self.assertIsNone(order.settled_at)
        self.assertFalse(result.wallet_credited)

    def test_seller_is_taken_from_the_product(self):
        line = cart_line(self.product_a, 1)
        del line["shop_id"]

        result = create_order(
            cart=[line],
            shipping_address=ADDRESS,
            user=self.buyer,
            payment_info={"type": "Credit Card"},
        )

        order = result.orders[0]
        self.assertEqual(order.shop_ref, str(self.shop_a.pk))
        self.assertEqual(order.shop_name, "Shop A")
        self.assertEqual(self._balance(self.shop_a), Decimal("90.00"))

    def test_foreign_shop_id_cannot_redirect_settlement(self):
        with self.assertRaises(InvalidRequestError):
            create_order(
                cart=[cart_line(self.product_a, 1, shop_id=str(self.shop_b.pk))],
                shipping_address=ADDRESS,
                user=self.buyer,
                payment_info={"type": "Credit Card"},
            )

        self.assertEqual(Order.objects.count(), 0)
        self.assertEqual(self._balance(self.shop_a), Decimal("0.00"))
        self.assertEqual(self._balance(self.shop_b), Decimal("0.00"))

    def test_unknown_shop_id_is_not_found(self):
        with self.assertRaises(ShopNotFoundError):
            create_order(
                cart=[cart_line(self.product_a, 1, shop_id=str(uuid.uuid4()))],
                shipping_address=ADDRESS,
                user=self.buyer,
                payment_info={"type": "Credit Card"},
            )
        self.assertEqual(Order.objects.count(), 0)

    def test_new_order_notifies_seller_and_admins(self):
        result = self._checkout("COD")
        order_a = result.orders[0]

        recipients = set(
            Notification.objects.filter(order_id=order_a.pk).values_list("recipient_id", "recipient_type")
        )
        self.assertIn((self.seller_a.pk, Notification.RECIPIENT_SELLER), recipients)
        self.assertIn((self.admin.pk, Notification.RECIPIENT_ADMIN), recipients)
        self.assertNotIn(self.seller_b.pk, {r for r, _ in recipients})

    def test_confirmation_email_only_for_prepaid(self):
        self._checkout("COD")
        self.assertEqual(len(mail.outbox), 0)

        result = self._checkout("Credit Card")
        self.assertEqual(len(mail.outbox), 2)
        self.assertEqual(mail.outbox[0].to, ["buyer@example.com"])
        self.assertIn(result.orders[0].order_number, mail.outbox[0].subject)
        self.assertTrue(result.email_sent)

    def test_total_mismatch_is_a_warning_not_an_error(self):
        result = self._checkout("COD", total_price="999.00")
        self.assertEqual(len(result.orders), 2)
        self.assertTrue(result.warnings)

    # --------------------------------------------------
    # Rejections (no side effects)
    # --------------------------------------------------

    def test_empty_cart_rejected(self):
        with self.assertRaises(InvalidRequestError):
            create_order(cart=[], shipping_address=ADDRESS, user=self.buyer, payment_info={"type": "COD"})
        self.assertEqual(Order.objects.count(), 0)

    def test_unknown_product_rejected(self):
        with self.assertRaises(ProductNotFoundError):
            create_order(
                cart=[{"product_id": uuid.uuid4(), "quantity": 1}],
                shipping_address=ADDRESS,
                user=self.buyer,
                payment_info={"type": "COD"},
            )
        self.assertEqual(Order.objects.count(), 0)
        self.assertEqual(OrderStatusEvent.objects.count(), 0)

    def test_invalid_shop_reference_rejected(self):
        with self.assertRaises(InvalidRequestError):
            create_order(
                cart=[cart_line(self.product_a, 1, shop_id="not-a-shop")],
                shipping_address=ADDRESS,
                user=self.buyer,
                payment_info={"type": "COD"},
            )
        self.assertEqual(Order.objects.count(), 0)

    def test_missing_shipping_address_rejected(self):
        with self.assertRaises(InvalidRequestError):
            create_order(
                cart=[cart_line(self.product_a, 1)],
                shipping_address={},
                user=self.buyer,
                payment_info={"type": "COD"},
            )
