# orders/tests/test_settlement.py

import uuid
from decimal import Decimal
from unittest.mock import patch

from django.test import SimpleTestCase, TestCase, override_settings

from orders.models import Order, PaymentKind
from orders.models.order import PLATFORM_SELLER
from orders.services.settlement import SettlementPhase, net_amount, settle
from shops.models import Shop
from shops.services.wallet import WalletError

from .helpers import make_shop, make_user, marketplace


class NetAmountTests(SimpleTestCase):
    def test_service_charge_deducted(self):
        self.assertEqual(net_amount(Decimal("115.00"), rate="0.10"), Decimal("103.50"))
        self.assertEqual(net_amount(Decimal("0.05"), rate="0.10"), Decimal("0.05"))
        self.assertEqual(net_amount(Decimal("10.00"), rate="0"), Decimal("10.00"))


@override_settings(MARKETPLACE=marketplace())
class SettlementTests(TestCase):
    """
    GUARANTEES:
    - prepaid: credited at creation only
    - COD: credited at delivery only
    - never for the platform seller
    - never twice for the same order
    - a missing shop is a logged soft failure
    """

    def setUp(self):
        self.seller = make_user("seller@example.com", role="seller")
        self.shop = make_shop(self.seller, "Shop A")
        self._seq = 0

    def _order(self, *, kind, status=Order.STATUS_PROCESSING, shop_ref=None):
        self._seq += 1
        return Order.objects.create(
            order_number=f"test-{self._seq:05d}",
            checkout_id=uuid.uuid4(),
            shop_ref=shop_ref or str(self.shop.pk),
            total_price=Decimal("115.00"),
            status=status,
            payment_kind=kind,
        )

    def _balance(self):
        return Shop.objects.get(pk=self.shop.pk).available_balance

    def test_prepaid_credited_on_creation_only(self):
        order = self._order(kind=PaymentKind.PREPAID)

        self.assertTrue(settle(order=order, phase=SettlementPhase.ON_CREATION).credited)
        self.assertEqual(self._balance(), Decimal("103.50"))

        order.status = Order.STATUS_DELIVERED
        self.assertFalse(settle(order=order, phase=SettlementPhase.ON_DELIVERY).credited)
        self.assertEqual(self._balance(), Decimal("103.50"))

    def test_cod_credited_on_delivery_only(self):
        order = self._order(kind=PaymentKind.COD)

        self.assertFalse(settle(order=order, phase=SettlementPhase.ON_CREATION).credited)
        self.assertEqual(self._balance(), Decimal("0.00"))

        order.status = Order.STATUS_DELIVERED
        self.assertTrue(settle(order=order, phase=SettlementPhase.ON_DELIVERY).credited)
        self.assertEqual(self._balance(), Decimal("103.50"))

    def test_cod_not_credited_before_delivery(self):
        order = self._order(kind=PaymentKind.COD, status=Order.STATUS_SHIPPING)
        result = settle(order=order, phase=SettlementPhase.ON_DELIVERY)

        self.assertFalse(result.credited)
        self.assertEqual(self._balance(), Decimal("0.00"))

    def test_replay_is_idempotent(self):
        order = self._order(kind=PaymentKind.PREPAID)

        settle(order=order, phase=SettlementPhase.ON_CREATION)
        stale = Order.objects.get(pk=order.pk)
        stale.settled_at = None
        result = settle(order=stale, phase=SettlementPhase.ON_CREATION)

        self.assertFalse(result.credited)
        self.assertEqual(result.reason, "already settled")
        self.assertEqual(self._balance(), Decimal("103.50"))

    def test_platform_seller_never_credited(self):
        order = self._order(kind=PaymentKind.PREPAID, shop_ref=PLATFORM_SELLER)

        result = settle(order=order, phase=SettlementPhase.ON_CREATION)

        self.assertFalse(result.credited)
        order.refresh_from_db()
        self.assertIsNone(order.settled_at)

    def test_missing_shop_is_soft_failure(self):
        order = self._order(kind=PaymentKind.PREPAID, shop_ref=str(uuid.uuid4()))

        with self.assertLogs("settlement", level="WARNING"):
            result = settle(order=order, phase=SettlementPhase.ON_CREATION)

        self.assertFalse(result.credited)
        order.refresh_from_db()
        self.assertIsNone(order.settled_at)

    def test_wallet_error_releases_claim(self):
        order = self._order(kind=PaymentKind.PREPAID)

        with patch(
            "orders.services.settlement.credit_balance",
            side_effect=WalletError("locked"),
        ):
            result = settle(order=order, phase=SettlementPhase.ON_CREATION)

        self.assertFalse(result.credited)
        order.refresh_from_db()
        self.assertIsNone(order.settled_at)

        self.assertTrue(settle(order=order, phase=SettlementPhase.ON_CREATION).credited)
        self.assertEqual(self._balance(), Decimal("103.50"))
