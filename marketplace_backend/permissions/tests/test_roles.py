# permissions/tests/test_roles.py

from types import SimpleNamespace

from django.contrib.auth import get_user_model
from django.test import TestCase
from rest_framework.test import APIRequestFactory

from permissions.roles import (
    CAP_ORDER_CANCEL,
    CAP_ORDER_CONFIRM_REFUND,
    CAP_ORDER_FULFIL,
    CAP_ORDER_PLACE,
    CAP_ORDER_REQUEST_REFUND,
    CAP_ORDER_VIEW_ALL,
    HasCapability,
    IsAdmin,
    user_has_capability,
)

User = get_user_model()


class CapabilityTests(TestCase):
    """
    GUARANTEES:
    - customers place orders and request refunds only
    - sellers fulfil and confirm refunds, never cancel or see every order
    - admins (and superusers) hold every capability
    - anonymous users hold none
    """

    def setUp(self):
        self.factory = APIRequestFactory()

        self.admin = User.objects.create_user(email="admin@example.com", password="pass", role="admin")
        self.seller = User.objects.create_user(email="seller@example.com", password="pass", role="seller")
        self.customer = User.objects.create_user(email="customer@example.com", password="pass")

    def _request_for(self, user=None):
        request = self.factory.get("/")
        request.user = user
        return request

    def test_customer_capabilities(self):
        self.assertTrue(user_has_capability(self.customer, CAP_ORDER_PLACE))
        self.assertTrue(user_has_capability(self.customer, CAP_ORDER_REQUEST_REFUND))
        self.assertFalse(user_has_capability(self.customer, CAP_ORDER_FULFIL))
        self.assertFalse(user_has_capability(self.customer, CAP_ORDER_CANCEL))

    def test_seller_capabilities(self):
        self.assertTrue(user_has_capability(self.seller, CAP_ORDER_FULFIL))
        self.assertTrue(user_has_capability(self.seller, CAP_ORDER_CONFIRM_REFUND))
        self.assertFalse(user_has_capability(self.seller, CAP_ORDER_CANCEL))
        self.assertFalse(user_has_capability(self.seller, CAP_ORDER_VIEW_ALL))

    def test_admin_and_superuser_hold_everything(self):
        root = User.objects.create_superuser(email="root@example.com", password="pass", role="customer")

        for user in (self.admin, root):
            self.assertTrue(user_has_capability(user, CAP_ORDER_CANCEL))
            self.assertTrue(IsAdmin().has_permission(self._request_for(user), None))

    def test_has_capability_denies_without_requirement(self):
        view = SimpleNamespace(required_capability=None)
        self.assertFalse(HasCapability().has_permission(self._request_for(self.admin), view))

        view.required_capability = CAP_ORDER_CANCEL
        self.assertTrue(HasCapability().has_permission(self._request_for(self.admin), view))
        self.assertFalse(HasCapability().has_permission(self._request_for(self.seller), view))

    def test_anonymous_user_denied_everywhere(self):
        self.assertFalse(user_has_capability(None, CAP_ORDER_PLACE))
        self.assertFalse(IsAdmin().has_permission(self._request_for(None), None))
