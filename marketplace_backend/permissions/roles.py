# permissions/roles.py

from __future__ import annotations

from typing import Optional

from rest_framework.permissions import BasePermission

# =========================================================
# ROLE CONSTANTS
# =========================================================
ROLE_ADMIN = "admin"
ROLE_SELLER = "seller"
ROLE_CUSTOMER = "customer"

ALL_ROLES = {
    ROLE_ADMIN,
    ROLE_SELLER,
    ROLE_CUSTOMER,
}


# =========================================================
# CAPABILITIES (THE REAL PERMISSION LANGUAGE)
# =========================================================
# Views protect capabilities, not raw roles.
CAP_ORDER_PLACE = "orders.place"
CAP_ORDER_REQUEST_REFUND = "orders.request_refund"

CAP_ORDER_FULFIL = "orders.fulfil"                # seller-driven status updates
CAP_ORDER_CONFIRM_REFUND = "orders.confirm_refund"
CAP_ORDER_VIEW_SHOP = "orders.view_shop"

CAP_ORDER_CANCEL = "orders.cancel"
CAP_ORDER_VIEW_ALL = "orders.view_all"

ALL_CAPABILITIES = {
    CAP_ORDER_PLACE,
    CAP_ORDER_REQUEST_REFUND,
    CAP_ORDER_FULFIL,
    CAP_ORDER_CONFIRM_REFUND,
    CAP_ORDER_VIEW_SHOP,
    CAP_ORDER_CANCEL,
    CAP_ORDER_VIEW_ALL,
}


# =========================================================
# ROLE → CAPABILITY MAP (DEFAULT)
# =========================================================
ROLE_CAPABILITIES: dict[str, set[str]] = {
    ROLE_ADMIN: {
        *ALL_CAPABILITIES,
    },
    ROLE_SELLER: {
        CAP_ORDER_PLACE,
        CAP_ORDER_REQUEST_REFUND,
        CAP_ORDER_FULFIL,
        CAP_ORDER_CONFIRM_REFUND,
        CAP_ORDER_VIEW_SHOP,
    },
    ROLE_CUSTOMER: {
        CAP_ORDER_PLACE,
        CAP_ORDER_REQUEST_REFUND,
    },
}


# =========================================================
# Helpers
# =========================================================
def get_user_role(user) -> Optional[str]:
    return getattr(user, "role", None)


def effective_capabilities_for(user) -> set[str]:
    if getattr(user, "is_superuser", False):
        return set(ALL_CAPABILITIES)
    return set(ROLE_CAPABILITIES.get(get_user_role(user), set()))


def user_has_capability(user, capability: str) -> bool:
    if not user or not getattr(user, "is_authenticated", False):
        return False
    return capability in effective_capabilities_for(user)


# =========================================================
# Capability Permissions
# =========================================================
class HasCapability(BasePermission):
    """
    Require a specific capability.

    Usage:
        permission_classes = [IsAuthenticated, HasCapability]
        view.required_capability = CAP_ORDER_CANCEL
    """

    def has_permission(self, request, view):
        required = getattr(view, "required_capability", None)
        if not required:
            # deny-by-default to avoid accidental open endpoints
            return False

        return user_has_capability(request.user, required)


class IsAdmin(BasePermission):
    def has_permission(self, request, view):
        return user_has_capability(request.user, CAP_ORDER_VIEW_ALL)
