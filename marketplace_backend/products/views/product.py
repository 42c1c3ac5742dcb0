# products/views/product.py

"""
PRODUCT VIEWSET

Purpose:
- Public catalog browsing (AllowAny, active products only)
- Sellers manage products of the shops they own
- Admins manage platform-owned catalog entries (shop = NULL)

Stock is set at creation/restock time through this API; order flow stock
accounting goes through products.services.inventory only.
"""

from rest_framework import viewsets
from rest_framework.exceptions import PermissionDenied
from rest_framework.permissions import AllowAny, IsAuthenticated

from permissions.roles import CAP_ORDER_VIEW_ALL, user_has_capability
from products.models import Product
from products.serializers import ProductSerializer


class ProductViewSet(viewsets.ModelViewSet):
    serializer_class = ProductSerializer
    http_method_names = ["get", "post", "patch", "head", "options"]

    def get_permissions(self):
        if self.action in ("list", "retrieve"):
            return [AllowAny()]
        return [IsAuthenticated()]

    def get_queryset(self):
        qs = Product.objects.select_related("shop")

        if self.action in ("list", "retrieve"):
            qs = qs.filter(is_active=True)
            shop_id = (self.request.query_params.get("shop_id") or "").strip()
            if shop_id:
                qs = qs.filter(shop_id=shop_id)
            q = (self.request.query_params.get("q") or "").strip()
            if q:
                qs = qs.filter(name__icontains=q)
            return qs

        user = self.request.user
        if user_has_capability(user, CAP_ORDER_VIEW_ALL):
            return qs
        return qs.filter(shop__owner=user)

    def _assert_can_manage(self, shop):
        user = self.request.user
        if user_has_capability(user, CAP_ORDER_VIEW_ALL):
            return
        if shop is None or shop.owner_id != user.id:
            raise PermissionDenied("You can only manage products of your own shops.")

    def perform_create(self, serializer):
        self._assert_can_manage(serializer.validated_data.get("shop"))
        serializer.save()

    def perform_update(self, serializer):
        shop = serializer.validated_data.get("shop", serializer.instance.shop)
        self._assert_can_manage(shop)
        serializer.save()
