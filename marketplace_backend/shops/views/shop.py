# shops/views/shop.py

"""
SHOP VIEWSET

Purpose:
- Sellers manage their own shops and read their wallet balance
- Admins see every shop
"""

from rest_framework import viewsets
from rest_framework.exceptions import PermissionDenied
from rest_framework.permissions import IsAuthenticated

from permissions.roles import CAP_ORDER_VIEW_ALL, ROLE_SELLER, get_user_role, user_has_capability
from shops.models import Shop
from shops.serializers import ShopSerializer


class ShopViewSet(viewsets.ModelViewSet):
    serializer_class = ShopSerializer
    permission_classes = [IsAuthenticated]
    http_method_names = ["get", "post", "patch", "head", "options"]

    def get_queryset(self):
        user = self.request.user
        qs = Shop.objects.select_related("owner").order_by("name")
        if user_has_capability(user, CAP_ORDER_VIEW_ALL):
            return qs
        return qs.filter(owner=user)

    def perform_create(self, serializer):
        if get_user_role(self.request.user) != ROLE_SELLER:
            raise PermissionDenied("Only sellers can open a shop.")
        serializer.save(owner=self.request.user)
