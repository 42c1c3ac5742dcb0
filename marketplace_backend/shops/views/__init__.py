from .shop import ShopViewSet

__all__ = ["ShopViewSet"]
