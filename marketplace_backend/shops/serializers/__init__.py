from .shop import ShopSerializer

__all__ = ["ShopSerializer"]
