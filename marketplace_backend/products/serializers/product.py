# products/serializers/product.py

from rest_framework import serializers

from products.models import Product


class ProductSerializer(serializers.ModelSerializer):
    """
    Catalog entry.

    stock / sold_out are read-only here: they only move through the order
    lifecycle (products.services.inventory).
    """

    shop_name = serializers.SerializerMethodField()

    class Meta:
        model = Product
        fields = [
            "id",
            "shop",
            "shop_name",
            "name",
            "description",
            "original_price",
            "discount_price",
            "stock",
            "sold_out",
            "is_active",
            "created_at",
            "updated_at",
        ]
        read_only_fields = [
            "id",
            "shop_name",
            "sold_out",
            "created_at",
            "updated_at",
        ]

    def get_shop_name(self, obj):
        shop = getattr(obj, "shop", None)
        return getattr(shop, "name", None)

    def validate(self, attrs):
        original = attrs.get("original_price", getattr(self.instance, "original_price", None))
        discount = attrs.get("discount_price", getattr(self.instance, "discount_price", None))
        if original is not None and discount is not None and original < discount:
            raise serializers.ValidationError(
                {"original_price": ["original_price cannot be lower than discount_price"]}
            )
        return attrs
