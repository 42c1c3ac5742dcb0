from rest_framework import serializers

from shops.models import Shop


class ShopSerializer(serializers.ModelSerializer):
    """
    Seller shop. The wallet balance is visible but never writable via the API.
    """

    class Meta:
        model = Shop
        fields = [
            "id",
            "name",
            "email",
            "phone_number",
            "address",
            "available_balance",
            "is_active",
            "created_at",
            "updated_at",
        ]
        read_only_fields = [
            "id",
            "available_balance",
            "created_at",
            "updated_at",
        ]
