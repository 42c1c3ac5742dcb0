# users/serializers.py

from django.contrib.auth import get_user_model
from django.contrib.auth.password_validation import validate_password
from django.db import transaction
from rest_framework import serializers

from shops.models import Shop

User = get_user_model()


# ---------------- REGISTER ----------------
class RegisterSerializer(serializers.ModelSerializer):
    """
    Buyers and sellers sign themselves up; admins are created by an admin.

    A seller may open their first shop in the same request via shop_name.
    The shop contact email defaults to the seller's own.
    """

    password = serializers.CharField(
        write_only=True,
        validators=[validate_password],
        style={"input_type": "password"},
    )
    role = serializers.ChoiceField(
        choices=[User.ROLE_CUSTOMER, User.ROLE_SELLER],
        required=False,
        default=User.ROLE_CUSTOMER,
    )
    shop_name = serializers.CharField(required=False, allow_blank=False, max_length=255, write_only=True)

    class Meta:
        model = User
        fields = [
            "email",
            "password",
            "first_name",
            "last_name",
            "phone_number",
            "role",
            "shop_name",
        ]

    def validate(self, attrs):
        if attrs.get("shop_name") and attrs.get("role") != User.ROLE_SELLER:
            raise serializers.ValidationError({"shop_name": ["Only sellers can open a shop."]})
        return attrs

    @transaction.atomic
    def create(self, validated_data):
        shop_name = validated_data.pop("shop_name", None)
        user = User.objects.create_user(**validated_data)
        if shop_name:
            Shop.objects.create(owner=user, name=shop_name, email=user.email, phone_number=user.phone_number)
        return user


# ---------------- LOGIN (INPUT ONLY) ----------------
class LoginSerializer(serializers.Serializer):
    """
    Input validation only.
    Authentication is handled in the view.
    """

    email = serializers.EmailField()
    password = serializers.CharField(
        write_only=True,
        style={"input_type": "password"},
    )


# ---------------- USER OUTPUT ----------------
class UserSerializer(serializers.ModelSerializer):
    """
    Profile as the frontend sees it. shop_ids lets a seller land on the
    right dashboard without a second request.
    """

    full_name = serializers.CharField(read_only=True)
    shop_ids = serializers.SerializerMethodField()

    class Meta:
        model = User
        fields = [
            "id",
            "email",
            "first_name",
            "last_name",
            "full_name",
            "phone_number",
            "role",
            "shop_ids",
        ]
        read_only_fields = ["id", "email", "first_name", "last_name", "phone_number", "role"]

    def get_shop_ids(self, obj):
        if obj.role != User.ROLE_SELLER:
            return []
        return [str(pk) for pk in obj.shops.filter(is_active=True).values_list("id", flat=True)]


# ---------------- PROFILE UPDATE (INPUT) ----------------
class ProfileUpdateSerializer(serializers.ModelSerializer):
    """
    Contact details only. Email and role changes go through an admin,
    since orders snapshot both at checkout.
    """

    class Meta:
        model = User
        fields = ["first_name", "last_name", "phone_number"]
