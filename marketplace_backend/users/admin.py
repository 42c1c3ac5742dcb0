# users/admin.py

"""
USERS ADMIN

Buyers, sellers and admins share one model; sellers get their shops inline
(read-only: wallet balances move only through settlement).
"""

from __future__ import annotations

from django.contrib import admin
from django.contrib.auth import get_user_model
from django.contrib.auth.admin import UserAdmin as DjangoUserAdmin

from shops.models import Shop

User = get_user_model()


class OwnedShopInline(admin.TabularInline):
    model = Shop
    fk_name = "owner"
    extra = 0
    can_delete = False
    fields = ("name", "email", "available_balance", "is_active")
    readonly_fields = ("available_balance",)


@admin.register(User)
class MarketplaceUserAdmin(DjangoUserAdmin):
    ordering = ("-created_at",)
    list_display = ("email", "full_name", "role", "phone_number", "is_active", "created_at")
    list_filter = ("role", "is_active", "is_superuser")
    search_fields = ("email", "first_name", "last_name", "phone_number")
    readonly_fields = ("created_at", "updated_at", "last_login")
    inlines = [OwnedShopInline]

    fieldsets = (
        (None, {"fields": ("email", "password", "role")}),
        ("Contact", {"fields": ("first_name", "last_name", "phone_number")}),
        ("Access", {"fields": ("is_active", "is_staff", "is_superuser", "groups")}),
        ("Activity", {"fields": ("last_login", "created_at", "updated_at")}),
    )

    add_fieldsets = (
        (
            None,
            {
                "classes": ("wide",),
                "fields": ("email", "role", "password1", "password2"),
            },
        ),
    )
