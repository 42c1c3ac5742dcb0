from django.contrib import admin

from shops.models import Shop


@admin.register(Shop)
class ShopAdmin(admin.ModelAdmin):
    list_display = ("name", "owner", "available_balance", "is_active", "created_at")
    list_filter = ("is_active",)
    search_fields = ("name", "email", "owner__email")
    readonly_fields = ("available_balance", "created_at", "updated_at")
