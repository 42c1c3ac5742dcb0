# products/admin.py

from django.contrib import admin

from products.models import Product


@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    list_display = ("name", "shop", "discount_price", "stock", "sold_out", "is_active")
    list_filter = ("is_active",)
    search_fields = ("name", "shop__name")
    readonly_fields = ("sold_out", "created_at", "updated_at")
