from django.contrib import admin

from orders.models import Order, OrderItem, OrderSequence, OrderStatusEvent


class OrderItemInline(admin.TabularInline):
    model = OrderItem
    extra = 0
    can_delete = False
    readonly_fields = (
        "position",
        "product",
        "name",
        "quantity",
        "discount_price",
        "original_price",
        "final_price",
        "selected_attributes",
        "line_total",
    )


class OrderStatusEventInline(admin.TabularInline):
    model = OrderStatusEvent
    extra = 0
    can_delete = False
    readonly_fields = ("status", "note", "timestamp")

    def has_add_permission(self, request, obj=None):
        return False


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    """
    Orders are read-only in the admin; status changes go through the API
    so stock, wallet and notification side effects always run.
    """

    list_display = (
        "order_number",
        "shop_name",
        "status",
        "payment_kind",
        "total_price",
        "settled_at",
        "created_at",
    )
    list_filter = ("status", "payment_kind")
    search_fields = ("order_number", "shop_name", "user_snapshot__email")
    inlines = [OrderItemInline, OrderStatusEventInline]

    def get_readonly_fields(self, request, obj=None):
        return [f.name for f in self.model._meta.fields]


@admin.register(OrderSequence)
class OrderSequenceAdmin(admin.ModelAdmin):
    list_display = ("name", "value")
    readonly_fields = ("name", "value")
