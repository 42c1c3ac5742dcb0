from django.contrib import admin

from notifications.models import Notification


@admin.register(Notification)
class NotificationAdmin(admin.ModelAdmin):
    list_display = ("title", "recipient", "recipient_type", "kind", "is_read", "created_at")
    list_filter = ("recipient_type", "kind", "is_read")
    search_fields = ("title", "message", "recipient__email")
    readonly_fields = ("created_at", "read_at")
