# orders/models/order_status_event.py

"""
ORDER STATUS HISTORY (APPEND-ONLY)

One row per lifecycle transition, including the placement entry.
Created once. Never updated. Never deleted.
"""

from django.db import models
from django.utils import timezone


class OrderStatusEvent(models.Model):
    order = models.ForeignKey(
        "orders.Order",
        on_delete=models.CASCADE,
        related_name="status_history",
    )

    status = models.CharField(max_length=40)
    note = models.CharField(max_length=255, blank=True, default="")
    timestamp = models.DateTimeField(default=timezone.now)

    class Meta:
        ordering = ["timestamp", "id"]

    def save(self, *args, **kwargs):
        if not self._state.adding:
            raise RuntimeError("OrderStatusEvent records are immutable")
        super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        raise RuntimeError("OrderStatusEvent records cannot be deleted")

    def __str__(self):
        return f"{self.status} @ {self.timestamp:%Y-%m-%d %H:%M}"
