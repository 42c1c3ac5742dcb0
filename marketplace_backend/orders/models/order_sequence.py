# orders/models/order_sequence.py

from django.db import models


class OrderSequence(models.Model):
    """
    Named monotonic counter backing human-facing order numbers.

    Incremented under a row lock (select_for_update) so two concurrent
    checkouts can never draw the same number.
    """

    name = models.CharField(max_length=32, primary_key=True)
    value = models.PositiveBigIntegerField(default=0)

    def __str__(self):
        return f"{self.name}={self.value}"
