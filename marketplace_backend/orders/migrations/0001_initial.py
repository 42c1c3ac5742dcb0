import uuid
from decimal import Decimal

import django.core.validators
import django.db.models.deletion
import django.utils.timezone
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
        ("products", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="OrderSequence",
            fields=[
                ("name", models.CharField(max_length=32, primary_key=True, serialize=False)),
                ("value", models.PositiveBigIntegerField(default=0)),
            ],
        ),
        migrations.CreateModel(
            name="Order",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                (
                    "order_number",
                    models.CharField(
                        help_text="Human-facing sequential order number, e.g. wanttar-00001",
                        max_length=64,
                        unique=True,
                    ),
                ),
                (
                    "checkout_id",
                    models.UUIDField(db_index=True, help_text="Groups the seller orders carved from one cart"),
                ),
                ("user_snapshot", models.JSONField(default=dict)),
                ("shipping_address", models.JSONField(default=dict)),
                ("shop_ref", models.CharField(db_index=True, max_length=64)),
                ("shop_name", models.CharField(blank=True, default="", max_length=255)),
                ("sub_total_price", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=14)),
                ("shipping_price", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=14)),
                ("discount_price", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=14)),
                ("tax", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=14)),
                ("total_price", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=14)),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("Processing", "Processing"),
                            ("Transferred to delivery partner", "Transferred to delivery partner"),
                            ("Shipping", "Shipping"),
                            ("Received", "Received"),
                            ("On the way", "On the way"),
                            ("Delivered", "Delivered"),
                            ("Processing refund", "Processing refund"),
                            ("Refund Success", "Refund Success"),
                            ("Cancelled", "Cancelled"),
                        ],
                        default="Processing",
                        max_length=40,
                    ),
                ),
                ("payment_id", models.CharField(blank=True, default="", max_length=128)),
                ("payment_status", models.CharField(blank=True, default="", max_length=40)),
                ("payment_type", models.CharField(blank=True, default="", max_length=64)),
                (
                    "payment_kind",
                    models.CharField(
                        choices=[("prepaid", "Prepaid"), ("cod", "Cash on delivery")],
                        default="prepaid",
                        max_length=16,
                    ),
                ),
                ("tracking_number", models.CharField(blank=True, default="", max_length=128)),
                ("courier_partner", models.CharField(blank=True, default="", max_length=128)),
                ("estimated_delivery", models.DateTimeField(blank=True, null=True)),
                ("delivered_at", models.DateTimeField(blank=True, null=True)),
                ("cancelled_at", models.DateTimeField(blank=True, null=True)),
                ("cancellation_reason", models.CharField(blank=True, default="", max_length=255)),
                (
                    "inventory_committed",
                    models.BooleanField(
                        default=False,
                        help_text="True while this order's quantities are deducted from product stock",
                    ),
                ),
                ("settled_at", models.DateTimeField(blank=True, null=True)),
                ("settled_amount", models.DecimalField(blank=True, decimal_places=2, max_digits=14, null=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "buyer",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="orders",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "ordering": ["-created_at"],
                "indexes": [
                    models.Index(fields=["status"], name="order_status_idx"),
                    models.Index(fields=["shop_ref", "created_at"], name="order_shop_created_idx"),
                    models.Index(fields=["buyer", "created_at"], name="order_buyer_created_idx"),
                ],
            },
        ),
        migrations.CreateModel(
            name="OrderItem",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                (
                    "position",
                    models.PositiveIntegerField(
                        default=0,
                        help_text="Original position of the line in the combined cart",
                    ),
                ),
                ("name", models.CharField(blank=True, default="", max_length=255)),
                (
                    "quantity",
                    models.PositiveIntegerField(validators=[django.core.validators.MinValueValidator(1)]),
                ),
                ("discount_price", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=12)),
                ("original_price", models.DecimalField(blank=True, decimal_places=2, max_digits=12, null=True)),
                ("final_price", models.DecimalField(blank=True, decimal_places=2, max_digits=12, null=True)),
                ("selected_attributes", models.JSONField(blank=True, default=dict)),
                (
                    "line_total",
                    models.DecimalField(
                        decimal_places=2,
                        default=Decimal("0.00"),
                        help_text="effective unit price * quantity (server computed)",
                        max_digits=14,
                    ),
                ),
                (
                    "order",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="items",
                        to="orders.order",
                    ),
                ),
                (
                    "product",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="order_items",
                        to="products.product",
                    ),
                ),
            ],
            options={
                "ordering": ["position", "id"],
            },
        ),
        migrations.CreateModel(
            name="OrderStatusEvent",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("status", models.CharField(max_length=40)),
                ("note", models.CharField(blank=True, default="", max_length=255)),
                ("timestamp", models.DateTimeField(default=django.utils.timezone.now)),
                (
                    "order",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="status_history",
                        to="orders.order",
                    ),
                ),
            ],
            options={
                "ordering": ["timestamp", "id"],
            },
        ),
    ]
