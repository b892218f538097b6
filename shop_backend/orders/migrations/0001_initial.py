"""
MIGRATION: CREATE Order + OrderLine

Money, ownership and pickup-pair invariants are enforced by check
constraints in addition to Order.clean().
"""

from __future__ import annotations

import uuid
from decimal import Decimal

import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):
    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
        ("catalog", "0001_initial"),
        ("coupons", "0001_initial"),
        ("customers", "0001_initial"),
        ("pickup", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="Order",
            fields=[
                ("id", models.BigAutoField(primary_key=True, serialize=False)),
                (
                    "subtotal_amount",
                    models.DecimalField(max_digits=14, decimal_places=2, default=Decimal("0.00")),
                ),
                (
                    "discount_amount",
                    models.DecimalField(max_digits=14, decimal_places=2, default=Decimal("0.00")),
                ),
                (
                    "total_amount",
                    models.DecimalField(max_digits=14, decimal_places=2, default=Decimal("0.00")),
                ),
                (
                    "status",
                    models.CharField(
                        max_length=20,
                        choices=[
                            ("PENDING", "Pending"),
                            ("PROCESSING", "Processing"),
                            ("PAYED", "Payed"),
                            ("SHIPPED", "Shipped"),
                            ("DELIVERED", "Delivered"),
                            ("CANCELLED", "Cancelled"),
                        ],
                        default="PENDING",
                        db_index=True,
                    ),
                ),
                (
                    "delivery_method",
                    models.CharField(
                        max_length=16,
                        choices=[("PICKUP", "Pickup"), ("DELIVERY", "Delivery")],
                        default="PICKUP",
                    ),
                ),
                ("delivery_address", models.TextField(blank=True, default="")),
                ("customer_name", models.CharField(max_length=255, blank=True, default="")),
                ("customer_email", models.EmailField(max_length=254, blank=True, default="")),
                ("customer_phone", models.CharField(max_length=32, blank=True, default="")),
                (
                    "payment_method",
                    models.CharField(
                        max_length=16,
                        choices=[("ROBOKASSA", "Robokassa"), ("CASH", "Cash")],
                        blank=True,
                        default="",
                    ),
                ),
                ("pay_later", models.BooleanField(default=False)),
                (
                    "bonus_earned",
                    models.DecimalField(max_digits=14, decimal_places=2, default=Decimal("0.00")),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("paid_at", models.DateTimeField(null=True, blank=True)),
                ("cancelled_at", models.DateTimeField(null=True, blank=True)),
                (
                    "buyer",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="orders",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
                (
                    "guest_session",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="orders",
                        to="customers.guestsession",
                    ),
                ),
                (
                    "pickup_point",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="orders",
                        to="pickup.pickuppoint",
                    ),
                ),
                (
                    "pickup_slot",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="orders",
                        to="pickup.pickupslot",
                    ),
                ),
                (
                    "coupon",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="orders",
                        to="coupons.coupon",
                    ),
                ),
            ],
            options={
                "ordering": ["-created_at", "-id"],
                "indexes": [
                    models.Index(fields=["status", "created_at"], name="order_status_created_idx"),
                ],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(
                            models.Q(("buyer__isnull", False), ("guest_session__isnull", True)),
                            models.Q(("buyer__isnull", True), ("guest_session__isnull", False)),
                            _connector="OR",
                        ),
                        name="order_single_owner",
                    ),
                    models.CheckConstraint(
                        condition=models.Q(("discount_amount__gte", 0)),
                        name="order_discount_non_negative",
                    ),
                    models.CheckConstraint(
                        condition=models.Q(("total_amount__gte", 0)),
                        name="order_total_non_negative",
                    ),
                    models.CheckConstraint(
                        condition=models.Q(("discount_amount__lte", models.F("subtotal_amount"))),
                        name="order_discount_within_subtotal",
                    ),
                    models.CheckConstraint(
                        condition=models.Q(
                            models.Q(("pickup_point__isnull", True), ("pickup_slot__isnull", True)),
                            models.Q(
                                ("delivery_method", "PICKUP"),
                                ("pickup_point__isnull", False),
                                ("pickup_slot__isnull", False),
                            ),
                            _connector="OR",
                        ),
                        name="order_pickup_pair_consistent",
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="OrderLine",
            fields=[
                (
                    "id",
                    models.UUIDField(
                        primary_key=True,
                        default=uuid.uuid4,
                        editable=False,
                        serialize=False,
                    ),
                ),
                ("quantity", models.PositiveIntegerField()),
                ("unit_price", models.DecimalField(max_digits=12, decimal_places=2)),
                ("line_total", models.DecimalField(max_digits=14, decimal_places=2)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                (
                    "order",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="lines",
                        to="orders.order",
                    ),
                ),
                (
                    "product",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="order_lines",
                        to="catalog.product",
                    ),
                ),
            ],
            options={
                "ordering": ["created_at"],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(("quantity__gt", 0)),
                        name="order_line_quantity_positive",
                    ),
                ],
            },
        ),
    ]
