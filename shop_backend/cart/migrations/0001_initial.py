"""
MIGRATION: CREATE CartLine

One line per (owner, product); exactly one owner per line.
"""

from __future__ import annotations

import uuid

import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):
    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
        ("catalog", "0001_initial"),
        ("customers", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="CartLine",
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
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "buyer",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="cart_lines",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
                (
                    "guest_session",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="cart_lines",
                        to="customers.guestsession",
                    ),
                ),
                (
                    "product",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="cart_lines",
                        to="catalog.product",
                    ),
                ),
            ],
            options={
                "ordering": ["created_at"],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(
                            models.Q(("buyer__isnull", False), ("guest_session__isnull", True)),
                            models.Q(("buyer__isnull", True), ("guest_session__isnull", False)),
                            _connector="OR",
                        ),
                        name="cart_line_single_owner",
                    ),
                    models.CheckConstraint(
                        condition=models.Q(("quantity__gt", 0)),
                        name="cart_line_quantity_positive",
                    ),
                    models.UniqueConstraint(
                        fields=("buyer", "product"),
                        condition=models.Q(("buyer__isnull", False)),
                        name="unique_cart_product_per_buyer",
                    ),
                    models.UniqueConstraint(
                        fields=("guest_session", "product"),
                        condition=models.Q(("guest_session__isnull", False)),
                        name="unique_cart_product_per_guest",
                    ),
                ],
            },
        ),
    ]
