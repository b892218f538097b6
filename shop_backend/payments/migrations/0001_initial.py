"""
MIGRATION: CREATE Payment (one per order)
"""

from __future__ import annotations

import uuid

import django.db.models.deletion
from django.db import migrations, models

import payments.models.payment


class Migration(migrations.Migration):
    initial = True

    dependencies = [
        ("orders", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="Payment",
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
                ("amount", models.DecimalField(max_digits=14, decimal_places=2)),
                (
                    "method",
                    models.CharField(
                        max_length=16,
                        choices=[("ROBOKASSA", "Robokassa"), ("CASH", "Cash")],
                    ),
                ),
                (
                    "status",
                    models.CharField(
                        max_length=16,
                        choices=[
                            ("PENDING", "Pending"),
                            ("COMPLETED", "Completed"),
                            ("REFUNDED", "Refunded"),
                        ],
                        default="PENDING",
                        db_index=True,
                    ),
                ),
                (
                    "reference",
                    models.CharField(
                        max_length=64,
                        unique=True,
                        default=payments.models.payment.generate_reference,
                        editable=False,
                    ),
                ),
                ("provider_payload", models.JSONField(default=dict, blank=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("completed_at", models.DateTimeField(null=True, blank=True)),
                ("refunded_at", models.DateTimeField(null=True, blank=True)),
                (
                    "order",
                    models.OneToOneField(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="payment",
                        to="orders.order",
                    ),
                ),
            ],
            options={
                "ordering": ["-created_at"],
            },
        ),
    ]
