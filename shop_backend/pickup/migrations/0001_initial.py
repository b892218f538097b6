"""
MIGRATION: CREATE PickupPoint + PickupSlot

Slot counters are guarded by check constraints; (point, starts_at) is unique
so concurrent first reservations of one bucket collide on insert.
"""

from __future__ import annotations

import uuid

import django.db.models.deletion
from django.db import migrations, models

import pickup.models.pickup_point


class Migration(migrations.Migration):
    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="PickupPoint",
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
                ("name", models.CharField(max_length=255, unique=True)),
                ("address", models.CharField(max_length=500, blank=True, default="")),
                (
                    "timezone",
                    models.CharField(
                        max_length=64,
                        default=pickup.models.pickup_point._default_timezone,
                        help_text="IANA timezone name, e.g. Europe/Moscow.",
                    ),
                ),
                ("is_active", models.BooleanField(default=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "ordering": ["name"],
            },
        ),
        migrations.CreateModel(
            name="PickupSlot",
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
                ("starts_at", models.DateTimeField(db_index=True)),
                ("ends_at", models.DateTimeField()),
                ("capacity", models.IntegerField()),
                ("reserved", models.IntegerField(default=0)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "point",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="slots",
                        to="pickup.pickuppoint",
                    ),
                ),
            ],
            options={
                "ordering": ["starts_at"],
                "constraints": [
                    models.UniqueConstraint(
                        fields=("point", "starts_at"),
                        name="unique_pickup_slot_per_point_hour",
                    ),
                    models.CheckConstraint(
                        condition=models.Q(("capacity__gte", 0)),
                        name="pickup_slot_capacity_non_negative",
                    ),
                    models.CheckConstraint(
                        condition=models.Q(("reserved__gte", 0)),
                        name="pickup_slot_reserved_non_negative",
                    ),
                ],
            },
        ),
    ]
