# pickup/models/pickup_slot.py

"""
PICKUP SLOT MODEL

One hourly capacity bucket at one pickup point.

Counters:
- capacity = units still free
- reserved = units taken
- capacity + reserved is constant (PICKUP_SLOT_CAPACITY, 24) for the
  life of the slot; reserve/release move one unit between them.

Rules:
- (point, starts_at) is the natural key; created lazily on first reservation.
- Both counters are never negative (DB check constraints).
- Counters are ONLY changed through pickup.services.slot_allocator
  (row locks + conditional F() updates).
- Never deleted while any order references it (Order.pickup_slot is PROTECT).
"""

import uuid

from django.db import models
from django.db.models import Q

from .pickup_point import PickupPoint


class PickupSlot(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    point = models.ForeignKey(
        PickupPoint,
        on_delete=models.PROTECT,
        related_name="slots",
    )

    starts_at = models.DateTimeField(db_index=True)
    ends_at = models.DateTimeField()

    capacity = models.IntegerField()
    reserved = models.IntegerField(default=0)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["starts_at"]
        constraints = [
            models.UniqueConstraint(
                fields=["point", "starts_at"],
                name="unique_pickup_slot_per_point_hour",
            ),
            models.CheckConstraint(
                condition=Q(capacity__gte=0),
                name="pickup_slot_capacity_non_negative",
            ),
            models.CheckConstraint(
                condition=Q(reserved__gte=0),
                name="pickup_slot_reserved_non_negative",
            ),
        ]

    @property
    def available(self) -> int:
        return max(int(self.capacity), 0)

    @property
    def is_full(self) -> bool:
        return self.capacity <= 0

    def __str__(self):
        return f"{self.point.name} @ {self.starts_at:%Y-%m-%d %H:%M} ({self.reserved} booked)"
