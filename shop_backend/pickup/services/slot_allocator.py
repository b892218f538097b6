# pickup/services/slot_allocator.py

"""
SLOT ALLOCATOR

Maps a requested pickup instant to its canonical hourly bucket at a
pickup point and moves one unit of capacity in / out of that bucket.

Bucket:
- requested instant -> point's local timezone (naive input is read as local)
- local hour must be inside [PICKUP_OPEN_HOUR, PICKUP_CLOSE_HOUR)
- floor to the local hour; bucket = [start, start + 1h), stored in UTC
- two requests inside the same local hour at the same point ALWAYS
  compete for the same row

Concurrency:
- reserve() runs inside the caller's transaction (savepoint when nested)
- existing bucket: row lock + conditional UPDATE ... WHERE capacity > 0
- missing bucket: INSERT in a savepoint; on a unique-key race the loser
  falls back to the locked-increment path
- counter race, not a queue: the loser of the last unit gets SlotFull,
  there is no retry
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta
from datetime import timezone as dt_timezone

from django.conf import settings
from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import IntegrityError, transaction
from django.db.models import F
from django.utils import timezone

from common.exceptions import (
    OutsideServiceHours,
    PickupPointNotFound,
    PickupPointUnavailable,
    PickupSlotNotFound,
    SlotFull,
    SlotInUse,
)
from pickup.models import PickupPoint, PickupSlot

logger = logging.getLogger(__name__)


def slot_capacity() -> int:
    return int(getattr(settings, "PICKUP_SLOT_CAPACITY", 24))


def service_hours() -> tuple[int, int]:
    return (
        int(getattr(settings, "PICKUP_OPEN_HOUR", 10)),
        int(getattr(settings, "PICKUP_CLOSE_HOUR", 21)),
    )


# ============================================================
# BUCKETS
# ============================================================


def compute_bucket(point: PickupPoint, requested_at: datetime) -> tuple[datetime, datetime]:
    zone = point.zone

    if timezone.is_naive(requested_at):
        local = requested_at.replace(tzinfo=zone)
    else:
        local = requested_at.astimezone(zone)

    open_hour, close_hour = service_hours()
    if not (open_hour <= local.hour < close_hour):
        raise OutsideServiceHours(
            f"Pickup is available from {open_hour:02d}:00 to {close_hour:02d}:00 local time.",
            details={
                "point_id": str(point.id),
                "local_time": local.isoformat(),
                "open_hour": open_hour,
                "close_hour": close_hour,
            },
        )

    start_local = local.replace(minute=0, second=0, microsecond=0)
    starts_at = start_local.astimezone(dt_timezone.utc)
    return starts_at, starts_at + timedelta(hours=1)


def get_active_point(point_id) -> PickupPoint:
    try:
        point = PickupPoint.objects.get(id=point_id)
    except (PickupPoint.DoesNotExist, DjangoValidationError, ValueError):
        raise PickupPointNotFound(details={"point_id": str(point_id)}) from None

    if not point.is_active:
        raise PickupPointUnavailable(details={"point_id": str(point.id)})
    return point


# ============================================================
# COUNTERS
# ============================================================


def _take_unit(slot: PickupSlot) -> PickupSlot:
    updated = PickupSlot.objects.filter(pk=slot.pk, capacity__gt=0).update(
        capacity=F("capacity") - 1,
        reserved=F("reserved") + 1,
        updated_at=timezone.now(),
    )
    if not updated:
        logger.info(
            "Pickup slot full",
            extra={"slot_id": str(slot.pk), "point_id": str(slot.point_id)},
        )
        raise SlotFull(
            details={
                "slot_id": str(slot.pk),
                "starts_at": slot.starts_at.isoformat(),
            }
        )

    slot.refresh_from_db(fields=["capacity", "reserved", "updated_at"])
    return slot


def _locked_slot(point: PickupPoint, starts_at: datetime) -> PickupSlot | None:
    return (
        PickupSlot.objects.select_for_update()
        .filter(point=point, starts_at=starts_at)
        .first()
    )


def _create_slot(point: PickupPoint, starts_at: datetime, ends_at: datetime) -> PickupSlot | None:
    total = slot_capacity()
    try:
        with transaction.atomic():
            slot = PickupSlot.objects.create(
                point=point,
                starts_at=starts_at,
                ends_at=ends_at,
                capacity=total - 1,
                reserved=1,
            )
    except IntegrityError:
        logger.info(
            "Pickup slot created concurrently; retrying on the locked row",
            extra={"point_id": str(point.id), "starts_at": starts_at.isoformat()},
        )
        return None

    logger.info(
        "Pickup slot created",
        extra={"slot_id": str(slot.id), "point_id": str(point.id), "starts_at": starts_at.isoformat()},
    )
    return slot


@transaction.atomic
def reserve(point_id, requested_at: datetime, *, current_slot: PickupSlot | None = None) -> PickupSlot:
    """
    Reserve one unit in the bucket containing `requested_at`.

    If `current_slot` is another bucket, it is released in the same
    transaction. Re-selecting the bucket already held is a no-op.
    """
    point = get_active_point(point_id)
    starts_at, ends_at = compute_bucket(point, requested_at)

    slot = _locked_slot(point, starts_at)

    if slot is None:
        slot = _create_slot(point, starts_at, ends_at)
        if slot is None:
            slot = _locked_slot(point, starts_at)
            if current_slot is not None and slot.pk == current_slot.pk:
                return slot
            slot = _take_unit(slot)
    elif current_slot is not None and slot.pk == current_slot.pk:
        return slot
    else:
        slot = _take_unit(slot)

    if current_slot is not None:
        release(current_slot)

    logger.info(
        "Pickup slot reserved",
        extra={"slot_id": str(slot.pk), "reserved": slot.reserved, "capacity": slot.capacity},
    )
    return slot


def release(slot) -> bool:
    """
    Give one unit back. Releasing an empty slot is logged and ignored.
    """
    slot_id = getattr(slot, "pk", slot)

    updated = PickupSlot.objects.filter(pk=slot_id, reserved__gt=0).update(
        capacity=F("capacity") + 1,
        reserved=F("reserved") - 1,
        updated_at=timezone.now(),
    )
    if not updated:
        logger.warning("Release on empty pickup slot ignored", extra={"slot_id": str(slot_id)})
        return False

    logger.info("Pickup slot released", extra={"slot_id": str(slot_id)})
    return True


# ============================================================
# READS / ADMIN
# ============================================================


def available_slots(point_id, start: datetime | None = None, end: datetime | None = None) -> list[dict]:
    point = get_active_point(point_id)

    qs = PickupSlot.objects.filter(point=point)
    if start is not None:
        qs = qs.filter(starts_at__gte=start)
    if end is not None:
        qs = qs.filter(starts_at__lte=end)

    return [
        {
            "id": slot.id,
            "starts_at": slot.starts_at,
            "ends_at": slot.ends_at,
            "capacity": slot.capacity,
            "reserved": slot.reserved,
            "available": slot.available,
            "is_full": slot.is_full,
        }
        for slot in qs.order_by("starts_at")
    ]


@transaction.atomic
def delete_slot(slot_id) -> None:
    try:
        slot = PickupSlot.objects.select_for_update().get(pk=slot_id)
    except (PickupSlot.DoesNotExist, DjangoValidationError, ValueError):
        raise PickupSlotNotFound(details={"slot_id": str(slot_id)}) from None

    orders_count = slot.orders.count()
    if orders_count > 0:
        raise SlotInUse(
            "Cannot delete a pickup slot with existing orders. Reassign or cancel them first.",
            details={"slot_id": str(slot.pk), "orders_count": orders_count},
        )

    slot.delete()
    logger.info("Pickup slot deleted", extra={"slot_id": str(slot_id)})
