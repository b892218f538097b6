# coupons/services/coupon_ledger.py

"""
COUPON LEDGER

Validates codes, computes discounts, and keeps two invariants:

- single coupon per order (no stacking): a second apply is a Conflict
- usage_count == number of orders currently holding the coupon:
  +1 on apply, -1 on remove, always in the order's transaction

Discount:
- PERCENTAGE: subtotal * value / 100
- FIXED:      value
- clamped to [0, subtotal], rounded half-up to 0.01
- total = subtotal - discount
"""

from __future__ import annotations

import logging
from datetime import datetime
from decimal import Decimal

from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import IntegrityError, transaction
from django.db.models import F
from django.utils import timezone

from common.cache import invalidate_order
from common.exceptions import (
    CouponAlreadyApplied,
    CouponCodeTaken,
    CouponExpired,
    CouponInactive,
    CouponNotFound,
    CouponNotYetValid,
    CouponUsageLimitReached,
    InvalidCouponValue,
    InvalidCouponWindow,
    NoCouponApplied,
)
from common.money import ZERO, money
from coupons.models import Coupon
from orders.services.order_queries import lock_order
from orders.services.order_state import assert_pending

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = (
    "code",
    "coupon_type",
    "value",
    "valid_from",
    "valid_to",
    "usage_limit",
    "is_active",
)


def normalize_code(code) -> str:
    return Coupon.normalize(code)


# ============================================================
# VALIDATION / DISCOUNT (no writes)
# ============================================================


def check_usable(coupon: Coupon, now: datetime | None = None) -> Coupon:
    now = now or timezone.now()
    details = {"code": coupon.code}

    if not coupon.is_active:
        raise CouponInactive(details=details)
    if now < coupon.valid_from:
        raise CouponNotYetValid(details={**details, "valid_from": coupon.valid_from.isoformat()})
    if now > coupon.valid_to:
        raise CouponExpired(details={**details, "valid_to": coupon.valid_to.isoformat()})
    if coupon.is_exhausted:
        raise CouponUsageLimitReached(details={**details, "usage_limit": coupon.usage_limit})
    return coupon


def validate(code, now: datetime | None = None) -> Coupon:
    normalized = normalize_code(code)
    coupon = Coupon.objects.filter(code=normalized).first()
    if coupon is None:
        raise CouponNotFound(details={"code": normalized})
    return check_usable(coupon, now)


def compute_discount(coupon: Coupon, subtotal) -> Decimal:
    subtotal = money(subtotal)
    if subtotal <= ZERO:
        return ZERO

    value = Decimal(str(coupon.value))
    if coupon.coupon_type == Coupon.TYPE_PERCENTAGE:
        raw = subtotal * value / Decimal("100")
    else:
        raw = value

    return money(max(min(raw, subtotal), ZERO))


# ============================================================
# ORDER MUTATIONS
# ============================================================


@transaction.atomic
def apply_coupon(order_id, code, *, owner=None):
    order = lock_order(order_id, owner)
    assert_pending(order)

    if order.coupon_id:
        raise CouponAlreadyApplied(details={"order_id": order.pk})

    normalized = normalize_code(code)
    coupon = Coupon.objects.select_for_update().filter(code=normalized).first()
    if coupon is None:
        raise CouponNotFound(details={"code": normalized})
    check_usable(coupon)

    discount = compute_discount(coupon, order.subtotal_amount)

    Coupon.objects.filter(pk=coupon.pk).update(
        usage_count=F("usage_count") + 1,
        updated_at=timezone.now(),
    )

    order.coupon = coupon
    order.discount_amount = discount
    order.total_amount = money(order.subtotal_amount - discount)
    order.save(update_fields=["coupon", "discount_amount", "total_amount", "updated_at"])

    invalidate_order(order.pk)
    logger.info(
        "Coupon applied",
        extra={"order_id": order.pk, "code": coupon.code, "discount": str(discount)},
    )
    return order


@transaction.atomic
def remove_coupon(order_id, *, owner=None):
    order = lock_order(order_id, owner)

    if not order.coupon_id:
        raise NoCouponApplied(details={"order_id": order.pk})
    assert_pending(order)

    coupon_id = order.coupon_id
    decremented = Coupon.objects.filter(pk=coupon_id, usage_count__gt=0).update(
        usage_count=F("usage_count") - 1,
        updated_at=timezone.now(),
    )
    if not decremented:
        logger.warning("Coupon usage already at zero", extra={"coupon_id": str(coupon_id)})

    order.coupon = None
    order.discount_amount = ZERO
    order.total_amount = money(order.subtotal_amount)
    order.save(update_fields=["coupon", "discount_amount", "total_amount", "updated_at"])

    invalidate_order(order.pk)
    logger.info("Coupon removed", extra={"order_id": order.pk, "coupon_id": str(coupon_id)})
    return order


# ============================================================
# ADMINISTRATION
# ============================================================


def _check_definition(*, coupon_type, value, valid_from, valid_to) -> None:
    if valid_from and valid_to and valid_to <= valid_from:
        raise InvalidCouponWindow(
            details={"valid_from": valid_from.isoformat(), "valid_to": valid_to.isoformat()}
        )

    value = Decimal(str(value))
    if value <= 0:
        raise InvalidCouponValue("Coupon value must be greater than zero.", details={"value": str(value)})
    if coupon_type == Coupon.TYPE_PERCENTAGE and value > 100:
        raise InvalidCouponValue("Percentage value cannot exceed 100.", details={"value": str(value)})


def get_coupon(coupon_id) -> Coupon:
    try:
        return Coupon.objects.get(pk=coupon_id)
    except (Coupon.DoesNotExist, DjangoValidationError, ValueError):
        raise CouponNotFound(details={"coupon_id": str(coupon_id)}) from None


def _save_unique(coupon: Coupon) -> Coupon:
    try:
        with transaction.atomic():
            coupon.save()
    except IntegrityError:
        raise CouponCodeTaken(details={"code": coupon.code}) from None
    return coupon


@transaction.atomic
def create_coupon(
    *,
    code,
    coupon_type,
    value,
    valid_from,
    valid_to,
    usage_limit: int = 0,
    is_active: bool = True,
) -> Coupon:
    normalized = normalize_code(code)
    _check_definition(coupon_type=coupon_type, value=value, valid_from=valid_from, valid_to=valid_to)

    if Coupon.objects.filter(code=normalized).exists():
        raise CouponCodeTaken(details={"code": normalized})

    coupon = _save_unique(
        Coupon(
            code=normalized,
            coupon_type=coupon_type,
            value=money(value),
            valid_from=valid_from,
            valid_to=valid_to,
            usage_limit=usage_limit,
            is_active=is_active,
        )
    )
    logger.info("Coupon created", extra={"coupon_id": str(coupon.id), "code": coupon.code})
    return coupon


@transaction.atomic
def update_coupon(coupon_id, **changes) -> Coupon:
    coupon = get_coupon(coupon_id)
    changes = {k: v for k, v in changes.items() if k in EDITABLE_FIELDS}

    if "code" in changes:
        changes["code"] = normalize_code(changes["code"])
        if Coupon.objects.filter(code=changes["code"]).exclude(pk=coupon.pk).exists():
            raise CouponCodeTaken(details={"code": changes["code"]})

    _check_definition(
        coupon_type=changes.get("coupon_type", coupon.coupon_type),
        value=changes.get("value", coupon.value),
        valid_from=changes.get("valid_from", coupon.valid_from),
        valid_to=changes.get("valid_to", coupon.valid_to),
    )

    for field, v in changes.items():
        setattr(coupon, field, v)

    coupon = _save_unique(coupon)
    logger.info(
        "Coupon updated",
        extra={"coupon_id": str(coupon.id), "fields": sorted(changes)},
    )
    return coupon


@transaction.atomic
def delete_coupon(coupon_id) -> None:
    coupon = get_coupon(coupon_id)
    code = coupon.code
    coupon.delete()
    logger.info("Coupon deleted", extra={"coupon_id": str(coupon_id), "code": code})


def list_active_coupons(now: datetime | None = None) -> list[Coupon]:
    now = now or timezone.now()
    qs = Coupon.objects.filter(
        is_active=True,
        valid_from__lte=now,
        valid_to__gte=now,
    ).order_by("valid_to")
    return [c for c in qs if not c.is_exhausted]
