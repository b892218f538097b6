# common/tests/factories.py

"""
Shared builders for order-engine tests.

Kept deliberately plain: every helper creates real rows through the
same services the API uses, so invariants are exercised end to end.
"""

from __future__ import annotations

from datetime import datetime, timedelta
from decimal import Decimal
from zoneinfo import ZoneInfo

from django.contrib.auth import get_user_model
from django.utils import timezone

from cart.services.cart_service import add_item
from catalog.models import Product
from coupons.models import Coupon
from customers.models import GuestSession
from customers.services.owner import Buyer, Guest
from orders.services.order_lifecycle import init_order
from pickup.models import PickupPoint

User = get_user_model()

POINT_TZ = "Europe/Moscow"


def make_user(username="buyer", **extra):
    return User.objects.create_user(
        username=username,
        email=f"{username}@example.com",
        password="pass12345",
        **extra,
    )


def make_staff(username="operator"):
    return make_user(username, is_staff=True)


def make_guest() -> GuestSession:
    return GuestSession.objects.create()


def buyer_of(user) -> Buyer:
    return Buyer(user_id=user.pk)


def guest_of(session: GuestSession) -> Guest:
    return Guest(session_id=session.id)


def make_product(sku="SKU-1", name="Aspirin", unit_price="100.00", **extra) -> Product:
    return Product.objects.create(sku=sku, name=name, unit_price=Decimal(unit_price), **extra)


def make_point(name="Central", tz=POINT_TZ, **extra) -> PickupPoint:
    return PickupPoint.objects.create(name=name, address="1 Main St", timezone=tz, **extra)


def local_time(hour=14, minute=20, *, days=1, tz=POINT_TZ) -> datetime:
    """Aware datetime `days` from today at hour:minute in the pickup point's zone."""
    zone = ZoneInfo(tz)
    day = timezone.now().astimezone(zone).date() + timedelta(days=days)
    return datetime(day.year, day.month, day.day, hour, minute, tzinfo=zone)


def make_coupon(
    code="SUMMER10",
    coupon_type=Coupon.TYPE_PERCENTAGE,
    value="10",
    *,
    usage_limit=0,
    is_active=True,
    valid_from=None,
    valid_to=None,
) -> Coupon:
    now = timezone.now()
    return Coupon.objects.create(
        code=code,
        coupon_type=coupon_type,
        value=Decimal(value),
        valid_from=valid_from or now - timedelta(days=1),
        valid_to=valid_to or now + timedelta(days=30),
        usage_limit=usage_limit,
        is_active=is_active,
    )


def make_order(owner, product=None, quantity=1):
    """Cart with one line -> PENDING order."""
    product = product or make_product()
    add_item(owner, product.id, quantity)
    return init_order(owner)
