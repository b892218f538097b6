# orders/services/order_lifecycle.py

"""
ORDER LIFECYCLE MANAGER

The only component that mutates Order.status (payment-driven moves are
delegated to payments.services.payment_service, which goes through
order_state as well).

Flow:
    cart lines --init_order--> Order(PENDING, PICKUP)
      -> select_pickup (repeatable; swaps slots atomically)
      -> apply_coupon / remove_coupon (repeatable)
      -> finalize_order (fixes delivery method + contact + payment method)
      -> create_payment          PENDING    -> PROCESSING
      -> complete_payment        PROCESSING -> PAYED (+ loyalty accrual)
      -> update_order_status     operator: SHIPPED / DELIVERED / CANCELLED

Every operation is all-or-nothing (transaction.atomic). Input validation
happens before any row is locked or written.
"""

from __future__ import annotations

import logging
from datetime import datetime

from django.db import transaction
from django.utils import timezone

from cart.models import CartLine
from catalog.services.price_snapshot import refresh_line_prices
from common.cache import invalidate_order
from common.exceptions import (
    AddressRequired,
    CartEmpty,
    InactiveProductsPresent,
    PayLaterRequiresCash,
    PickupDetailsRequired,
)
from common.money import ZERO, money
from coupons.services.coupon_ledger import apply_coupon, remove_coupon
from customers.services.owner import OwnerRef
from orders.models import Order, OrderLine
from orders.services.order_queries import get_order, list_orders, lock_order
from orders.services.order_state import (
    assert_pending,
    validate_operator_transition,
)
from pickup.services.slot_allocator import release, reserve

logger = logging.getLogger(__name__)

__all__ = [
    "apply_coupon",
    "finalize_order",
    "get_order",
    "init_order",
    "list_orders",
    "remove_coupon",
    "select_pickup",
    "update_order_status",
]


# ============================================================
# INIT (cart -> order)
# ============================================================


@transaction.atomic
def init_order(owner: OwnerRef) -> Order:
    lines = list(
        CartLine.objects.select_for_update(of=("self",))
        .filter(**owner.lookup())
        .select_related("product")
        .order_by("created_at")
    )

    if not lines:
        raise CartEmpty()

    inactive = [line for line in lines if not line.product.is_active]
    if inactive:
        raise InactiveProductsPresent(
            details={
                "lines": [
                    {
                        "line_id": str(line.id),
                        "product_id": str(line.product_id),
                        "product_name": line.product.name,
                        "quantity": line.quantity,
                    }
                    for line in inactive
                ]
            }
        )

    priced = refresh_line_prices(lines)
    subtotal = money(sum((p.line_total for p in priced), ZERO))

    order = Order.objects.create(
        **owner.create_kwargs(),
        subtotal_amount=subtotal,
        discount_amount=ZERO,
        total_amount=subtotal,
        status=Order.STATUS_PENDING,
        delivery_method=Order.DELIVERY_PICKUP,
    )

    OrderLine.objects.bulk_create(
        [
            OrderLine(
                order=order,
                product_id=p.line.product_id,
                quantity=p.line.quantity,
                unit_price=p.unit_price,
                line_total=p.line_total,
            )
            for p in priced
        ]
    )

    CartLine.objects.filter(pk__in=[line.pk for line in lines]).delete()

    logger.info(
        "Order initialized from cart",
        extra={"order_id": order.pk, "lines": len(priced), "subtotal": str(subtotal)},
    )
    return order


# ============================================================
# PICKUP
# ============================================================


@transaction.atomic
def select_pickup(order_id, owner: OwnerRef | None, point_id, requested_at: datetime) -> Order:
    order = lock_order(order_id, owner)
    assert_pending(order)

    slot = reserve(point_id, requested_at, current_slot=order.pickup_slot)

    order.delivery_method = Order.DELIVERY_PICKUP
    order.pickup_point_id = slot.point_id
    order.pickup_slot = slot
    order.delivery_address = ""
    order.save(
        update_fields=[
            "delivery_method",
            "pickup_point",
            "pickup_slot",
            "delivery_address",
            "updated_at",
        ]
    )

    invalidate_order(order.pk)
    logger.info(
        "Pickup slot selected",
        extra={"order_id": order.pk, "slot_id": str(slot.pk), "point_id": str(slot.point_id)},
    )
    return order


# ============================================================
# FINALIZE
# ============================================================


def _check_finalize_input(*, delivery_method, payment_method, pay_later, point_id, pickup_time, address):
    if pay_later and payment_method != Order.PAYMENT_CASH:
        raise PayLaterRequiresCash(details={"payment_method": payment_method})

    if delivery_method == Order.DELIVERY_PICKUP:
        if not point_id or not pickup_time:
            raise PickupDetailsRequired()
    elif not (address or "").strip():
        raise AddressRequired()


@transaction.atomic
def finalize_order(
    order_id,
    owner: OwnerRef | None,
    *,
    delivery_method: str,
    customer_name: str,
    customer_email: str,
    customer_phone: str,
    payment_method: str,
    pay_later: bool = False,
    point_id=None,
    pickup_time: datetime | None = None,
    address: str | None = None,
) -> Order:
    """
    Fix delivery details on a PENDING order. Status stays PENDING.

    owner=None is the operator "finalize pending order" path.
    """
    _check_finalize_input(
        delivery_method=delivery_method,
        payment_method=payment_method,
        pay_later=pay_later,
        point_id=point_id,
        pickup_time=pickup_time,
        address=address,
    )

    order = lock_order(order_id, owner)
    assert_pending(order)

    if delivery_method == Order.DELIVERY_PICKUP:
        slot = reserve(point_id, pickup_time, current_slot=order.pickup_slot)
        order.pickup_point_id = slot.point_id
        order.pickup_slot = slot
        order.delivery_address = ""
    else:
        if order.pickup_slot_id:
            release(order.pickup_slot_id)
        order.pickup_point = None
        order.pickup_slot = None
        order.delivery_address = address.strip()

    order.delivery_method = delivery_method
    order.customer_name = (customer_name or "").strip()
    order.customer_email = (customer_email or "").strip()
    order.customer_phone = (customer_phone or "").strip()
    order.payment_method = payment_method
    order.pay_later = bool(pay_later)
    order.save(
        update_fields=[
            "delivery_method",
            "pickup_point",
            "pickup_slot",
            "delivery_address",
            "customer_name",
            "customer_email",
            "customer_phone",
            "payment_method",
            "pay_later",
            "updated_at",
        ]
    )

    invalidate_order(order.pk)
    logger.info(
        "Order finalized",
        extra={
            "order_id": order.pk,
            "delivery_method": delivery_method,
            "payment_method": payment_method,
            "pay_later": bool(pay_later),
            "operator": owner is None,
        },
    )
    return order


# ============================================================
# OPERATOR STATUS UPDATES
# ============================================================


@transaction.atomic
def update_order_status(order_id, target_status: str) -> Order:
    order = lock_order(order_id)
    validate_operator_transition(order=order, target_status=target_status)

    previous = order.status
    order.status = target_status
    fields = ["status", "updated_at"]

    if target_status == Order.STATUS_CANCELLED:
        order.cancelled_at = timezone.now()
        fields.append("cancelled_at")
        if order.pickup_slot_id:
            release(order.pickup_slot_id)

    order.save(update_fields=fields)

    invalidate_order(order.pk)
    logger.info(
        "Order status updated",
        extra={"order_id": order.pk, "from": previous, "to": target_status},
    )
    return order
