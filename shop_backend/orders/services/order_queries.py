# orders/services/order_queries.py

"""
ORDER READS + LOCKING

Owner-scoped lookups. owner=None is the operator path (no scoping).
An order that exists but belongs to someone else is reported as
OrderNotFound, never as a permission error.
"""

from __future__ import annotations

from common.exceptions import OrderNotFound
from orders.models import Order


def _order_pk(order_id) -> int:
    try:
        return int(order_id)
    except (TypeError, ValueError):
        raise OrderNotFound(details={"order_id": str(order_id)}) from None


def order_queryset():
    return Order.objects.select_related(
        "pickup_point",
        "pickup_slot",
        "coupon",
        "payment",
    ).prefetch_related("lines__product")


def scoped(qs, owner=None):
    if owner is not None:
        qs = qs.filter(**owner.lookup())
    return qs


def get_order(order_id, owner=None) -> Order:
    pk = _order_pk(order_id)
    order = scoped(order_queryset(), owner).filter(pk=pk).first()
    if order is None:
        raise OrderNotFound(details={"order_id": pk})
    return order


def list_orders(owner=None, *, status: str | None = None):
    qs = scoped(order_queryset(), owner)
    if status:
        qs = qs.filter(status=status)
    return qs.order_by("-created_at", "-id")


def lock_order(order_id, owner=None) -> Order:
    """
    Row-lock an order for the rest of the caller's transaction.
    """
    pk = _order_pk(order_id)
    order = scoped(Order.objects.select_for_update(), owner).filter(pk=pk).first()
    if order is None:
        raise OrderNotFound(details={"order_id": pk})
    return order
