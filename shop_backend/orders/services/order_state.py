# orders/services/order_state.py

"""
ORDER STATE DOMAIN RULES

This module defines the ONLY allowed status transitions
for Order entities.

DESIGN PRINCIPLES:
- No database writes
- No side effects
- Single source of truth

    PENDING -> PROCESSING -> PAYED -> SHIPPED -> DELIVERED
    any non-terminal status -> CANCELLED

PENDING is also the "still being assembled" status: pickup selection,
coupon apply/remove and finalization all require it.
"""

from common.exceptions import InvalidStatusTransition, OrderNotPending
from orders.models import Order

# ============================================================
# STATE DEFINITIONS
# ============================================================

TERMINAL_STATES = {
    Order.STATUS_DELIVERED,
    Order.STATUS_CANCELLED,
}

ALLOWED_TRANSITIONS = {
    Order.STATUS_PENDING: {
        Order.STATUS_PROCESSING,
        Order.STATUS_CANCELLED,
    },
    Order.STATUS_PROCESSING: {
        Order.STATUS_PAYED,
        Order.STATUS_CANCELLED,
    },
    Order.STATUS_PAYED: {
        Order.STATUS_SHIPPED,
        Order.STATUS_DELIVERED,
        Order.STATUS_CANCELLED,
    },
    Order.STATUS_SHIPPED: {
        Order.STATUS_DELIVERED,
        Order.STATUS_CANCELLED,
    },
}

# Statuses an operator may set directly. PROCESSING and PAYED are
# reached only through payment creation / completion.
OPERATOR_TARGETS = {
    Order.STATUS_SHIPPED,
    Order.STATUS_DELIVERED,
    Order.STATUS_CANCELLED,
}


# ============================================================
# DOMAIN RULES
# ============================================================


def can_transition(*, from_status: str, to_status: str) -> bool:
    if from_status in TERMINAL_STATES:
        return False

    return to_status in ALLOWED_TRANSITIONS.get(from_status, set())


def validate_transition(*, order: Order, target_status: str):
    if not can_transition(
        from_status=order.status,
        to_status=target_status,
    ):
        raise InvalidStatusTransition(
            f"Order {order.pk} cannot transition from "
            f"'{order.status}' to '{target_status}'",
            details={"order_id": order.pk, "from": order.status, "to": target_status},
        )


def validate_operator_transition(*, order: Order, target_status: str):
    if target_status not in OPERATOR_TARGETS:
        raise InvalidStatusTransition(
            f"Status '{target_status}' cannot be set manually.",
            details={"order_id": order.pk, "from": order.status, "to": target_status},
        )
    validate_transition(order=order, target_status=target_status)


def assert_pending(order: Order):
    if order.status != Order.STATUS_PENDING:
        raise OrderNotPending(
            f"Order {order.pk} is {order.status}; only pending orders can be changed.",
            details={"order_id": order.pk, "status": order.status},
        )
