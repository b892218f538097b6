# payments/services/payment_service.py

"""
PAYMENT SERVICE

Payment-driven order transitions. Each runs in ONE transaction with the
order row locked first, then the payment row.

create_payment:    Payment(PENDING) + Order PENDING -> PROCESSING
                   (pickup point and slot must already be assigned)
complete_payment:  Payment COMPLETED + Order PROCESSING -> PAYED
                   + loyalty accrual (buyers only; guests have no ledger)
"""

from __future__ import annotations

import logging

from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import IntegrityError, transaction
from django.utils import timezone

from common.cache import invalidate_order
from common.exceptions import (
    InvalidStatusTransition,
    ManualCompletionNotAllowed,
    PayLaterRequiresCash,
    PaymentAlreadyExists,
    PaymentNotFound,
    PaymentNotPending,
    PickupNotSelected,
)
from customers.services.owner import owner_of
from loyalty.services.loyalty_service import accrue
from orders.models import Order
from orders.services.order_queries import get_order, lock_order
from orders.services.order_state import assert_pending, validate_transition
from payments.models import Payment

logger = logging.getLogger(__name__)


def _slot_assigned(order: Order) -> bool:
    return bool(order.pickup_point_id and order.pickup_slot_id)


# ============================================================
# READS
# ============================================================


def payment_queryset():
    return Payment.objects.select_related("order")


def list_payments(owner=None):
    """
    Newest first. owner=None is the operator listing (filtered in the view).
    """
    qs = payment_queryset()
    if owner is not None:
        qs = qs.filter(**{f"order__{field}": value for field, value in owner.lookup().items()})
    return qs.order_by("-created_at")


def get_payment(payment_id) -> Payment:
    try:
        return payment_queryset().get(pk=payment_id)
    except (Payment.DoesNotExist, DjangoValidationError, ValueError):
        raise PaymentNotFound(details={"payment_id": str(payment_id)}) from None


def get_payment_for_order(order_id, owner=None) -> Payment:
    order = get_order(order_id, owner)
    payment = Payment.objects.filter(order=order).first()
    if payment is None:
        raise PaymentNotFound(details={"order_id": order.pk})
    return payment


# ============================================================
# TRANSITIONS
# ============================================================


@transaction.atomic
def create_payment(order_id, owner, method: str) -> Payment:
    order = lock_order(order_id, owner)

    if Payment.objects.filter(order=order).exists():
        raise PaymentAlreadyExists(details={"order_id": order.pk})

    assert_pending(order)

    if not _slot_assigned(order):
        raise PickupNotSelected(details={"order_id": order.pk})

    if order.pay_later and method != Payment.METHOD_CASH:
        raise PayLaterRequiresCash(details={"payment_method": method})

    validate_transition(order=order, target_status=Order.STATUS_PROCESSING)

    try:
        with transaction.atomic():
            payment = Payment.objects.create(
                order=order,
                amount=order.total_amount,
                method=method,
                status=Payment.STATUS_PENDING,
            )
    except IntegrityError:
        raise PaymentAlreadyExists(details={"order_id": order.pk}) from None

    order.status = Order.STATUS_PROCESSING
    order.payment_method = method
    order.save(update_fields=["status", "payment_method", "updated_at"])

    invalidate_order(order.pk)
    logger.info(
        "Payment created",
        extra={
            "order_id": order.pk,
            "reference": payment.reference,
            "method": method,
            "amount": str(payment.amount),
        },
    )
    return payment


@transaction.atomic
def complete_payment(order_id, *, via_gateway: bool = False, payload: dict | None = None) -> Payment:
    """
    Manual completion (operator) is allowed for CASH only; any other
    method is completed exclusively by the gateway adapter.
    """
    order = lock_order(order_id)

    payment = Payment.objects.select_for_update().filter(order=order).first()
    if payment is None:
        raise PaymentNotFound(details={"order_id": order.pk})

    if not via_gateway and payment.method != Payment.METHOD_CASH:
        raise ManualCompletionNotAllowed(details={"method": payment.method})

    if payment.status != Payment.STATUS_PENDING:
        raise PaymentNotPending(details={"reference": payment.reference, "status": payment.status})

    validate_transition(order=order, target_status=Order.STATUS_PAYED)

    now = timezone.now()

    payment.status = Payment.STATUS_COMPLETED
    payment.completed_at = now
    fields = ["status", "completed_at", "updated_at"]
    if payload is not None:
        payment.provider_payload = payload
        fields.append("provider_payload")
    payment.save(update_fields=fields)

    order.status = Order.STATUS_PAYED
    order.paid_at = now
    order.save(update_fields=["status", "paid_at", "updated_at"])

    if owner_of(order).is_buyer:
        accrue(order.buyer, order, order.total_amount)
    else:
        logger.info("Guest order; loyalty accrual skipped", extra={"order_id": order.pk})

    invalidate_order(order.pk)
    logger.info(
        "Payment completed",
        extra={"order_id": order.pk, "reference": payment.reference, "via_gateway": via_gateway},
    )
    return payment


@transaction.atomic
def refund_payment(order_id) -> Payment:
    order = lock_order(order_id)

    payment = Payment.objects.select_for_update().filter(order=order).first()
    if payment is None:
        raise PaymentNotFound(details={"order_id": order.pk})

    if payment.status != Payment.STATUS_COMPLETED:
        raise InvalidStatusTransition(
            "Only completed payments can be refunded.",
            details={"reference": payment.reference, "status": payment.status},
        )

    payment.status = Payment.STATUS_REFUNDED
    payment.refunded_at = timezone.now()
    payment.save(update_fields=["status", "refunded_at", "updated_at"])

    invalidate_order(order.pk)
    logger.info("Payment refunded", extra={"order_id": order.pk, "reference": payment.reference})
    return payment


def update_payment_status(order_id, status: str) -> Payment:
    """
    Operator entrypoint: COMPLETED delegates to complete_payment
    (cash only), REFUNDED is allowed only from COMPLETED.
    """
    if status == Payment.STATUS_COMPLETED:
        return complete_payment(order_id)
    if status == Payment.STATUS_REFUNDED:
        return refund_payment(order_id)

    raise InvalidStatusTransition(
        f"Payment status '{status}' cannot be set manually.",
        details={"order_id": str(order_id), "status": status},
    )
