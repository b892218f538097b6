# payments/tests/test_payment_service.py

from __future__ import annotations

from decimal import Decimal

from django.test import TestCase

from common.exceptions import (
    InvalidStatusTransition,
    ManualCompletionNotAllowed,
    OrderNotPending,
    PayLaterRequiresCash,
    PaymentAlreadyExists,
    PaymentNotFound,
    PaymentNotPending,
    PickupNotSelected,
)
from common.tests.factories import (
    buyer_of,
    guest_of,
    local_time,
    make_guest,
    make_order,
    make_point,
    make_product,
    make_user,
)
from loyalty.models import BonusEntry, LoyaltyAccount
from orders.models import Order
from orders.services.order_lifecycle import finalize_order, select_pickup, update_order_status
from payments.models import Payment
from payments.services.payment_service import (
    complete_payment,
    create_payment,
    get_payment,
    get_payment_for_order,
    list_payments,
    update_payment_status,
)


class PaymentFlowTestCase(TestCase):
    def setUp(self):
        self.user = make_user()
        self.owner = buyer_of(self.user)
        self.point = make_point()
        self.order = self.ready_order(self.owner, unit_price="1234.00")

    def ready_order(self, owner, unit_price="100.00", sku="SKU-1"):
        order = make_order(owner, make_product(sku=sku, unit_price=unit_price))
        select_pickup(order.pk, owner, self.point.id, local_time(14, 0))
        return order


class CreatePaymentTests(PaymentFlowTestCase):
    def test_create_moves_order_to_processing(self):
        payment = create_payment(self.order.pk, self.owner, Payment.METHOD_CASH)

        self.assertEqual(payment.status, Payment.STATUS_PENDING)
        self.assertEqual(payment.amount, Decimal("1234.00"))
        self.assertTrue(payment.reference.startswith("PAY-"))
        self.order.refresh_from_db()
        self.assertEqual(self.order.status, Order.STATUS_PROCESSING)
        self.assertEqual(self.order.payment_method, Payment.METHOD_CASH)

    def test_second_payment_is_a_conflict(self):
        create_payment(self.order.pk, self.owner, Payment.METHOD_CASH)

        with self.assertRaises(PaymentAlreadyExists):
            create_payment(self.order.pk, self.owner, Payment.METHOD_CASH)

    def test_pickup_must_be_selected(self):
        bare = make_order(self.owner, make_product(sku="SKU-2"))

        with self.assertRaises(PickupNotSelected):
            create_payment(bare.pk, self.owner, Payment.METHOD_CASH)

    def test_delivery_orders_cannot_be_paid_without_a_slot(self):
        order = make_order(self.owner, make_product(sku="SKU-3"))
        finalize_order(
            order.pk,
            self.owner,
            delivery_method=Order.DELIVERY_DELIVERY,
            customer_name="Ann",
            customer_email="ann@example.com",
            customer_phone="+7000",
            payment_method=Payment.METHOD_CASH,
            address="1 Road",
        )

        with self.assertRaises(PickupNotSelected):
            create_payment(order.pk, self.owner, Payment.METHOD_CASH)

        order.refresh_from_db()
        self.assertEqual(order.status, Order.STATUS_PENDING)
        self.assertFalse(Payment.objects.filter(order=order).exists())

    def test_pay_later_orders_pay_cash(self):
        Order.objects.filter(pk=self.order.pk).update(pay_later=True)

        with self.assertRaises(PayLaterRequiresCash):
            create_payment(self.order.pk, self.owner, Payment.METHOD_ROBOKASSA)

        self.assertFalse(Payment.objects.exists())

    def test_cancelled_order_cannot_be_paid(self):
        update_order_status(self.order.pk, Order.STATUS_CANCELLED)

        with self.assertRaises(OrderNotPending):
            create_payment(self.order.pk, self.owner, Payment.METHOD_CASH)


class CompletePaymentTests(PaymentFlowTestCase):
    def test_scenario_cash_completion_pays_and_accrues_cashback(self):
        create_payment(self.order.pk, self.owner, Payment.METHOD_CASH)

        payment = complete_payment(self.order.pk)

        self.assertEqual(payment.status, Payment.STATUS_COMPLETED)
        self.assertIsNotNone(payment.completed_at)
        self.order.refresh_from_db()
        self.assertEqual(self.order.status, Order.STATUS_PAYED)
        self.assertIsNotNone(self.order.paid_at)

        # floor(1234.00 * 0.01) = 12
        self.assertEqual(self.order.bonus_earned, Decimal("12.00"))
        entry = BonusEntry.objects.get(order=self.order)
        self.assertEqual(entry.amount, Decimal("12.00"))
        self.assertEqual(LoyaltyAccount.objects.get(user=self.user).total_spent, Decimal("1234.00"))

    def test_card_payments_are_not_completed_manually(self):
        create_payment(self.order.pk, self.owner, Payment.METHOD_ROBOKASSA)

        with self.assertRaises(ManualCompletionNotAllowed):
            complete_payment(self.order.pk)

    def test_double_completion_is_rejected_and_credits_once(self):
        create_payment(self.order.pk, self.owner, Payment.METHOD_CASH)
        complete_payment(self.order.pk)

        with self.assertRaises(PaymentNotPending):
            complete_payment(self.order.pk)

        self.assertEqual(BonusEntry.objects.filter(order=self.order).count(), 1)

    def test_guest_orders_skip_loyalty(self):
        guest = guest_of(make_guest())
        order = self.ready_order(guest, sku="SKU-G")
        create_payment(order.pk, guest, Payment.METHOD_CASH)

        complete_payment(order.pk)

        order.refresh_from_db()
        self.assertEqual(order.status, Order.STATUS_PAYED)
        self.assertEqual(order.bonus_earned, Decimal("0.00"))
        self.assertFalse(BonusEntry.objects.exists())


class OperatorPaymentStatusTests(PaymentFlowTestCase):
    def test_refund_only_after_completion(self):
        create_payment(self.order.pk, self.owner, Payment.METHOD_CASH)

        with self.assertRaises(InvalidStatusTransition):
            update_payment_status(self.order.pk, Payment.STATUS_REFUNDED)

        update_payment_status(self.order.pk, Payment.STATUS_COMPLETED)
        payment = update_payment_status(self.order.pk, Payment.STATUS_REFUNDED)

        self.assertEqual(payment.status, Payment.STATUS_REFUNDED)
        self.assertIsNotNone(payment.refunded_at)
        self.order.refresh_from_db()
        self.assertEqual(self.order.status, Order.STATUS_PAYED)

    def test_pending_cannot_be_set_manually(self):
        create_payment(self.order.pk, self.owner, Payment.METHOD_CASH)

        with self.assertRaises(InvalidStatusTransition):
            update_payment_status(self.order.pk, Payment.STATUS_PENDING)

    def test_payment_lookup_is_owner_scoped(self):
        create_payment(self.order.pk, self.owner, Payment.METHOD_CASH)

        self.assertEqual(get_payment_for_order(self.order.pk, self.owner).order_id, self.order.pk)


class PaymentReadTests(PaymentFlowTestCase):
    def setUp(self):
        super().setUp()
        self.guest = guest_of(make_guest())
        self.guest_order = self.ready_order(self.guest, sku="SKU-G")
        self.buyer_payment = create_payment(self.order.pk, self.owner, Payment.METHOD_ROBOKASSA)
        self.guest_payment = create_payment(self.guest_order.pk, self.guest, Payment.METHOD_CASH)

    def test_list_is_scoped_to_the_owner(self):
        self.assertEqual(list(list_payments(self.owner)), [self.buyer_payment])
        self.assertEqual(list(list_payments(self.guest)), [self.guest_payment])
        self.assertEqual(list(list_payments(buyer_of(make_user("stranger")))), [])

    def test_operator_list_is_unscoped(self):
        self.assertEqual(list_payments().count(), 2)

    def test_get_payment_by_id(self):
        self.assertEqual(get_payment(self.guest_payment.pk).order_id, self.guest_order.pk)

        with self.assertRaises(PaymentNotFound):
            get_payment("not-a-uuid")
