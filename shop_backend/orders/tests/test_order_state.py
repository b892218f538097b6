# orders/tests/test_order_state.py

from __future__ import annotations

from django.test import SimpleTestCase

from common.exceptions import InvalidStatusTransition, OrderNotPending
from orders.models import Order
from orders.services.order_state import (
    ALLOWED_TRANSITIONS,
    TERMINAL_STATES,
    assert_pending,
    can_transition,
    validate_operator_transition,
    validate_transition,
)

FORWARD = [
    Order.STATUS_PENDING,
    Order.STATUS_PROCESSING,
    Order.STATUS_PAYED,
    Order.STATUS_SHIPPED,
    Order.STATUS_DELIVERED,
]


class OrderStateTests(SimpleTestCase):
    """
    GUARANTEES:
    - status only moves forward along PENDING -> ... -> DELIVERED
    - CANCELLED is reachable from any non-terminal status
    - terminal statuses never move
    """

    def _order(self, status):
        return Order(pk=1, status=status)

    def test_status_never_regresses(self):
        for i, current in enumerate(FORWARD):
            for earlier in FORWARD[: i + 1]:
                with self.subTest(current=current, target=earlier):
                    self.assertFalse(can_transition(from_status=current, to_status=earlier))

    def test_cancel_from_every_non_terminal_status(self):
        for status in ALLOWED_TRANSITIONS:
            with self.subTest(status=status):
                self.assertTrue(can_transition(from_status=status, to_status=Order.STATUS_CANCELLED))

    def test_terminal_states_are_final(self):
        for terminal in TERMINAL_STATES:
            for target, _ in Order.STATUS_CHOICES:
                with self.subTest(terminal=terminal, target=target):
                    self.assertFalse(can_transition(from_status=terminal, to_status=target))

    def test_payment_driven_statuses_cannot_be_set_by_operator(self):
        with self.assertRaises(InvalidStatusTransition):
            validate_operator_transition(order=self._order(Order.STATUS_PENDING), target_status=Order.STATUS_PROCESSING)
        with self.assertRaises(InvalidStatusTransition):
            validate_operator_transition(order=self._order(Order.STATUS_PROCESSING), target_status=Order.STATUS_PAYED)

    def test_operator_can_ship_a_paid_order(self):
        validate_operator_transition(order=self._order(Order.STATUS_PAYED), target_status=Order.STATUS_SHIPPED)

    def test_invalid_transition_carries_details(self):
        with self.assertRaises(InvalidStatusTransition) as ctx:
            validate_transition(order=self._order(Order.STATUS_PAYED), target_status=Order.STATUS_PENDING)

        self.assertEqual(ctx.exception.details["from"], Order.STATUS_PAYED)

    def test_assert_pending(self):
        assert_pending(self._order(Order.STATUS_PENDING))
        with self.assertRaises(OrderNotPending):
            assert_pending(self._order(Order.STATUS_PAYED))
