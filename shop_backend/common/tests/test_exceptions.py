# common/tests/test_exceptions.py

from __future__ import annotations

from django.test import SimpleTestCase

from common.exceptions import (
    CouponAlreadyApplied,
    OrderNotFound,
    OrderNotPending,
    OwnerRequired,
    PayLaterRequiresCash,
    PickupPointUnavailable,
    ShopError,
    SlotFull,
)
from common.money import ZERO, money
from common.responses import error_response, shop_error_response


class ShopErrorTaxonomyTests(SimpleTestCase):
    """
    GUARANTEES:
    - every concrete error carries its kind and HTTP status
    - the error envelope is stable
    """

    def test_kinds_map_to_http_statuses(self):
        cases = [
            (OrderNotFound(), "not_found", 404),
            (SlotFull(), "conflict", 409),
            (CouponAlreadyApplied(), "conflict", 409),
            (OrderNotPending(), "invalid_state", 400),
            (PayLaterRequiresCash(), "validation", 400),
            (PickupPointUnavailable(), "unavailable", 400),
            (OwnerRequired(), "validation", 401),
        ]
        for exc, kind, http_status in cases:
            with self.subTest(code=exc.code):
                self.assertIsInstance(exc, ShopError)
                self.assertEqual(exc.kind, kind)
                self.assertEqual(exc.http_status, http_status)

    def test_default_message_and_details(self):
        exc = SlotFull(details={"slot_id": "abc"})

        self.assertEqual(exc.message, SlotFull.default_message)
        self.assertEqual(exc.as_dict()["details"], {"slot_id": "abc"})

    def test_error_response_envelope(self):
        response = shop_error_response(OrderNotFound("Order 7 not found.", details={"order_id": 7}))

        self.assertEqual(response.status_code, 404)
        self.assertEqual(
            response.data,
            {
                "error": {
                    "code": "order_not_found",
                    "kind": "not_found",
                    "message": "Order 7 not found.",
                    "details": {"order_id": 7},
                }
            },
        )

    def test_plain_error_response_defaults(self):
        response = error_response(code="maintenance", message="Try later.", http_status=503)

        self.assertEqual(response.status_code, 503)
        self.assertEqual(response.data["error"]["kind"], "error")
        self.assertIsNone(response.data["error"]["details"])


class MoneyTests(SimpleTestCase):
    def test_money_rounds_half_up_to_cents(self):
        self.assertEqual(str(money("10.005")), "10.01")
        self.assertEqual(str(money(3)), "3.00")

    def test_money_treats_empty_as_zero(self):
        self.assertEqual(money(None), ZERO)
        self.assertEqual(money(""), ZERO)
