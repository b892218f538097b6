# payments/tests/test_gateway.py

from __future__ import annotations

import json

from django.test import TestCase, override_settings
from rest_framework.test import APIClient

from common.tests.factories import buyer_of, local_time, make_order, make_point, make_product, make_user
from loyalty.models import BonusEntry
from orders.models import Order
from orders.services.order_lifecycle import select_pickup
from payments.models import Payment
from payments.services.gateway import (
    EVENT_PAYMENT_COMPLETED,
    handle_gateway_event,
    sign_payload,
    verify_signature,
)
from payments.services.payment_service import create_payment

WEBHOOK_URL = "/api/payments/gateway/webhook/"


class GatewayTestCase(TestCase):
    def setUp(self):
        self.user = make_user()
        owner = buyer_of(self.user)
        self.order = make_order(owner, make_product(unit_price="900.00"))
        select_pickup(self.order.pk, owner, make_point().id, local_time(15, 0))
        self.payment = create_payment(self.order.pk, owner, Payment.METHOD_ROBOKASSA)

    def event(self, **data):
        return {
            "event": EVENT_PAYMENT_COMPLETED,
            "data": {"reference": self.payment.reference, "amount": "900.00", **data},
        }


class SignatureTests(TestCase):
    def test_valid_signature(self):
        body = b'{"event": "payment.completed"}'
        self.assertTrue(verify_signature(raw_body=body, signature=sign_payload(body)))

    def test_tampered_body_or_missing_signature(self):
        body = b'{"event": "payment.completed"}'
        signature = sign_payload(body)

        self.assertFalse(verify_signature(raw_body=body + b" ", signature=signature))
        self.assertFalse(verify_signature(raw_body=body, signature=None))

    @override_settings(PAYMENTS={"GATEWAY": {"SECRET": ""}})
    def test_missing_secret_fails_closed(self):
        body = b"{}"
        self.assertFalse(verify_signature(raw_body=body, signature=sign_payload(body, secret="")))


class HandleGatewayEventTests(GatewayTestCase):
    def test_completion_event_pays_order(self):
        result = handle_gateway_event(self.event())

        self.assertEqual(result["detail"], "Processed")
        self.payment.refresh_from_db()
        self.assertEqual(self.payment.status, Payment.STATUS_COMPLETED)
        self.assertEqual(self.payment.provider_payload["data"]["reference"], self.payment.reference)
        self.assertEqual(Order.objects.get(pk=self.order.pk).status, Order.STATUS_PAYED)

    def test_duplicate_event_is_acknowledged_without_side_effects(self):
        handle_gateway_event(self.event())
        result = handle_gateway_event(self.event())

        self.assertEqual(result["detail"], "Already completed")
        self.assertEqual(BonusEntry.objects.filter(order=self.order).count(), 1)

    def test_amount_mismatch_leaves_payment_pending(self):
        result = handle_gateway_event(self.event(amount="1.00"))

        self.assertEqual(result["detail"], "Amount mismatch")
        self.payment.refresh_from_db()
        self.assertEqual(self.payment.status, Payment.STATUS_PENDING)

    def test_unknown_reference_and_other_events(self):
        self.assertEqual(handle_gateway_event(self.event(reference="PAY-NOPE"))["detail"], "Unknown reference")
        self.assertEqual(handle_gateway_event({"event": "payment.failed"})["detail"], "Ignored event")
        self.assertEqual(handle_gateway_event({"event": EVENT_PAYMENT_COMPLETED, "data": {}})["detail"], "No reference")


class GatewayWebhookApiTests(GatewayTestCase):
    def test_signed_webhook_completes_payment(self):
        body = json.dumps(self.event()).encode("utf-8")

        res = APIClient().post(
            WEBHOOK_URL,
            data=body,
            content_type="application/json",
            HTTP_X_GATEWAY_SIGNATURE=sign_payload(body),
        )

        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.data["detail"], "Processed")
        self.assertEqual(Order.objects.get(pk=self.order.pk).status, Order.STATUS_PAYED)

    def test_bad_signature_is_rejected(self):
        body = json.dumps(self.event()).encode("utf-8")

        res = APIClient().post(
            WEBHOOK_URL,
            data=body,
            content_type="application/json",
            HTTP_X_GATEWAY_SIGNATURE="deadbeef",
        )

        self.assertEqual(res.status_code, 400)
        self.payment.refresh_from_db()
        self.assertEqual(self.payment.status, Payment.STATUS_PENDING)
