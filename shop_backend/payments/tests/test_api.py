# payments/tests/test_api.py

from __future__ import annotations

import uuid

from django.test import TestCase
from rest_framework.test import APIClient

from common.tests.factories import (
    buyer_of,
    local_time,
    make_order,
    make_point,
    make_product,
    make_staff,
    make_user,
)
from orders.services.order_lifecycle import select_pickup
from payments.models import Payment
from payments.services.payment_service import create_payment, update_payment_status


class PaymentApiTests(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.user = make_user()
        owner = buyer_of(self.user)
        self.order = make_order(owner)
        select_pickup(self.order.pk, owner, make_point().id, local_time(16, 0))

    def test_create_then_operator_completes_cash_payment(self):
        self.client.force_authenticate(self.user)

        res = self.client.post("/api/payments/", {"order_id": self.order.pk, "method": "CASH"}, format="json")
        self.assertEqual(res.status_code, 201)
        self.assertEqual(res.data["payment"]["status"], "PENDING")
        self.assertEqual(res.data["order"]["status"], "PROCESSING")

        res = self.client.post("/api/payments/", {"order_id": self.order.pk, "method": "CASH"}, format="json")
        self.assertEqual(res.status_code, 409)
        self.assertEqual(res.data["error"]["code"], "payment_already_exists")

        res = self.client.get(f"/api/payments/order/{self.order.pk}/")
        self.assertEqual(res.status_code, 200)

        operator = APIClient()
        operator.force_authenticate(make_staff())
        res = operator.post(
            f"/api/admin/payments/order/{self.order.pk}/status/",
            {"status": "COMPLETED"},
            format="json",
        )
        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.data["order"]["status"], "PAYED")
        self.assertEqual(res.data["order"]["bonus_earned"], "1.00")

    def test_payment_for_foreign_order_is_not_found(self):
        self.client.force_authenticate(make_user("stranger"))

        res = self.client.post("/api/payments/", {"order_id": self.order.pk, "method": "CASH"}, format="json")

        self.assertEqual(res.status_code, 404)
        self.assertEqual(res.data["error"]["code"], "order_not_found")


class PaymentReadApiTests(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.operator = APIClient()
        self.operator.force_authenticate(make_staff())
        point = make_point()

        self.user = make_user()
        owner = buyer_of(self.user)
        self.order = make_order(owner)
        select_pickup(self.order.pk, owner, point.id, local_time(15, 0))
        self.card_payment = create_payment(self.order.pk, owner, Payment.METHOD_ROBOKASSA)

        other = buyer_of(make_user("other"))
        self.other_order = make_order(other, make_product(sku="SKU-2"))
        select_pickup(self.other_order.pk, other, point.id, local_time(15, 0))
        self.cash_payment = create_payment(self.other_order.pk, other, Payment.METHOD_CASH)
        update_payment_status(self.other_order.pk, Payment.STATUS_COMPLETED)

    def test_buyer_lists_only_own_payments(self):
        self.client.force_authenticate(self.user)

        res = self.client.get("/api/payments/")

        self.assertEqual(res.status_code, 200)
        self.assertEqual(len(res.data), 1)
        self.assertEqual(res.data[0]["reference"], self.card_payment.reference)
        self.assertEqual(res.data[0]["order_status"], "PROCESSING")
        self.assertEqual(res.data[0]["order_total"], "100.00")

    def test_payment_list_needs_an_owner(self):
        res = self.client.get("/api/payments/")

        self.assertEqual(res.status_code, 401)
        self.assertEqual(res.data["error"]["code"], "owner_required")

    def test_operator_lists_payments_with_filters(self):
        res = self.operator.get("/api/admin/payments/")
        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.data["count"], 2)

        res = self.operator.get("/api/admin/payments/", {"method": "CASH"})
        self.assertEqual(res.data["count"], 1)
        self.assertEqual(res.data["results"][0]["reference"], self.cash_payment.reference)

        res = self.operator.get("/api/admin/payments/", {"status": "PENDING"})
        self.assertEqual(res.data["count"], 1)
        self.assertEqual(res.data["results"][0]["reference"], self.card_payment.reference)

    def test_operator_payment_detail(self):
        res = self.operator.get(f"/api/admin/payments/{self.cash_payment.pk}/")

        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.data["status"], "COMPLETED")
        self.assertEqual(res.data["order"]["id"], self.other_order.pk)
        self.assertEqual(res.data["order"]["status"], "PAYED")

    def test_unknown_payment_is_not_found(self):
        res = self.operator.get(f"/api/admin/payments/{uuid.uuid4()}/")

        self.assertEqual(res.status_code, 404)
        self.assertEqual(res.data["error"]["code"], "payment_not_found")

    def test_buyers_cannot_use_payment_admin(self):
        self.client.force_authenticate(self.user)

        self.assertEqual(self.client.get("/api/admin/payments/").status_code, 403)
        self.assertEqual(self.client.get(f"/api/admin/payments/{self.card_payment.pk}/").status_code, 403)
