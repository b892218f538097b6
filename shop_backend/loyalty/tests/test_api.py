# loyalty/tests/test_api.py

from __future__ import annotations

from decimal import Decimal

from django.test import TestCase
from rest_framework.test import APIClient

from common.tests.factories import buyer_of, make_order, make_user
from loyalty.services.loyalty_service import accrue


class LoyaltyApiTests(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.user = make_user()
        self.client.force_authenticate(self.user)

    def test_info_history_and_preview(self):
        order = make_order(buyer_of(self.user))
        accrue(self.user, order, Decimal("1000"))

        res = self.client.get("/api/loyalty/")
        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.data["balance"], "10.00")
        self.assertEqual(res.data["tier"]["name"], "Standard")

        res = self.client.get("/api/loyalty/history/")
        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.data["count"], 1)
        self.assertEqual(res.data["results"][0]["order_id"], order.pk)

        res = self.client.get("/api/loyalty/preview/", {"total": "5000"})
        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.data["cashback_amount"], "50.00")

    def test_preview_requires_total(self):
        res = self.client.get("/api/loyalty/preview/")
        self.assertEqual(res.status_code, 400)

    def test_guests_have_no_loyalty(self):
        res = APIClient().get("/api/loyalty/")
        self.assertEqual(res.status_code, 401)
