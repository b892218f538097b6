# cart/tests/test_api.py

from __future__ import annotations

from django.test import TestCase
from rest_framework.test import APIClient

from common.tests.factories import make_guest, make_product, make_user


class CartApiTests(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.product = make_product(unit_price="99.90")

    def test_guest_cart_roundtrip(self):
        session = make_guest()
        headers = {"HTTP_X_GUEST_SESSION": str(session.id)}

        res = self.client.post(
            "/api/cart/items/",
            {"product_id": str(self.product.id), "quantity": 2},
            format="json",
            **headers,
        )
        self.assertEqual(res.status_code, 201)
        self.assertEqual(res.data["item_count"], 2)
        self.assertEqual(res.data["subtotal_amount"], "199.80")

        line_id = res.data["items"][0]["id"]
        res = self.client.patch(f"/api/cart/items/{line_id}/", {"quantity": 1}, format="json", **headers)
        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.data["subtotal_amount"], "99.90")

        res = self.client.delete(f"/api/cart/items/{line_id}/", **headers)
        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.data["items"], [])

    def test_authenticated_buyer_cart(self):
        self.client.force_authenticate(make_user())

        res = self.client.post("/api/cart/items/", {"product_id": str(self.product.id)}, format="json")
        self.assertEqual(res.status_code, 201)

        res = self.client.get("/api/cart/")
        self.assertEqual(res.data["item_count"], 1)

    def test_no_owner_is_rejected(self):
        res = self.client.get("/api/cart/")

        self.assertEqual(res.status_code, 401)
        self.assertEqual(res.data["error"]["code"], "owner_required")

    def test_unknown_guest_session_is_rejected(self):
        res = self.client.get("/api/cart/", HTTP_X_GUEST_SESSION="00000000-0000-0000-0000-000000000000")

        self.assertEqual(res.status_code, 401)

    def test_inactive_product_error_envelope(self):
        self.client.force_authenticate(make_user())
        gone = make_product(sku="SKU-GONE", is_active=False)

        res = self.client.post("/api/cart/items/", {"product_id": str(gone.id)}, format="json")

        self.assertEqual(res.status_code, 400)
        self.assertEqual(res.data["error"]["kind"], "unavailable")
