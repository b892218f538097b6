# pickup/tests/test_api.py

from __future__ import annotations

from django.test import TestCase
from rest_framework.test import APIClient

from common.tests.factories import local_time, make_point, make_staff
from pickup.services.slot_allocator import release, reserve


class PickupApiTests(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.point = make_point()
        make_point(name="Closed", is_active=False)

    def test_lists_only_active_points(self):
        res = self.client.get("/api/pickup/points/")

        self.assertEqual(res.status_code, 200)
        self.assertEqual([p["name"] for p in res.data], ["Central"])

    def test_slot_availability(self):
        reserve(self.point.id, local_time(14, 0))

        res = self.client.get(f"/api/pickup/points/{self.point.id}/slots/")

        self.assertEqual(res.status_code, 200)
        self.assertEqual(len(res.data), 1)
        self.assertEqual(res.data[0]["available"], 23)
        self.assertFalse(res.data[0]["is_full"])

    def test_unknown_point_uses_error_envelope(self):
        res = self.client.get("/api/pickup/points/00000000-0000-0000-0000-000000000000/slots/")

        self.assertEqual(res.status_code, 404)
        self.assertEqual(res.data["error"]["code"], "pickup_point_not_found")

    def test_admin_slot_delete_requires_staff(self):
        slot = reserve(self.point.id, local_time(14, 0))
        release(slot)

        res = self.client.delete(f"/api/admin/pickup/slots/{slot.id}/")
        self.assertIn(res.status_code, (401, 403))

        self.client.force_authenticate(make_staff())
        res = self.client.delete(f"/api/admin/pickup/slots/{slot.id}/")
        self.assertEqual(res.status_code, 204)
