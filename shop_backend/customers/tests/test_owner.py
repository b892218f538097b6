# customers/tests/test_owner.py

from __future__ import annotations

from django.test import RequestFactory, TestCase
from rest_framework.test import APIClient

from common.exceptions import OwnerRequired
from common.tests.factories import make_guest, make_user
from customers.models import GuestSession
from customers.services.owner import Buyer, Guest, owner_of, resolve_guest, resolve_owner


class OwnerResolutionTests(TestCase):
    def setUp(self):
        self.factory = RequestFactory()

    def test_authenticated_user_wins(self):
        user = make_user()
        session = make_guest()
        request = self.factory.get("/", HTTP_X_GUEST_SESSION=str(session.id))
        request.user = user

        self.assertEqual(resolve_owner(request), Buyer(user_id=user.pk))

    def test_guest_header_resolves_to_guest(self):
        session = make_guest()
        request = self.factory.get("/", HTTP_X_GUEST_SESSION=str(session.id))

        owner = resolve_owner(request)

        self.assertEqual(owner, Guest(session_id=session.id))
        self.assertEqual(owner.lookup(), {"guest_session_id": session.id})
        self.assertEqual(owner.create_kwargs()["buyer_id"], None)

    def test_missing_owner_rejected(self):
        with self.assertRaises(OwnerRequired):
            resolve_owner(self.factory.get("/"))

    def test_inactive_or_malformed_session_rejected(self):
        closed = GuestSession.objects.create(is_active=False)

        for raw in (str(closed.id), "not-a-uuid"):
            with self.subTest(raw=raw):
                with self.assertRaises(OwnerRequired):
                    resolve_guest(raw)

    def test_owner_of_persisted_row(self):
        user = make_user()

        class Row:
            buyer_id = user.pk
            guest_session_id = None

        self.assertEqual(owner_of(Row()), Buyer(user_id=user.pk))
        self.assertFalse(Guest(session_id=make_guest().id).is_buyer)


class GuestSessionApiTests(TestCase):
    def test_start_guest_session(self):
        res = APIClient().post("/api/guest/session/")

        self.assertEqual(res.status_code, 201)
        self.assertTrue(GuestSession.objects.filter(id=res.data["id"], is_active=True).exists())
