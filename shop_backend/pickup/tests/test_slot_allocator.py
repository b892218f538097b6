# pickup/tests/test_slot_allocator.py

from __future__ import annotations

import threading
from datetime import timedelta
from unittest import skipUnless

from django.db import connection, connections
from django.test import TestCase, TransactionTestCase, override_settings

from common.exceptions import (
    OutsideServiceHours,
    PickupPointNotFound,
    PickupPointUnavailable,
    SlotFull,
    SlotInUse,
)
from common.tests.factories import buyer_of, local_time, make_order, make_point, make_user
from orders.services.order_lifecycle import select_pickup
from pickup.models import PickupSlot
from pickup.services.slot_allocator import (
    available_slots,
    compute_bucket,
    delete_slot,
    release,
    reserve,
)


class ComputeBucketTests(TestCase):
    def setUp(self):
        self.point = make_point()

    def test_bucket_is_the_local_hour(self):
        starts_at, ends_at = compute_bucket(self.point, local_time(14, 20))

        local_start = starts_at.astimezone(self.point.zone)
        self.assertEqual((local_start.hour, local_start.minute), (14, 0))
        self.assertEqual(ends_at - starts_at, timedelta(hours=1))

    def test_naive_instant_is_read_in_point_timezone(self):
        aware = local_time(14, 20)
        naive = aware.replace(tzinfo=None)

        self.assertEqual(compute_bucket(self.point, naive), compute_bucket(self.point, aware))

    def test_outside_service_hours_rejected(self):
        for hour in (9, 21, 23):
            with self.subTest(hour=hour):
                with self.assertRaises(OutsideServiceHours):
                    compute_bucket(self.point, local_time(hour, 0))

    def test_last_service_hour_accepted(self):
        starts_at, _ = compute_bucket(self.point, local_time(20, 59))
        self.assertEqual(starts_at.astimezone(self.point.zone).hour, 20)


class ReserveTests(TestCase):
    """
    GUARANTEES:
    - 0 <= reserved <= 24 for every bucket
    - capacity + reserved == 24
    - the 25th reservation fails with SlotFull and changes nothing
    """

    def setUp(self):
        self.point = make_point()

    def test_scenario_same_hour_shares_one_bucket(self):
        first = reserve(self.point.id, local_time(14, 20))
        self.assertEqual((first.capacity, first.reserved), (23, 1))

        second = reserve(self.point.id, local_time(14, 45))
        self.assertEqual(second.pk, first.pk)
        self.assertEqual((second.capacity, second.reserved), (22, 2))
        self.assertEqual(PickupSlot.objects.count(), 1)

    def test_different_hours_get_different_buckets(self):
        a = reserve(self.point.id, local_time(14, 20))
        b = reserve(self.point.id, local_time(15, 5))

        self.assertNotEqual(a.pk, b.pk)

    def test_twenty_fifth_reservation_is_rejected(self):
        for _ in range(24):
            slot = reserve(self.point.id, local_time(12, 10))

        self.assertEqual((slot.capacity, slot.reserved), (0, 24))
        self.assertTrue(slot.is_full)

        with self.assertRaises(SlotFull):
            reserve(self.point.id, local_time(12, 50))

        slot.refresh_from_db()
        self.assertEqual((slot.capacity, slot.reserved), (0, 24))

    @override_settings(PICKUP_SLOT_CAPACITY=2)
    def test_capacity_comes_from_settings(self):
        reserve(self.point.id, local_time(12, 0))
        reserve(self.point.id, local_time(12, 0))

        with self.assertRaises(SlotFull):
            reserve(self.point.id, local_time(12, 0))

    def test_moving_to_another_bucket_releases_the_old_one(self):
        old = reserve(self.point.id, local_time(14, 20))
        new = reserve(self.point.id, local_time(16, 0), current_slot=old)

        old.refresh_from_db()
        self.assertEqual((old.capacity, old.reserved), (24, 0))
        self.assertEqual((new.capacity, new.reserved), (23, 1))

    def test_reselecting_the_held_bucket_is_a_no_op(self):
        held = reserve(self.point.id, local_time(14, 20))
        again = reserve(self.point.id, local_time(14, 55), current_slot=held)

        self.assertEqual(again.pk, held.pk)
        again.refresh_from_db()
        self.assertEqual(again.reserved, 1)

    def test_full_target_keeps_the_old_reservation(self):
        old = reserve(self.point.id, local_time(14, 20))
        for _ in range(24):
            reserve(self.point.id, local_time(18, 0))

        with self.assertRaises(SlotFull):
            reserve(self.point.id, local_time(18, 30), current_slot=old)

        old.refresh_from_db()
        self.assertEqual(old.reserved, 1)

    def test_inactive_point_rejected(self):
        closed = make_point(name="Closed", is_active=False)

        with self.assertRaises(PickupPointUnavailable):
            reserve(closed.id, local_time(14, 0))

    def test_unknown_point_rejected(self):
        with self.assertRaises(PickupPointNotFound):
            reserve("00000000-0000-0000-0000-000000000000", local_time(14, 0))


class ReleaseTests(TestCase):
    def setUp(self):
        self.point = make_point()

    def test_release_gives_one_unit_back(self):
        slot = reserve(self.point.id, local_time(14, 0))
        reserve(self.point.id, local_time(14, 0))

        self.assertTrue(release(slot))

        slot.refresh_from_db()
        self.assertEqual((slot.capacity, slot.reserved), (23, 1))

    def test_release_on_empty_slot_is_ignored(self):
        slot = reserve(self.point.id, local_time(14, 0))
        release(slot)

        self.assertFalse(release(slot.pk))

        slot.refresh_from_db()
        self.assertEqual((slot.capacity, slot.reserved), (24, 0))

    def test_reserve_release_sequence_keeps_counters_in_range(self):
        held = []
        for step in range(60):
            if step % 3 == 2 and held:
                release(held.pop())
            else:
                try:
                    held.append(reserve(self.point.id, local_time(11, 0)))
                except SlotFull:
                    pass

            slot = PickupSlot.objects.get(point=self.point)
            self.assertGreaterEqual(slot.reserved, 0)
            self.assertLessEqual(slot.reserved, 24)
            self.assertEqual(slot.capacity + slot.reserved, 24)


class SlotAdminTests(TestCase):
    def setUp(self):
        self.point = make_point()

    def test_available_slots_lists_booked_buckets(self):
        reserve(self.point.id, local_time(14, 0))
        reserve(self.point.id, local_time(15, 0))
        reserve(self.point.id, local_time(15, 30))

        rows = available_slots(self.point.id)

        self.assertEqual([r["reserved"] for r in rows], [1, 2])
        self.assertEqual([r["available"] for r in rows], [23, 22])

    def test_slot_held_by_an_order_cannot_be_deleted(self):
        user = make_user()
        order = make_order(buyer_of(user))
        select_pickup(order.pk, buyer_of(user), self.point.id, local_time(14, 0))
        order.refresh_from_db()

        with self.assertRaises(SlotInUse):
            delete_slot(order.pickup_slot_id)

    def test_unused_slot_can_be_deleted(self):
        slot = reserve(self.point.id, local_time(14, 0))
        release(slot)

        delete_slot(slot.pk)

        self.assertFalse(PickupSlot.objects.filter(pk=slot.pk).exists())


@skipUnless(connection.vendor == "postgresql", "row locks need PostgreSQL")
class ConcurrentReserveTests(TransactionTestCase):
    """
    Real concurrent transactions against one empty bucket:
    exactly 24 succeed, the rest fail with SlotFull.
    """

    def test_concurrent_reservations_never_oversell(self):
        point = make_point()
        requested_at = local_time(13, 15)
        results = []
        lock = threading.Lock()
        barrier = threading.Barrier(30)

        def worker():
            try:
                barrier.wait()
                try:
                    reserve(point.id, requested_at)
                    outcome = "ok"
                except SlotFull:
                    outcome = "full"
                with lock:
                    results.append(outcome)
            finally:
                connections.close_all()

        threads = [threading.Thread(target=worker) for _ in range(30)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        self.assertEqual(results.count("ok"), 24)
        self.assertEqual(results.count("full"), 6)

        slot = PickupSlot.objects.get(point=point)
        self.assertEqual((slot.capacity, slot.reserved), (0, 24))
