# common/tests/test_cache.py

from __future__ import annotations

from unittest import mock

from django.core.cache import cache
from django.test import TestCase, override_settings

from common.cache import get_or_build, invalidate_order, order_projection_key

LOCMEM = {"default": {"BACKEND": "django.core.cache.backends.locmem.LocMemCache", "LOCATION": "cache-tests"}}


@override_settings(CACHES=LOCMEM)
class ProjectionCacheTests(TestCase):
    """
    GUARANTEES:
    - projections are served from cache until invalidated
    - invalidation only happens after commit
    - cache failures never propagate
    """

    def setUp(self):
        cache.clear()

    def test_builder_runs_once_while_cached(self):
        builder = mock.Mock(return_value={"id": 1})

        first = get_or_build("k", builder)
        second = get_or_build("k", builder)

        self.assertEqual(first, second)
        builder.assert_called_once()

    def test_invalidation_runs_on_commit(self):
        key = order_projection_key(42)
        cache.set(key, {"stale": True})

        with self.captureOnCommitCallbacks(execute=False) as callbacks:
            invalidate_order(42)

        self.assertEqual(cache.get(key), {"stale": True})
        self.assertEqual(len(callbacks), 1)

        callbacks[0]()
        self.assertIsNone(cache.get(key))

    def test_cache_read_failure_falls_back_to_builder(self):
        with mock.patch("common.cache.cache.get", side_effect=RuntimeError("down")):
            value = get_or_build("k", lambda: {"fresh": True})

        self.assertEqual(value, {"fresh": True})

    def test_invalidation_failure_is_swallowed(self):
        with mock.patch("common.cache.cache.delete_many", side_effect=RuntimeError("down")):
            with self.captureOnCommitCallbacks(execute=True):
                invalidate_order(1)
