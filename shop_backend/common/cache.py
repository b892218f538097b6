# common/cache.py

"""
BEST-EFFORT PROJECTION CACHE

Read-heavy projections (full order payloads) are cached in the Django
cache framework and dropped after the mutating transaction commits.

Rules:
- Cache failures never fail a request: they are logged and the
  projection is rebuilt from the database.
- Invalidation runs on commit, so a rolled-back mutation never evicts
  (and a reader never repopulates from uncommitted state).
"""

from __future__ import annotations

import logging
from typing import Any, Callable

from django.conf import settings
from django.core.cache import cache
from django.db import transaction

logger = logging.getLogger(__name__)


def order_projection_key(order_id) -> str:
    return f"orders:projection:{order_id}"


def get_or_build(key: str, builder: Callable[[], Any], *, timeout: int | None = None):
    ttl = timeout if timeout is not None else getattr(settings, "ORDER_CACHE_TTL", 300)

    try:
        cached = cache.get(key)
    except Exception:
        logger.warning("Projection cache read failed", extra={"key": key}, exc_info=True)
        return builder()

    if cached is not None:
        return cached

    value = builder()
    try:
        cache.set(key, value, ttl)
    except Exception:
        logger.warning("Projection cache write failed", extra={"key": key}, exc_info=True)
    return value


def _delete_quietly(keys: tuple[str, ...]) -> None:
    try:
        cache.delete_many(list(keys))
    except Exception:
        logger.warning(
            "Projection cache invalidation failed",
            extra={"keys": list(keys)},
            exc_info=True,
        )


def invalidate_on_commit(*keys: str) -> None:
    if not keys:
        return
    transaction.on_commit(lambda: _delete_quietly(keys))


def invalidate_order(order_id) -> None:
    invalidate_on_commit(order_projection_key(order_id))
