# backend/settings/test.py
"""
PATH: backend/settings/test.py

TEST SETTINGS

- SQLite unless DATABASE_URL points elsewhere (the slot race test needs Postgres)
- Throttle rates lifted so API suites never hit 429
- Fast password hashing
- Dummy cache (projection cache tests opt into locmem explicitly)
"""

from __future__ import annotations

from .base import *  # noqa: F403
from .base import REST_FRAMEWORK, env

DEBUG = False

DATABASES = {
    "default": env.db("DATABASE_URL", default="sqlite:///:memory:"),
}

CACHES = {
    "default": {
        "BACKEND": "django.core.cache.backends.dummy.DummyCache",
    }
}

PASSWORD_HASHERS = ["django.contrib.auth.hashers.MD5PasswordHasher"]

REST_FRAMEWORK = {
    **REST_FRAMEWORK,
    "DEFAULT_THROTTLE_RATES": {
        scope: "100000/min" for scope in REST_FRAMEWORK["DEFAULT_THROTTLE_RATES"]
    },
}

PAYMENTS = {"GATEWAY": {"SECRET": "test-gateway-secret"}}

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "handlers": {"null": {"class": "logging.NullHandler"}},
    "root": {"handlers": ["null"], "level": "CRITICAL"},
}
