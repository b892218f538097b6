# common/throttling.py

from __future__ import annotations

from rest_framework.throttling import AnonRateThrottle


class PublicWriteThrottle(AnonRateThrottle):
    """
    For storefront write endpoints used by guests (cart, checkout steps).
    Uses REST_FRAMEWORK['DEFAULT_THROTTLE_RATES']['public_write'].
    """

    scope = "public_write"


class PublicPollThrottle(AnonRateThrottle):
    """
    For storefront polling endpoints (order status, slot availability).
    Uses REST_FRAMEWORK['DEFAULT_THROTTLE_RATES']['public_poll'].
    """

    scope = "public_poll"


class WebhookThrottle(AnonRateThrottle):
    scope = "webhook"
