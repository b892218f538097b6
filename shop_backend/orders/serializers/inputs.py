# orders/serializers/inputs.py

"""
ORDER INPUT SERIALIZERS

Shape-only validation. Business rules (pay later, pickup vs delivery
details, status transitions) are enforced by the lifecycle services so
they apply identically to storefront and operator callers.

pickup_time is parsed by hand: an instant without an offset is kept
naive and later read in the pickup point's own timezone.
"""

from django.utils.dateparse import parse_datetime
from rest_framework import serializers

from orders.models import Order


def _parse_instant(value: str):
    try:
        parsed = parse_datetime(str(value).strip())
    except ValueError:
        parsed = None
    if parsed is None:
        raise serializers.ValidationError("Enter a valid ISO 8601 date/time.")
    return parsed


class SelectPickupInputSerializer(serializers.Serializer):
    point_id = serializers.UUIDField()
    pickup_time = serializers.CharField(help_text="ISO 8601 instant, e.g. 2026-03-01T14:20:00+03:00")

    def validate_pickup_time(self, value):
        return _parse_instant(value)


class ApplyCouponInputSerializer(serializers.Serializer):
    code = serializers.CharField(max_length=64)


class FinalizeOrderInputSerializer(serializers.Serializer):
    delivery_method = serializers.ChoiceField(choices=Order.DELIVERY_CHOICES)
    customer_name = serializers.CharField(max_length=255)
    customer_email = serializers.EmailField()
    customer_phone = serializers.CharField(max_length=32)
    payment_method = serializers.ChoiceField(choices=Order.PAYMENT_METHOD_CHOICES)
    pay_later = serializers.BooleanField(default=False)

    point_id = serializers.UUIDField(required=False, allow_null=True)
    pickup_time = serializers.CharField(required=False, allow_null=True, allow_blank=True)
    address = serializers.CharField(required=False, allow_null=True, allow_blank=True)

    def validate_pickup_time(self, value):
        if value in (None, ""):
            return None
        return _parse_instant(value)


class UpdateOrderStatusInputSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=Order.STATUS_CHOICES)
