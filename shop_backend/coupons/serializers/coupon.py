# coupons/serializers/coupon.py

"""
COUPON SERIALIZERS

Write serializers only shape input; business validation
(window, percentage cap, duplicate code) lives in the coupon ledger.
"""

from rest_framework import serializers

from coupons.models import Coupon


class CouponSerializer(serializers.ModelSerializer):
    class Meta:
        model = Coupon
        fields = [
            "id",
            "code",
            "coupon_type",
            "value",
            "valid_from",
            "valid_to",
            "usage_limit",
            "usage_count",
            "is_active",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class CouponWriteSerializer(serializers.Serializer):
    code = serializers.CharField(max_length=64)
    coupon_type = serializers.ChoiceField(choices=Coupon.TYPE_CHOICES)
    value = serializers.DecimalField(max_digits=12, decimal_places=2)
    valid_from = serializers.DateTimeField()
    valid_to = serializers.DateTimeField()
    usage_limit = serializers.IntegerField(min_value=0, default=0)
    is_active = serializers.BooleanField(default=True)

    def validate_code(self, value):
        value = Coupon.normalize(value)
        if not value:
            raise serializers.ValidationError("Code is required.")
        return value


class CouponValidateInputSerializer(serializers.Serializer):
    code = serializers.CharField(max_length=64)
    subtotal = serializers.DecimalField(
        max_digits=14,
        decimal_places=2,
        min_value=0,
        required=False,
        help_text="Optional: preview the discount for this subtotal.",
    )


class _CouponBriefSerializer(serializers.Serializer):
    id = serializers.UUIDField()
    code = serializers.CharField()
    coupon_type = serializers.CharField()
    value = serializers.DecimalField(max_digits=12, decimal_places=2)


class CouponValidateResponseSerializer(serializers.Serializer):
    valid = serializers.BooleanField()
    coupon = _CouponBriefSerializer()
    discount_amount = serializers.DecimalField(max_digits=14, decimal_places=2, required=False)
    total_amount = serializers.DecimalField(max_digits=14, decimal_places=2, required=False)
