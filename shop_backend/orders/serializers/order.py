# orders/serializers/order.py

"""
ORDER PROJECTION SERIALIZERS

The full order projection returned by every order endpoint:
lines, totals, pickup point/slot, coupon and payment.
"""

from rest_framework import serializers

from orders.models import Order, OrderLine


class OrderLineSerializer(serializers.ModelSerializer):
    product_id = serializers.UUIDField(read_only=True)
    product_name = serializers.CharField(source="product.name", read_only=True)
    sku = serializers.CharField(source="product.sku", read_only=True)

    class Meta:
        model = OrderLine
        fields = ["id", "product_id", "product_name", "sku", "quantity", "unit_price", "line_total"]
        read_only_fields = fields


class _PickupPointBriefSerializer(serializers.Serializer):
    id = serializers.UUIDField()
    name = serializers.CharField()
    address = serializers.CharField()


class _PickupSlotBriefSerializer(serializers.Serializer):
    id = serializers.UUIDField()
    starts_at = serializers.DateTimeField()
    ends_at = serializers.DateTimeField()


class _CouponBriefSerializer(serializers.Serializer):
    id = serializers.UUIDField()
    code = serializers.CharField()
    coupon_type = serializers.CharField()
    value = serializers.DecimalField(max_digits=12, decimal_places=2)


class _PaymentBriefSerializer(serializers.Serializer):
    id = serializers.UUIDField()
    reference = serializers.CharField()
    method = serializers.CharField()
    status = serializers.CharField()
    amount = serializers.DecimalField(max_digits=14, decimal_places=2)
    completed_at = serializers.DateTimeField(allow_null=True)


class OrderSerializer(serializers.ModelSerializer):
    lines = OrderLineSerializer(many=True, read_only=True)
    pickup_point = _PickupPointBriefSerializer(read_only=True, allow_null=True)
    pickup_slot = _PickupSlotBriefSerializer(read_only=True, allow_null=True)
    coupon = _CouponBriefSerializer(read_only=True, allow_null=True)
    payment = serializers.SerializerMethodField()
    owner_type = serializers.SerializerMethodField()

    class Meta:
        model = Order
        fields = [
            "id",
            "status",
            "owner_type",
            "lines",
            "subtotal_amount",
            "discount_amount",
            "total_amount",
            "delivery_method",
            "pickup_point",
            "pickup_slot",
            "delivery_address",
            "coupon",
            "customer_name",
            "customer_email",
            "customer_phone",
            "payment_method",
            "pay_later",
            "payment",
            "bonus_earned",
            "created_at",
            "updated_at",
            "paid_at",
            "cancelled_at",
        ]
        read_only_fields = fields

    def get_owner_type(self, obj) -> str:
        return "guest" if obj.is_guest else "buyer"

    def get_payment(self, obj) -> dict | None:
        payment = getattr(obj, "payment", None)
        if payment is None:
            return None
        return _PaymentBriefSerializer(payment).data


class OrderMutationResponseSerializer(serializers.Serializer):
    message = serializers.CharField()
    order = OrderSerializer()
