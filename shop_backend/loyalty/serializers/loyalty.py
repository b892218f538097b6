# loyalty/serializers/loyalty.py

from decimal import Decimal

from rest_framework import serializers

from loyalty.models import BonusEntry


class BonusEntrySerializer(serializers.ModelSerializer):
    order_id = serializers.IntegerField(read_only=True, allow_null=True)
    order_total = serializers.SerializerMethodField()

    class Meta:
        model = BonusEntry
        fields = ["id", "amount", "entry_type", "description", "order_id", "order_total", "created_at"]
        read_only_fields = fields

    def get_order_total(self, obj):
        if obj.order_id is None:
            return None
        return str(obj.order.total_amount)


class TierSerializer(serializers.Serializer):
    name = serializers.CharField()
    cashback_rate = serializers.DecimalField(max_digits=6, decimal_places=4)
    cashback_percent = serializers.CharField()


class NextTierSerializer(TierSerializer):
    min_spent = serializers.DecimalField(max_digits=16, decimal_places=2)
    remaining = serializers.DecimalField(max_digits=16, decimal_places=2)


class LoyaltyInfoSerializer(serializers.Serializer):
    balance = serializers.DecimalField(max_digits=14, decimal_places=2)
    total_spent = serializers.DecimalField(max_digits=16, decimal_places=2)
    tier = TierSerializer()
    next_tier = NextTierSerializer(allow_null=True)


class CashbackPreviewQuerySerializer(serializers.Serializer):
    total = serializers.DecimalField(max_digits=14, decimal_places=2, min_value=Decimal("0"))


class CashbackPreviewSerializer(serializers.Serializer):
    order_total = serializers.DecimalField(max_digits=14, decimal_places=2)
    cashback_amount = serializers.DecimalField(max_digits=14, decimal_places=2)
    cashback_rate = serializers.DecimalField(max_digits=6, decimal_places=4)
    cashback_percent = serializers.CharField()
    tier_name = serializers.CharField()
