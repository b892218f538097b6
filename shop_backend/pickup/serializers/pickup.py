# pickup/serializers/pickup.py

from rest_framework import serializers

from pickup.models import PickupPoint, PickupSlot


class PickupPointSerializer(serializers.ModelSerializer):
    class Meta:
        model = PickupPoint
        fields = ["id", "name", "address", "timezone", "is_active"]
        read_only_fields = fields


class PickupSlotSerializer(serializers.ModelSerializer):
    point_id = serializers.UUIDField(read_only=True)
    available = serializers.IntegerField(read_only=True)
    is_full = serializers.BooleanField(read_only=True)

    class Meta:
        model = PickupSlot
        fields = ["id", "point_id", "starts_at", "ends_at", "capacity", "reserved", "available", "is_full"]
        read_only_fields = fields


class SlotAvailabilitySerializer(serializers.Serializer):
    id = serializers.UUIDField()
    starts_at = serializers.DateTimeField()
    ends_at = serializers.DateTimeField()
    capacity = serializers.IntegerField()
    reserved = serializers.IntegerField()
    available = serializers.IntegerField()
    is_full = serializers.BooleanField()


class SlotAvailabilityQuerySerializer(serializers.Serializer):
    """
    For Swagger docs (GET query params).
    """

    start = serializers.DateTimeField(required=False)
    end = serializers.DateTimeField(required=False)

    def validate(self, attrs):
        start, end = attrs.get("start"), attrs.get("end")
        if start and end and start > end:
            raise serializers.ValidationError({"end": "end must not be before start"})
        return attrs
