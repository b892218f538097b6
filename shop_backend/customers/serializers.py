# customers/serializers.py

from __future__ import annotations

from rest_framework import serializers

from customers.models import GuestSession


class GuestSessionSerializer(serializers.ModelSerializer):
    header = serializers.SerializerMethodField()

    class Meta:
        model = GuestSession
        fields = ["id", "is_active", "created_at", "header"]
        read_only_fields = fields

    def get_header(self, obj) -> str:
        return "X-Guest-Session"
