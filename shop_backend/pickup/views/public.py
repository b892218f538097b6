# pickup/views/public.py

from __future__ import annotations

from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.generics import ListAPIView
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from common.exceptions import ShopError
from common.responses import shop_error_response
from common.throttling import PublicPollThrottle
from pickup.models import PickupPoint
from pickup.serializers import (
    PickupPointSerializer,
    SlotAvailabilityQuerySerializer,
    SlotAvailabilitySerializer,
)
from pickup.services.slot_allocator import available_slots


class PickupPointListView(ListAPIView):
    """
    Active pickup points.
    """

    permission_classes = [AllowAny]
    throttle_classes = [PublicPollThrottle]
    serializer_class = PickupPointSerializer
    pagination_class = None
    queryset = PickupPoint.objects.filter(is_active=True).order_by("name")

    @extend_schema(tags=["Pickup"], description="List active pickup points")
    def get(self, request, *args, **kwargs):
        return super().get(request, *args, **kwargs)


class PickupSlotAvailabilityView(APIView):
    """
    Booked hourly buckets for a pickup point with their remaining capacity.
    Buckets not listed have never been booked and are fully available.
    """

    permission_classes = [AllowAny]
    throttle_classes = [PublicPollThrottle]
    serializer_class = SlotAvailabilitySerializer

    @extend_schema(
        tags=["Pickup"],
        parameters=[SlotAvailabilityQuerySerializer],
        responses={
            200: SlotAvailabilitySerializer(many=True),
            404: OpenApiResponse(description="Pickup point not found"),
        },
        description="Slot availability for a pickup point (optional start/end filter)",
    )
    def get(self, request, point_id):
        q = SlotAvailabilityQuerySerializer(data=request.query_params)
        q.is_valid(raise_exception=True)

        try:
            rows = available_slots(
                point_id,
                start=q.validated_data.get("start"),
                end=q.validated_data.get("end"),
            )
        except ShopError as exc:
            return shop_error_response(exc)

        return Response(SlotAvailabilitySerializer(rows, many=True).data, status=status.HTTP_200_OK)
