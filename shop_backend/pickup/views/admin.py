# pickup/views/admin.py

from __future__ import annotations

from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.permissions import IsAdminUser
from rest_framework.response import Response
from rest_framework.views import APIView

from common.exceptions import ShopError
from common.responses import shop_error_response
from pickup.services.slot_allocator import delete_slot


class PickupSlotAdminDetailView(APIView):
    permission_classes = [IsAdminUser]
    serializer_class = None

    @extend_schema(
        tags=["Admin: Pickup"],
        responses={
            204: None,
            404: OpenApiResponse(description="Slot not found"),
            409: OpenApiResponse(description="Slot referenced by orders"),
        },
        description="Delete a pickup slot that no order references",
    )
    def delete(self, request, slot_id):
        try:
            delete_slot(slot_id)
        except ShopError as exc:
            return shop_error_response(exc)
        return Response(status=status.HTTP_204_NO_CONTENT)
