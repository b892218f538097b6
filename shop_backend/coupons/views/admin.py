# coupons/views/admin.py

"""
COUPON OPERATOR VIEWS (staff only)

- GET/POST    /api/admin/coupons/
- GET         /api/admin/coupons/active/
- GET/PATCH/DELETE /api/admin/coupons/<id>/
"""

from __future__ import annotations

from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.generics import ListAPIView
from rest_framework.permissions import IsAdminUser
from rest_framework.response import Response
from rest_framework.views import APIView

from common.exceptions import ShopError
from common.responses import shop_error_response
from coupons.models import Coupon
from coupons.serializers import CouponSerializer, CouponWriteSerializer
from coupons.services.coupon_ledger import (
    create_coupon,
    delete_coupon,
    get_coupon,
    list_active_coupons,
    update_coupon,
)


class CouponAdminListCreateView(ListAPIView):
    permission_classes = [IsAdminUser]
    serializer_class = CouponSerializer
    queryset = Coupon.objects.all().order_by("-created_at")
    filterset_fields = ["is_active", "coupon_type"]

    @extend_schema(tags=["Admin: Coupons"], description="List coupons (filter by is_active / coupon_type)")
    def get(self, request, *args, **kwargs):
        return super().get(request, *args, **kwargs)

    @extend_schema(
        tags=["Admin: Coupons"],
        request=CouponWriteSerializer,
        responses={
            201: CouponSerializer,
            400: OpenApiResponse(description="Invalid window / value"),
            409: OpenApiResponse(description="Code already exists"),
        },
        description="Create a coupon",
    )
    def post(self, request):
        s = CouponWriteSerializer(data=request.data)
        s.is_valid(raise_exception=True)

        try:
            coupon = create_coupon(**s.validated_data)
        except ShopError as exc:
            return shop_error_response(exc)

        return Response(CouponSerializer(coupon).data, status=status.HTTP_201_CREATED)


class ActiveCouponListView(APIView):
    permission_classes = [IsAdminUser]
    serializer_class = CouponSerializer

    @extend_schema(
        tags=["Admin: Coupons"],
        responses={200: CouponSerializer(many=True)},
        description="Coupons usable right now (active, in window, not exhausted)",
    )
    def get(self, request):
        return Response(CouponSerializer(list_active_coupons(), many=True).data)


class CouponAdminDetailView(APIView):
    permission_classes = [IsAdminUser]
    serializer_class = CouponSerializer

    @extend_schema(tags=["Admin: Coupons"], responses={200: CouponSerializer})
    def get(self, request, coupon_id):
        try:
            coupon = get_coupon(coupon_id)
        except ShopError as exc:
            return shop_error_response(exc)
        return Response(CouponSerializer(coupon).data)

    @extend_schema(
        tags=["Admin: Coupons"],
        request=CouponWriteSerializer(partial=True),
        responses={200: CouponSerializer},
        description="Partially update a coupon",
    )
    def patch(self, request, coupon_id):
        s = CouponWriteSerializer(data=request.data, partial=True)
        s.is_valid(raise_exception=True)

        try:
            coupon = update_coupon(coupon_id, **s.validated_data)
        except ShopError as exc:
            return shop_error_response(exc)

        return Response(CouponSerializer(coupon).data)

    @extend_schema(tags=["Admin: Coupons"], responses={204: None})
    def delete(self, request, coupon_id):
        try:
            delete_coupon(coupon_id)
        except ShopError as exc:
            return shop_error_response(exc)
        return Response(status=status.HTTP_204_NO_CONTENT)
