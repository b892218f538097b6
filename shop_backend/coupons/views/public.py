# coupons/views/public.py

from __future__ import annotations

from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from common.exceptions import ShopError
from common.money import money
from common.responses import shop_error_response
from common.throttling import PublicWriteThrottle
from coupons.serializers import (
    CouponValidateInputSerializer,
    CouponValidateResponseSerializer,
)
from coupons.services.coupon_ledger import compute_discount, validate


class CouponValidateView(APIView):
    permission_classes = [AllowAny]
    throttle_classes = [PublicWriteThrottle]
    serializer_class = CouponValidateResponseSerializer

    @extend_schema(
        tags=["Coupons"],
        request=CouponValidateInputSerializer,
        responses={
            200: CouponValidateResponseSerializer,
            400: OpenApiResponse(description="Coupon inactive / expired / exhausted"),
            404: OpenApiResponse(description="Coupon not found"),
        },
        description="Check a coupon code (optionally preview the discount for a subtotal)",
    )
    def post(self, request):
        s = CouponValidateInputSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        data = s.validated_data

        try:
            coupon = validate(data["code"])
        except ShopError as exc:
            return shop_error_response(exc)

        payload = {
            "valid": True,
            "coupon": {
                "id": coupon.id,
                "code": coupon.code,
                "coupon_type": coupon.coupon_type,
                "value": coupon.value,
            },
        }

        if "subtotal" in data:
            subtotal = money(data["subtotal"])
            discount = compute_discount(coupon, subtotal)
            payload["discount_amount"] = discount
            payload["total_amount"] = money(subtotal - discount)

        return Response(CouponValidateResponseSerializer(payload).data, status=status.HTTP_200_OK)
