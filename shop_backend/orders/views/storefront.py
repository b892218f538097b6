# orders/views/storefront.py

"""
STOREFRONT ORDER VIEWS

Caller = buyer (JWT) or guest (X-Guest-Session). Every lookup is scoped
to that owner; foreign orders are reported as not found.

- POST   /api/orders/init/
- GET    /api/orders/
- GET    /api/orders/<id>/
- POST   /api/orders/<id>/pickup/
- POST   /api/orders/<id>/coupon/      DELETE /api/orders/<id>/coupon/
- POST   /api/orders/<id>/finalize/
"""

from __future__ import annotations

from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from common.exceptions import ShopError
from common.responses import shop_error_response
from common.throttling import PublicPollThrottle, PublicWriteThrottle
from customers.services.owner import resolve_owner
from orders.serializers import (
    ApplyCouponInputSerializer,
    FinalizeOrderInputSerializer,
    OrderMutationResponseSerializer,
    OrderSerializer,
    SelectPickupInputSerializer,
)
from orders.services.order_lifecycle import (
    apply_coupon,
    finalize_order,
    get_order,
    init_order,
    list_orders,
    remove_coupon,
    select_pickup,
)
from orders.views.common import order_mutation_response, order_projection

_ERRORS = {
    400: OpenApiResponse(description="Validation / invalid state / unavailable"),
    401: OpenApiResponse(description="No buyer or guest session"),
    404: OpenApiResponse(description="Order not found"),
    409: OpenApiResponse(description="Conflict"),
}


class OrderInitView(APIView):
    permission_classes = [AllowAny]
    throttle_classes = [PublicWriteThrottle]
    serializer_class = OrderMutationResponseSerializer

    @extend_schema(
        tags=["Orders"],
        request=None,
        responses={201: OrderMutationResponseSerializer, **_ERRORS},
        description="Convert the caller's cart into a PENDING order",
    )
    def post(self, request):
        try:
            owner = resolve_owner(request)
            order = init_order(owner)
        except ShopError as exc:
            return shop_error_response(exc)

        return order_mutation_response(
            order.pk,
            "Order created. Choose a pickup time to continue.",
            http_status=status.HTTP_201_CREATED,
        )


class OrderListView(APIView):
    permission_classes = [AllowAny]
    throttle_classes = [PublicPollThrottle]
    serializer_class = OrderSerializer

    @extend_schema(
        tags=["Orders"],
        responses={200: OrderSerializer(many=True), 401: _ERRORS[401]},
        description="The caller's orders, newest first",
    )
    def get(self, request):
        try:
            owner = resolve_owner(request)
        except ShopError as exc:
            return shop_error_response(exc)

        return Response(OrderSerializer(list_orders(owner), many=True).data)


class OrderDetailView(APIView):
    permission_classes = [AllowAny]
    throttle_classes = [PublicPollThrottle]
    serializer_class = OrderSerializer

    @extend_schema(
        tags=["Orders"],
        responses={200: OrderSerializer, 401: _ERRORS[401], 404: _ERRORS[404]},
        description="One of the caller's orders (full projection)",
    )
    def get(self, request, order_id):
        try:
            owner = resolve_owner(request)
            order = get_order(order_id, owner)
        except ShopError as exc:
            return shop_error_response(exc)

        return Response(order_projection(order))


class OrderPickupView(APIView):
    permission_classes = [AllowAny]
    throttle_classes = [PublicWriteThrottle]
    serializer_class = OrderMutationResponseSerializer

    @extend_schema(
        tags=["Orders"],
        request=SelectPickupInputSerializer,
        responses={200: OrderMutationResponseSerializer, **_ERRORS},
        description="Reserve a pickup slot (replaces any slot the order already holds)",
    )
    def post(self, request, order_id):
        s = SelectPickupInputSerializer(data=request.data)
        s.is_valid(raise_exception=True)

        try:
            owner = resolve_owner(request)
            select_pickup(
                order_id,
                owner,
                s.validated_data["point_id"],
                s.validated_data["pickup_time"],
            )
        except ShopError as exc:
            return shop_error_response(exc)

        return order_mutation_response(order_id, "Pickup time reserved.")


class OrderCouponView(APIView):
    permission_classes = [AllowAny]
    throttle_classes = [PublicWriteThrottle]
    serializer_class = OrderMutationResponseSerializer

    @extend_schema(
        tags=["Orders"],
        request=ApplyCouponInputSerializer,
        responses={200: OrderMutationResponseSerializer, **_ERRORS},
        description="Apply a coupon (one per order)",
    )
    def post(self, request, order_id):
        s = ApplyCouponInputSerializer(data=request.data)
        s.is_valid(raise_exception=True)

        try:
            owner = resolve_owner(request)
            apply_coupon(order_id, s.validated_data["code"], owner=owner)
        except ShopError as exc:
            return shop_error_response(exc)

        return order_mutation_response(order_id, "Coupon applied.")

    @extend_schema(
        tags=["Orders"],
        request=None,
        responses={200: OrderMutationResponseSerializer, **_ERRORS},
        description="Remove the applied coupon",
    )
    def delete(self, request, order_id):
        try:
            owner = resolve_owner(request)
            remove_coupon(order_id, owner=owner)
        except ShopError as exc:
            return shop_error_response(exc)

        return order_mutation_response(order_id, "Coupon removed.")


class OrderFinalizeView(APIView):
    permission_classes = [AllowAny]
    throttle_classes = [PublicWriteThrottle]
    serializer_class = OrderMutationResponseSerializer

    @extend_schema(
        tags=["Orders"],
        request=FinalizeOrderInputSerializer,
        responses={200: OrderMutationResponseSerializer, **_ERRORS},
        description="Fix delivery method, contact details and payment method (order stays PENDING)",
    )
    def post(self, request, order_id):
        s = FinalizeOrderInputSerializer(data=request.data)
        s.is_valid(raise_exception=True)

        try:
            owner = resolve_owner(request)
            finalize_order(order_id, owner, **s.validated_data)
        except ShopError as exc:
            return shop_error_response(exc)

        return order_mutation_response(order_id, "Order details saved. Proceed to payment.")
