# orders/views/admin.py

"""
OPERATOR ORDER VIEWS (staff only)

- GET   /api/admin/orders/                  (?status=&delivery_method=&payment_method=)
- GET   /api/admin/orders/<id>/
- POST  /api/admin/orders/<id>/status/      SHIPPED / DELIVERED / CANCELLED
- POST  /api/admin/orders/<id>/finalize/    finalize a pending order on the customer's behalf
"""

from __future__ import annotations

from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework.generics import ListAPIView
from rest_framework.permissions import IsAdminUser
from rest_framework.response import Response
from rest_framework.views import APIView

from common.exceptions import ShopError
from common.responses import shop_error_response
from orders.serializers import (
    FinalizeOrderInputSerializer,
    OrderMutationResponseSerializer,
    OrderSerializer,
    UpdateOrderStatusInputSerializer,
)
from orders.services.order_lifecycle import finalize_order, get_order, update_order_status
from orders.services.order_queries import list_orders
from orders.views.common import order_mutation_response


class AdminOrderListView(ListAPIView):
    permission_classes = [IsAdminUser]
    serializer_class = OrderSerializer
    filterset_fields = ["status", "delivery_method", "payment_method"]

    def get_queryset(self):
        return list_orders()

    @extend_schema(tags=["Admin: Orders"], description="All orders (filterable, paginated)")
    def get(self, request, *args, **kwargs):
        return super().get(request, *args, **kwargs)


class AdminOrderDetailView(APIView):
    permission_classes = [IsAdminUser]
    serializer_class = OrderSerializer

    @extend_schema(tags=["Admin: Orders"], responses={200: OrderSerializer})
    def get(self, request, order_id):
        try:
            order = get_order(order_id)
        except ShopError as exc:
            return shop_error_response(exc)
        return Response(OrderSerializer(order).data)


class AdminOrderStatusView(APIView):
    permission_classes = [IsAdminUser]
    serializer_class = OrderMutationResponseSerializer

    @extend_schema(
        tags=["Admin: Orders"],
        request=UpdateOrderStatusInputSerializer,
        responses={
            200: OrderMutationResponseSerializer,
            400: OpenApiResponse(description="Transition not allowed"),
            404: OpenApiResponse(description="Order not found"),
        },
        description="Move an order forward (SHIPPED / DELIVERED) or cancel it (releases its pickup slot)",
    )
    def post(self, request, order_id):
        s = UpdateOrderStatusInputSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        target = s.validated_data["status"]

        try:
            update_order_status(order_id, target)
        except ShopError as exc:
            return shop_error_response(exc)

        return order_mutation_response(order_id, f"Order status set to {target}.")


class AdminOrderFinalizeView(APIView):
    permission_classes = [IsAdminUser]
    serializer_class = OrderMutationResponseSerializer

    @extend_schema(
        tags=["Admin: Orders"],
        request=FinalizeOrderInputSerializer,
        responses={200: OrderMutationResponseSerializer},
        description="Finalize a pending order without owner scoping",
    )
    def post(self, request, order_id):
        s = FinalizeOrderInputSerializer(data=request.data)
        s.is_valid(raise_exception=True)

        try:
            finalize_order(order_id, None, **s.validated_data)
        except ShopError as exc:
            return shop_error_response(exc)

        return order_mutation_response(order_id, "Order finalized by operator.")
