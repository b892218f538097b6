# payments/views/admin.py

"""
OPERATOR PAYMENT VIEWS (staff only)

- GET   /api/admin/payments/                          (?status=&method=)
- GET   /api/admin/payments/<uuid>/
- POST  /api/admin/payments/order/<order_id>/status/   COMPLETED (cash) / REFUNDED
"""

from __future__ import annotations

from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework.generics import ListAPIView
from rest_framework.permissions import IsAdminUser
from rest_framework.response import Response
from rest_framework.views import APIView

from common.exceptions import ShopError
from common.responses import shop_error_response
from payments.serializers import (
    AdminPaymentDetailSerializer,
    PaymentListSerializer,
    PaymentMutationResponseSerializer,
    UpdatePaymentStatusInputSerializer,
)
from payments.services.payment_service import get_payment, list_payments, update_payment_status
from payments.views.common import payment_mutation_response


class AdminPaymentListView(ListAPIView):
    permission_classes = [IsAdminUser]
    serializer_class = PaymentListSerializer
    filterset_fields = ["status", "method"]

    def get_queryset(self):
        return list_payments()

    @extend_schema(tags=["Admin: Payments"], description="All payments (filterable, paginated)")
    def get(self, request, *args, **kwargs):
        return super().get(request, *args, **kwargs)


class AdminPaymentDetailView(APIView):
    permission_classes = [IsAdminUser]
    serializer_class = AdminPaymentDetailSerializer

    @extend_schema(
        tags=["Admin: Payments"],
        responses={
            200: AdminPaymentDetailSerializer,
            404: OpenApiResponse(description="Payment not found"),
        },
    )
    def get(self, request, payment_id):
        try:
            payment = get_payment(payment_id)
        except ShopError as exc:
            return shop_error_response(exc)
        return Response(AdminPaymentDetailSerializer(payment).data)


class AdminPaymentStatusView(APIView):
    """
    Operator payment updates:
    - COMPLETED: cash payments only (gateway payments complete via webhook)
    - REFUNDED:  completed payments only
    """

    permission_classes = [IsAdminUser]
    serializer_class = PaymentMutationResponseSerializer

    @extend_schema(
        tags=["Admin: Payments"],
        request=UpdatePaymentStatusInputSerializer,
        responses={
            200: PaymentMutationResponseSerializer,
            400: OpenApiResponse(description="Not allowed for this payment"),
            404: OpenApiResponse(description="Order or payment not found"),
        },
        description="Complete (cash) or refund an order's payment",
    )
    def post(self, request, order_id):
        s = UpdatePaymentStatusInputSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        target = s.validated_data["status"]

        try:
            payment = update_payment_status(order_id, target)
        except ShopError as exc:
            return shop_error_response(exc)

        return payment_mutation_response(payment, f"Payment marked {target}.")
