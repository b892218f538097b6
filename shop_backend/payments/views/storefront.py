# payments/views/storefront.py

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
from payments.serializers import (
    CreatePaymentInputSerializer,
    PaymentListSerializer,
    PaymentMutationResponseSerializer,
    PaymentSerializer,
)
from payments.services.payment_service import create_payment, get_payment_for_order, list_payments
from payments.views.common import payment_mutation_response


class PaymentListCreateView(APIView):
    """
    GET:  the caller's payments, newest first
    POST: create the payment record for a pending order (order -> PROCESSING)
    """

    permission_classes = [AllowAny]
    serializer_class = PaymentMutationResponseSerializer

    def get_throttles(self):
        if self.request.method == "GET":
            return [PublicPollThrottle()]
        return [PublicWriteThrottle()]

    @extend_schema(
        tags=["Payments"],
        responses={
            200: PaymentListSerializer(many=True),
            401: OpenApiResponse(description="No buyer or guest session"),
        },
        description="The caller's payments, newest first",
    )
    def get(self, request):
        try:
            owner = resolve_owner(request)
        except ShopError as exc:
            return shop_error_response(exc)

        return Response(PaymentListSerializer(list_payments(owner), many=True).data)

    @extend_schema(
        tags=["Payments"],
        request=CreatePaymentInputSerializer,
        responses={
            201: PaymentMutationResponseSerializer,
            400: OpenApiResponse(description="Order not pending / pickup not selected"),
            404: OpenApiResponse(description="Order not found"),
            409: OpenApiResponse(description="Payment already exists"),
        },
        description="Create a payment for an order",
    )
    def post(self, request):
        s = CreatePaymentInputSerializer(data=request.data)
        s.is_valid(raise_exception=True)

        try:
            owner = resolve_owner(request)
            payment = create_payment(
                s.validated_data["order_id"],
                owner,
                s.validated_data["method"],
            )
        except ShopError as exc:
            return shop_error_response(exc)

        return payment_mutation_response(
            payment,
            "Payment created. Order is now processing.",
            http_status=status.HTTP_201_CREATED,
        )


class PaymentForOrderView(APIView):
    permission_classes = [AllowAny]
    throttle_classes = [PublicPollThrottle]
    serializer_class = PaymentSerializer

    @extend_schema(
        tags=["Payments"],
        responses={200: PaymentSerializer, 404: OpenApiResponse(description="Order or payment not found")},
        description="Payment of one of the caller's orders",
    )
    def get(self, request, order_id):
        try:
            owner = resolve_owner(request)
            payment = get_payment_for_order(order_id, owner)
        except ShopError as exc:
            return shop_error_response(exc)

        return Response(PaymentSerializer(payment).data)
