# payments/views/common.py

from __future__ import annotations

from rest_framework import status
from rest_framework.response import Response

from orders.serializers import OrderSerializer
from orders.services.order_queries import get_order
from payments.serializers import PaymentSerializer


def payment_mutation_response(payment, message: str, *, http_status=status.HTTP_200_OK):
    payment.refresh_from_db()
    order = get_order(payment.order_id)
    return Response(
        {
            "message": message,
            "payment": PaymentSerializer(payment).data,
            "order": OrderSerializer(order).data,
        },
        status=http_status,
    )
