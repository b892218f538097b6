# orders/views/common.py

from __future__ import annotations

from rest_framework import status
from rest_framework.response import Response

from common.cache import get_or_build, order_projection_key
from orders.serializers import OrderSerializer
from orders.services.order_queries import get_order


def order_projection(order) -> dict:
    return get_or_build(
        order_projection_key(order.pk),
        lambda: dict(OrderSerializer(order).data),
    )


def order_mutation_response(order_id, message: str, *, http_status=status.HTTP_200_OK):
    """
    Re-read the order after the mutation committed and return the
    full projection plus a human-readable message.
    """
    order = get_order(order_id)
    return Response(
        {"message": message, "order": OrderSerializer(order).data},
        status=http_status,
    )
