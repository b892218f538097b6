# payments/views/gateway_webhook.py

from __future__ import annotations

import logging

from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.parsers import JSONParser
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from common.throttling import WebhookThrottle
from payments.services.gateway import (
    SIGNATURE_HEADER,
    handle_gateway_event,
    verify_signature,
)

logger = logging.getLogger(__name__)


class GatewayWebhookView(APIView):
    permission_classes = [AllowAny]
    authentication_classes = []
    parser_classes = [JSONParser]
    throttle_classes = [WebhookThrottle]

    @extend_schema(
        tags=["Payments"],
        request={"application/json": {"type": "object"}},
        responses={
            200: OpenApiResponse(description="Event acknowledged"),
            400: OpenApiResponse(description="Invalid signature"),
        },
        description="Signed payment gateway events (payment.completed)",
    )
    def post(self, request, *args, **kwargs):
        raw_body = getattr(request, "body", b"") or b""
        signature = request.headers.get(SIGNATURE_HEADER)

        logger.info("Payment gateway webhook received")

        if not verify_signature(raw_body=raw_body, signature=signature):
            logger.warning("Invalid payment gateway signature")
            return Response(
                {"ok": False, "detail": "Invalid signature"},
                status=status.HTTP_400_BAD_REQUEST,
            )

        payload = request.data if isinstance(request.data, dict) else {}
        result = handle_gateway_event(payload)
        return Response(result, status=status.HTTP_200_OK)
