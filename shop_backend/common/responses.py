# common/responses.py

"""
API ERROR NORMALIZATION

Every failure leaves the API as:
    {"error": {"code": ..., "kind": ..., "message": ..., "details": ...}}
"""

from __future__ import annotations

import logging

from rest_framework.response import Response

from common.exceptions import ShopError

logger = logging.getLogger(__name__)


def error_response(
    *,
    code: str,
    message: str,
    http_status: int,
    kind: str = "error",
    details=None,
):
    return Response(
        {
            "error": {
                "code": code,
                "kind": kind,
                "message": message,
                "details": details,
            }
        },
        status=http_status,
    )


def shop_error_response(exc: ShopError):
    logger.info(
        "Order engine request rejected",
        extra={"code": exc.code, "kind": exc.kind},
    )
    return error_response(**exc.as_dict(), http_status=exc.http_status)
