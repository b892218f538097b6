# payments/services/gateway.py

"""
PAYMENT GATEWAY ADAPTER

The engine does not speak any gateway protocol. It consumes one
abstract signal, a signed JSON event:

    {"event": "payment.completed",
     "data": {"reference": "PAY-...", "amount": "900.00"}}

Signature:
- header X-Gateway-Signature = hex(HMAC-SHA512(secret, raw body))
- secret from settings.PAYMENTS["GATEWAY"]["SECRET"]
- missing secret => every event is rejected (fail closed)

Delivery semantics:
- events are at-least-once; a duplicate for an already completed
  payment is acknowledged without side effects
- processing failures are logged and acknowledged so the gateway
  stops retrying; the payment stays PENDING for an operator to inspect
"""

from __future__ import annotations

import hashlib
import hmac
import logging
from decimal import InvalidOperation

from django.conf import settings

from common.exceptions import PaymentNotPending, ShopError
from common.money import money
from payments.models import Payment
from payments.services.payment_service import complete_payment

logger = logging.getLogger(__name__)

SIGNATURE_HEADER = "X-Gateway-Signature"
EVENT_PAYMENT_COMPLETED = "payment.completed"


def _gateway_secret() -> str:
    payments = getattr(settings, "PAYMENTS", {}) or {}
    cfg = (payments.get("GATEWAY") or {}) if isinstance(payments, dict) else {}
    return str(cfg.get("SECRET") or "").strip()


def sign_payload(raw_body: bytes, secret: str | None = None) -> str:
    key = (secret if secret is not None else _gateway_secret()).encode("utf-8")
    return hmac.new(key, raw_body, hashlib.sha512).hexdigest()


def verify_signature(*, raw_body: bytes, signature: str | None) -> bool:
    secret = _gateway_secret()
    if not secret:
        logger.error("Payment gateway secret is not configured; rejecting event")
        return False
    if not signature:
        return False
    expected = sign_payload(raw_body, secret)
    return hmac.compare_digest(expected, str(signature).strip().lower())


def handle_gateway_event(payload: dict) -> dict:
    event = str(payload.get("event") or "").strip()
    data = payload.get("data") or {}
    reference = str(data.get("reference") or "").strip()

    if event != EVENT_PAYMENT_COMPLETED:
        logger.info("Gateway event ignored", extra={"event": event, "reference": reference})
        return {"ok": True, "detail": "Ignored event"}

    if not reference:
        logger.warning("Gateway event received without reference")
        return {"ok": True, "detail": "No reference"}

    payment = Payment.objects.filter(reference=reference).first()
    if payment is None:
        logger.warning("Unknown payment reference", extra={"reference": reference})
        return {"ok": True, "detail": "Unknown reference"}

    if payment.status == Payment.STATUS_COMPLETED:
        logger.info("Duplicate gateway event ignored", extra={"reference": reference})
        return {"ok": True, "detail": "Already completed"}

    if data.get("amount") not in (None, ""):
        try:
            paid = money(data.get("amount"))
        except (InvalidOperation, ValueError, TypeError):
            paid = None
        if paid is None or paid != money(payment.amount):
            logger.error(
                "Payment amount mismatch",
                extra={"reference": reference, "paid": str(paid), "expected": str(payment.amount)},
            )
            return {"ok": True, "detail": "Amount mismatch"}

    try:
        complete_payment(payment.order_id, via_gateway=True, payload=payload)
    except PaymentNotPending:
        logger.info("Payment completed concurrently", extra={"reference": reference})
        return {"ok": True, "detail": "Already completed"}
    except ShopError as exc:
        logger.error(
            "Gateway completion rejected",
            extra={"reference": reference, "code": exc.code},
        )
        return {"ok": True, "detail": exc.code}

    logger.info("Gateway event processed", extra={"reference": reference})
    return {"ok": True, "detail": "Processed"}
