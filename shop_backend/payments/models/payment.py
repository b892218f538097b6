# payments/models/payment.py

"""
PAYMENT MODEL

One payment per order.

Rules:
- amount is a copy of the order total at creation time
- PENDING -> COMPLETED -> REFUNDED (no other moves)
- COMPLETED is the only trigger for Order PROCESSING -> PAYED
- reference is what the gateway echoes back in its events
"""

import uuid

from django.db import models


def generate_reference() -> str:
    return f"PAY-{uuid.uuid4().hex[:20].upper()}"


class Payment(models.Model):
    STATUS_PENDING = "PENDING"
    STATUS_COMPLETED = "COMPLETED"
    STATUS_REFUNDED = "REFUNDED"

    STATUS_CHOICES = (
        (STATUS_PENDING, "Pending"),
        (STATUS_COMPLETED, "Completed"),
        (STATUS_REFUNDED, "Refunded"),
    )

    METHOD_ROBOKASSA = "ROBOKASSA"
    METHOD_CASH = "CASH"

    METHOD_CHOICES = (
        (METHOD_ROBOKASSA, "Robokassa"),
        (METHOD_CASH, "Cash"),
    )

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    order = models.OneToOneField(
        "orders.Order",
        on_delete=models.PROTECT,
        related_name="payment",
    )

    amount = models.DecimalField(max_digits=14, decimal_places=2)
    method = models.CharField(max_length=16, choices=METHOD_CHOICES)
    status = models.CharField(
        max_length=16,
        choices=STATUS_CHOICES,
        default=STATUS_PENDING,
        db_index=True,
    )

    reference = models.CharField(
        max_length=64,
        unique=True,
        default=generate_reference,
        editable=False,
    )
    provider_payload = models.JSONField(default=dict, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)
    completed_at = models.DateTimeField(null=True, blank=True)
    refunded_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        ordering = ["-created_at"]

    def __str__(self):
        return f"{self.reference} | {self.method} | {self.status} | {self.amount}"
