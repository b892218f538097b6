# loyalty/models/bonus_entry.py

"""
BONUS LEDGER ENTRY (APPEND-ONLY)

Rules:
- Rows are never updated or deleted.
- balance = sum(INCREASE) - sum(DECREASE), floored at 0.
- At most ONE INCREASE entry per order (partial unique constraint):
  cashback for an order is credited exactly once.
"""

import uuid

from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import models
from django.db.models import Q

User = settings.AUTH_USER_MODEL


class BonusEntry(models.Model):
    TYPE_INCREASE = "INCREASE"
    TYPE_DECREASE = "DECREASE"

    TYPE_CHOICES = (
        (TYPE_INCREASE, "Increase"),
        (TYPE_DECREASE, "Decrease"),
    )

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    user = models.ForeignKey(
        User,
        on_delete=models.CASCADE,
        related_name="bonus_entries",
    )
    order = models.ForeignKey(
        "orders.Order",
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name="bonus_entries",
    )

    amount = models.DecimalField(max_digits=14, decimal_places=2)
    entry_type = models.CharField(max_length=16, choices=TYPE_CHOICES)
    description = models.CharField(max_length=255, blank=True, default="")

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-created_at"]
        constraints = [
            models.UniqueConstraint(
                fields=["order"],
                condition=Q(entry_type="INCREASE"),
                name="one_cashback_entry_per_order",
            ),
            models.CheckConstraint(
                condition=Q(amount__gt=0),
                name="bonus_entry_amount_positive",
            ),
        ]

    def save(self, *args, **kwargs):
        if not self._state.adding:
            raise ValidationError("Bonus ledger entries are append-only.")
        return super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        raise ValidationError("Bonus ledger entries are append-only.")

    def __str__(self):
        sign = "+" if self.entry_type == self.TYPE_INCREASE else "-"
        return f"{self.user} {sign}{self.amount}"
