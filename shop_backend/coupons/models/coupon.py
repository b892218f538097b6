# coupons/models/coupon.py

"""
COUPON MODEL

Global discount code, independent of any order.

Rules:
- code is stored normalized (trimmed, uppercase) and unique
- usage_limit == 0 means unlimited
- usage_count moves ONLY through coupons.services.coupon_ledger,
  in the same transaction as the order it is applied to / removed from
"""

import uuid
from decimal import Decimal

from django.core.exceptions import ValidationError
from django.db import models
from django.db.models import Q


class Coupon(models.Model):
    TYPE_PERCENTAGE = "PERCENTAGE"
    TYPE_FIXED = "FIXED"

    TYPE_CHOICES = (
        (TYPE_PERCENTAGE, "Percentage"),
        (TYPE_FIXED, "Fixed amount"),
    )

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    code = models.CharField(max_length=64, unique=True, db_index=True)
    coupon_type = models.CharField(max_length=16, choices=TYPE_CHOICES)
    value = models.DecimalField(max_digits=12, decimal_places=2)

    valid_from = models.DateTimeField()
    valid_to = models.DateTimeField()

    usage_limit = models.PositiveIntegerField(default=0)
    usage_count = models.PositiveIntegerField(default=0)

    is_active = models.BooleanField(default=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]
        constraints = [
            models.CheckConstraint(
                condition=Q(value__gt=0),
                name="coupon_value_positive",
            ),
        ]

    @staticmethod
    def normalize(code) -> str:
        return str(code or "").strip().upper()

    def clean(self):
        self.code = self.normalize(self.code)
        if not self.code:
            raise ValidationError({"code": "Code is required."})

        if self.valid_from and self.valid_to and self.valid_to <= self.valid_from:
            raise ValidationError({"valid_to": "valid_to must be after valid_from."})

        if self.value is None or Decimal(self.value) <= 0:
            raise ValidationError({"value": "Value must be greater than zero."})

        if self.coupon_type == self.TYPE_PERCENTAGE and Decimal(self.value) > 100:
            raise ValidationError({"value": "Percentage value cannot exceed 100."})

    def save(self, *args, **kwargs):
        self.full_clean(validate_unique=False, validate_constraints=False)
        return super().save(*args, **kwargs)

    @property
    def is_exhausted(self) -> bool:
        return self.usage_limit > 0 and self.usage_count >= self.usage_limit

    def __str__(self):
        return f"{self.code} ({self.coupon_type} {self.value})"
