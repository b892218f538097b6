# orders/models/order_line.py

"""
ORDER LINE MODEL

Frozen copy of a cart line taken at order initialization.

Rules:
- Belongs to exactly one Order (deleted with it).
- unit_price / line_total are the prices re-checked against the catalog
  at initialization and never change afterwards.
"""

import uuid

from django.db import models
from django.db.models import Q

from .order import Order


class OrderLine(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    order = models.ForeignKey(
        Order,
        on_delete=models.CASCADE,
        related_name="lines",
    )

    product = models.ForeignKey(
        "catalog.Product",
        on_delete=models.PROTECT,
        related_name="order_lines",
    )

    quantity = models.PositiveIntegerField()

    unit_price = models.DecimalField(max_digits=12, decimal_places=2)
    line_total = models.DecimalField(max_digits=14, decimal_places=2)

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["created_at"]
        constraints = [
            models.CheckConstraint(
                condition=Q(quantity__gt=0),
                name="order_line_quantity_positive",
            ),
        ]

    def __str__(self):
        return f"{self.product} x {self.quantity} @ {self.unit_price}"
