# cart/models/cart_line.py

"""
CART LINE MODEL

Purpose:
- Storefront cart line (temporary, mutable).
- Unit price is a snapshot at time of add / last recalculation (server-controlled).

Rules:
- Owned by exactly one of: buyer (auth user) OR guest session.
- One line per product per owner (DB constraint); adding again increments quantity.
- Quantity must be > 0.
- Lines never belong to an order: order initialization copies them into
  OrderLine rows and deletes them.
"""

import uuid
from decimal import Decimal

from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import models
from django.db.models import Q

from catalog.models import Product
from customers.models import GuestSession

User = settings.AUTH_USER_MODEL


class CartLine(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    buyer = models.ForeignKey(
        User,
        on_delete=models.CASCADE,
        null=True,
        blank=True,
        related_name="cart_lines",
    )

    guest_session = models.ForeignKey(
        GuestSession,
        on_delete=models.CASCADE,
        null=True,
        blank=True,
        related_name="cart_lines",
    )

    product = models.ForeignKey(
        Product,
        on_delete=models.PROTECT,
        related_name="cart_lines",
    )

    quantity = models.PositiveIntegerField()

    unit_price = models.DecimalField(max_digits=12, decimal_places=2)
    line_total = models.DecimalField(max_digits=14, decimal_places=2)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["created_at"]
        constraints = [
            models.CheckConstraint(
                condition=(
                    Q(buyer__isnull=False, guest_session__isnull=True)
                    | Q(buyer__isnull=True, guest_session__isnull=False)
                ),
                name="cart_line_single_owner",
            ),
            models.CheckConstraint(
                condition=Q(quantity__gt=0),
                name="cart_line_quantity_positive",
            ),
            models.UniqueConstraint(
                fields=["buyer", "product"],
                condition=Q(buyer__isnull=False),
                name="unique_cart_product_per_buyer",
            ),
            models.UniqueConstraint(
                fields=["guest_session", "product"],
                condition=Q(guest_session__isnull=False),
                name="unique_cart_product_per_guest",
            ),
        ]

    def clean(self):
        if bool(self.buyer_id) == bool(self.guest_session_id):
            raise ValidationError("Cart line must belong to exactly one owner.")

        if self.quantity is None or self.quantity <= 0:
            raise ValidationError({"quantity": "Quantity must be greater than zero."})

        if self.unit_price is None or Decimal(self.unit_price) <= 0:
            raise ValidationError({"unit_price": "Unit price must be greater than zero."})

    def save(self, *args, **kwargs):
        self.full_clean(validate_constraints=False)
        return super().save(*args, **kwargs)

    def __str__(self):
        return f"{self.product} x {self.quantity}"
