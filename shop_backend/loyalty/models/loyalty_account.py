# loyalty/models/loyalty_account.py

from decimal import Decimal

from django.conf import settings
from django.db import models
from django.db.models import Q

User = settings.AUTH_USER_MODEL


class LoyaltyAccount(models.Model):
    """
    Lifetime spend counter of one buyer.

    total_spent only grows through loyalty_service.accrue (row lock + F()).
    The bonus BALANCE is never stored: it is derived from BonusEntry rows.
    """

    user = models.OneToOneField(
        User,
        on_delete=models.CASCADE,
        related_name="loyalty_account",
    )

    total_spent = models.DecimalField(max_digits=16, decimal_places=2, default=Decimal("0.00"))

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        constraints = [
            models.CheckConstraint(
                condition=Q(total_spent__gte=0),
                name="loyalty_total_spent_non_negative",
            ),
        ]

    def __str__(self):
        return f"{self.user} | spent {self.total_spent}"
