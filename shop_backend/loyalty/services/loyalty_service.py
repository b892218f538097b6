# loyalty/services/loyalty_service.py

"""
LOYALTY SERVICE

Tier table lives in settings.LOYALTY_TIERS as (name, rate, min_spent) rows.
Tier lookup is pure. Accrual runs inside the caller's transaction
(complete_payment) with the buyer's LoyaltyAccount row locked.

Exactly-once cashback:
- accrue() checks for an existing INCREASE entry for the order first
- the partial unique constraint on BonusEntry backs the check at the
  storage layer
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import ROUND_FLOOR, Decimal

from django.conf import settings
from django.db import transaction
from django.db.models import F, Sum

from common.money import ZERO, money
from loyalty.models import BonusEntry, LoyaltyAccount

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Tier:
    name: str
    cashback_rate: Decimal
    min_spent: Decimal

    @property
    def cashback_percent(self) -> str:
        return f"{(self.cashback_rate * 100):.1f}%"


def tier_table() -> list[Tier]:
    rows = getattr(settings, "LOYALTY_TIERS", None) or [("Standard", "0.01", "0")]
    tiers = [
        Tier(name=str(name), cashback_rate=Decimal(str(rate)), min_spent=Decimal(str(min_spent)))
        for name, rate, min_spent in rows
    ]
    return sorted(tiers, key=lambda t: t.min_spent)


def get_tier(total_spent, tiers: list[Tier] | None = None) -> Tier:
    """Highest tier whose threshold is <= total_spent (the lowest tier otherwise)."""
    tiers = tiers if tiers is not None else tier_table()
    spent = Decimal(str(total_spent or 0))

    for tier in reversed(tiers):
        if spent >= tier.min_spent:
            return tier
    return tiers[0]


def get_next_tier(total_spent, tiers: list[Tier] | None = None) -> Tier | None:
    tiers = tiers if tiers is not None else tier_table()
    current = get_tier(total_spent, tiers)
    index = tiers.index(current)
    if index < len(tiers) - 1:
        return tiers[index + 1]
    return None


def cashback_for(order_total, tier: Tier) -> Decimal:
    raw = Decimal(str(order_total or 0)) * tier.cashback_rate
    return money(raw.to_integral_value(rounding=ROUND_FLOOR))


# ============================================================
# READS
# ============================================================


def total_spent(user) -> Decimal:
    account = LoyaltyAccount.objects.filter(user=user).only("total_spent").first()
    return account.total_spent if account else ZERO


def balance(user) -> Decimal:
    sums = {
        row["entry_type"]: row["total"] or ZERO
        for row in BonusEntry.objects.filter(user=user)
        .values("entry_type")
        .annotate(total=Sum("amount"))
    }
    value = sums.get(BonusEntry.TYPE_INCREASE, ZERO) - sums.get(BonusEntry.TYPE_DECREASE, ZERO)
    return money(max(value, ZERO))


def _tier_dict(tier: Tier) -> dict:
    return {
        "name": tier.name,
        "cashback_rate": tier.cashback_rate,
        "cashback_percent": tier.cashback_percent,
    }


def loyalty_info(user) -> dict:
    spent = total_spent(user)
    tier = get_tier(spent)
    next_tier = get_next_tier(spent)

    next_block = None
    if next_tier is not None:
        next_block = {
            **_tier_dict(next_tier),
            "min_spent": money(next_tier.min_spent),
            "remaining": money(max(next_tier.min_spent - spent, ZERO)),
        }

    return {
        "balance": balance(user),
        "total_spent": money(spent),
        "tier": _tier_dict(tier),
        "next_tier": next_block,
    }


def history(user):
    return (
        BonusEntry.objects.filter(user=user)
        .select_related("order")
        .order_by("-created_at")
    )


def preview_cashback(user, order_total) -> dict:
    tier = get_tier(total_spent(user))
    return {
        "order_total": money(order_total),
        "cashback_amount": cashback_for(order_total, tier),
        "cashback_rate": tier.cashback_rate,
        "cashback_percent": tier.cashback_percent,
        "tier_name": tier.name,
    }


# ============================================================
# ACCRUAL
# ============================================================


def _locked_account(user) -> LoyaltyAccount:
    LoyaltyAccount.objects.get_or_create(user=user)
    return LoyaltyAccount.objects.select_for_update().get(user=user)


@transaction.atomic
def accrue(user, order, order_total) -> Decimal:
    """
    Credit cashback for a paid order. Returns the credited amount
    (0 when the order was already credited or the cashback rounds to 0).
    """
    account = _locked_account(user)

    if BonusEntry.objects.filter(order=order, entry_type=BonusEntry.TYPE_INCREASE).exists():
        logger.info(
            "Cashback already credited",
            extra={"order_id": order.pk, "user_id": user.pk},
        )
        return ZERO

    tier = get_tier(account.total_spent)
    cashback = cashback_for(order_total, tier)

    if cashback <= 0:
        logger.info(
            "No cashback for order",
            extra={"order_id": order.pk, "user_id": user.pk, "order_total": str(order_total)},
        )
        return ZERO

    BonusEntry.objects.create(
        user=user,
        order=order,
        amount=cashback,
        entry_type=BonusEntry.TYPE_INCREASE,
        description=f"Cashback {tier.cashback_percent} for order #{order.pk}",
    )

    type(order).objects.filter(pk=order.pk).update(bonus_earned=cashback)
    order.bonus_earned = cashback

    LoyaltyAccount.objects.filter(pk=account.pk).update(
        total_spent=F("total_spent") + money(order_total)
    )

    logger.info(
        "Cashback accrued",
        extra={
            "order_id": order.pk,
            "user_id": user.pk,
            "amount": str(cashback),
            "tier": tier.name,
        },
    )
    return cashback
