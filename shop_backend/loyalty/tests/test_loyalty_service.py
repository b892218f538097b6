# loyalty/tests/test_loyalty_service.py

from __future__ import annotations

from datetime import timedelta
from decimal import Decimal

from django.core.exceptions import ValidationError
from django.db import IntegrityError, transaction
from django.test import SimpleTestCase, TestCase, override_settings
from django.utils import timezone

from common.tests.factories import buyer_of, make_order, make_product, make_user
from loyalty.models import BonusEntry, LoyaltyAccount
from loyalty.services.loyalty_service import (
    accrue,
    balance,
    get_next_tier,
    get_tier,
    history,
    loyalty_info,
    preview_cashback,
)


class TierLookupTests(SimpleTestCase):
    """
    Tier lookup is a pure function of lifetime spend.
    """

    def test_thresholds(self):
        self.assertEqual(get_tier(0).name, "Standard")
        self.assertEqual(get_tier(Decimal("499999.99")).name, "Standard")
        self.assertEqual(get_tier(500000).name, "Premium")
        self.assertEqual(get_tier(Decimal("1e7")).cashback_rate, Decimal("0.015"))

    def test_same_input_same_tier(self):
        for spent in (0, 1, 250000, 500000, 750000):
            with self.subTest(spent=spent):
                self.assertEqual(get_tier(spent), get_tier(spent))

    def test_next_tier(self):
        self.assertEqual(get_next_tier(0).name, "Premium")
        self.assertIsNone(get_next_tier(600000))

    @override_settings(LOYALTY_TIERS=[("Gold", "0.05", "1000"), ("Base", "0.02", "0")])
    def test_table_comes_from_settings_in_any_order(self):
        self.assertEqual(get_tier(10).name, "Base")
        self.assertEqual(get_tier(1000).name, "Gold")
        self.assertEqual(get_tier(10).cashback_percent, "2.0%")


class AccrueTests(TestCase):
    """
    GUARANTEES:
    - cashback = floor(total * rate) for the tier of the spend BEFORE this order
    - credited at most once per order
    - guests never reach this code (checked in payments tests)
    """

    def setUp(self):
        self.user = make_user()
        self.order = make_order(buyer_of(self.user))

    def test_first_purchase_earns_one_percent(self):
        earned = accrue(self.user, self.order, Decimal("1999.99"))

        self.assertEqual(earned, Decimal("19.00"))
        self.assertEqual(self.order.bonus_earned, Decimal("19.00"))
        self.order.refresh_from_db()
        self.assertEqual(self.order.bonus_earned, Decimal("19.00"))
        self.assertEqual(LoyaltyAccount.objects.get(user=self.user).total_spent, Decimal("1999.99"))
        self.assertEqual(balance(self.user), Decimal("19.00"))

    def test_accrual_is_idempotent_per_order(self):
        accrue(self.user, self.order, Decimal("1000"))
        again = accrue(self.user, self.order, Decimal("1000"))

        self.assertEqual(again, Decimal("0.00"))
        self.assertEqual(BonusEntry.objects.filter(order=self.order).count(), 1)
        self.assertEqual(LoyaltyAccount.objects.get(user=self.user).total_spent, Decimal("1000.00"))

    def test_tiny_orders_earn_nothing(self):
        earned = accrue(self.user, self.order, Decimal("99.99"))

        self.assertEqual(earned, Decimal("0.00"))
        self.assertFalse(BonusEntry.objects.exists())

    def test_premium_rate_after_threshold(self):
        LoyaltyAccount.objects.create(user=self.user, total_spent=Decimal("500000"))

        earned = accrue(self.user, self.order, Decimal("1000"))

        self.assertEqual(earned, Decimal("15.00"))

    def test_database_allows_one_cashback_entry_per_order(self):
        accrue(self.user, self.order, Decimal("1000"))

        with self.assertRaises(IntegrityError):
            with transaction.atomic():
                BonusEntry.objects.create(
                    user=self.user,
                    order=self.order,
                    amount=Decimal("5"),
                    entry_type=BonusEntry.TYPE_INCREASE,
                )

    def test_ledger_entries_are_append_only(self):
        accrue(self.user, self.order, Decimal("1000"))
        entry = BonusEntry.objects.get()

        entry.amount = Decimal("999")
        with self.assertRaises(ValidationError):
            entry.save()
        with self.assertRaises(ValidationError):
            entry.delete()


class LoyaltyReadTests(TestCase):
    def setUp(self):
        self.user = make_user()

    def test_balance_is_increases_minus_decreases_floored_at_zero(self):
        BonusEntry.objects.create(user=self.user, amount=Decimal("30"), entry_type=BonusEntry.TYPE_INCREASE)
        BonusEntry.objects.create(user=self.user, amount=Decimal("10"), entry_type=BonusEntry.TYPE_DECREASE)
        self.assertEqual(balance(self.user), Decimal("20.00"))

        BonusEntry.objects.create(user=self.user, amount=Decimal("50"), entry_type=BonusEntry.TYPE_DECREASE)
        self.assertEqual(balance(self.user), Decimal("0.00"))

    def test_info_for_new_buyer(self):
        info = loyalty_info(self.user)

        self.assertEqual(info["balance"], Decimal("0.00"))
        self.assertEqual(info["tier"]["name"], "Standard")
        self.assertEqual(info["next_tier"]["name"], "Premium")
        self.assertEqual(info["next_tier"]["remaining"], Decimal("500000.00"))

    def test_preview_has_no_side_effects(self):
        preview = preview_cashback(self.user, Decimal("2500"))

        self.assertEqual(preview["cashback_amount"], Decimal("25.00"))
        self.assertEqual(preview["cashback_percent"], "1.0%")
        self.assertFalse(LoyaltyAccount.objects.exists())

    def test_history_newest_first(self):
        first = make_order(buyer_of(self.user))
        accrue(self.user, first, Decimal("1000"))
        BonusEntry.objects.filter(order=first).update(created_at=timezone.now() - timedelta(hours=1))

        second = make_order(buyer_of(self.user), make_product(sku="SKU-2"))
        accrue(self.user, second, Decimal("3000"))

        self.assertEqual([e.order_id for e in history(self.user)], [second.pk, first.pk])
