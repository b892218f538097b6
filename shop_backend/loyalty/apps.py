# loyalty/apps.py

"""
LOYALTY APP CONFIG

Loyalty accrual engine: cashback tiers, append-only bonus ledger,
lifetime spend per buyer.
"""

from django.apps import AppConfig


class LoyaltyConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "loyalty"
    verbose_name = "Loyalty"
