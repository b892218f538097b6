# coupons/apps.py

"""
COUPONS APP CONFIG

Coupon ledger: code validation, discount computation and usage counters.
"""

from django.apps import AppConfig


class CouponsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "coupons"
    verbose_name = "Coupons"
