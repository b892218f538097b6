# orders/apps.py

"""
ORDERS APP CONFIG

Order lifecycle manager:
- cart -> order initialization
- pickup slot selection, coupons, finalization
- payment-gated status state machine
"""

from django.apps import AppConfig


class OrdersConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "orders"
    verbose_name = "Orders"
