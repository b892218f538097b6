# cart/apps.py

"""
CART APP CONFIG

Storefront cart:
- Mutable cart lines owned by a buyer or a guest session
- Consumed (and deleted) when an order is initialized
"""

from django.apps import AppConfig


class CartConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "cart"
    verbose_name = "Cart"
