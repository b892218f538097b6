# common/apps.py

"""
COMMON APP CONFIG

Shared building blocks for every order-engine app:
- error taxonomy (ShopError and its kinds)
- money rounding
- API error envelope
- best-effort projection cache
"""

from django.apps import AppConfig


class CommonConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "common"
    verbose_name = "Common"
