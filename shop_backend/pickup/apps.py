# pickup/apps.py

"""
PICKUP APP CONFIG

Pickup points and hourly pickup-slot capacity buckets.
"""

from django.apps import AppConfig


class PickupConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "pickup"
    verbose_name = "Pickup Points & Slots"
