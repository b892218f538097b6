# catalog/apps.py

"""
CATALOG APP CONFIG

Catalog collaborator for the order engine:
- Product (price + active flag)
- Price snapshot resolver used by cart and order initialization
"""

from django.apps import AppConfig


class CatalogConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "catalog"
    verbose_name = "Catalog"
