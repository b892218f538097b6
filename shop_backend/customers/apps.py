# customers/apps.py

"""
CUSTOMERS APP CONFIG

Identity collaborator for the order engine:
- Guest sessions (anonymous shoppers)
- OwnerRef resolution (Buyer | Guest) from a request
"""

from django.apps import AppConfig


class CustomersConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "customers"
    verbose_name = "Customers"
