# payments/apps.py

"""
PAYMENTS APP CONFIG

Payment records and the gateway adapter:
- payment created   -> order PENDING -> PROCESSING
- payment completed -> order PROCESSING -> PAYED (+ loyalty cashback)
"""

from django.apps import AppConfig


class PaymentsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "payments"
    verbose_name = "Payments"
