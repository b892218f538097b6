# payments/urls.py

"""
PAYMENT API URLS

Base path (mounted in backend/urls.py):
    /api/payments/
"""

from django.urls import path

from payments.views import GatewayWebhookView, PaymentForOrderView, PaymentListCreateView

app_name = "payments"

urlpatterns = [
    path("", PaymentListCreateView.as_view(), name="payment-list-create"),
    path("order/<int:order_id>/", PaymentForOrderView.as_view(), name="payment-for-order"),
    path("gateway/webhook/", GatewayWebhookView.as_view(), name="payment-gateway-webhook"),
]
