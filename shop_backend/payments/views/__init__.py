from .admin import AdminPaymentDetailView, AdminPaymentListView, AdminPaymentStatusView
from .gateway_webhook import GatewayWebhookView
from .storefront import PaymentForOrderView, PaymentListCreateView

__all__ = [
    "AdminPaymentDetailView",
    "AdminPaymentListView",
    "AdminPaymentStatusView",
    "GatewayWebhookView",
    "PaymentForOrderView",
    "PaymentListCreateView",
]
