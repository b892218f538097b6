# payments/admin_urls.py

"""
PAYMENT OPERATOR URLS

Base path (mounted in backend/urls.py):
    /api/admin/payments/
"""

from django.urls import path

from payments.views import AdminPaymentDetailView, AdminPaymentListView, AdminPaymentStatusView

app_name = "payments-admin"

urlpatterns = [
    path("", AdminPaymentListView.as_view(), name="admin-payment-list"),
    path("<uuid:payment_id>/", AdminPaymentDetailView.as_view(), name="admin-payment-detail"),
    path("order/<int:order_id>/status/", AdminPaymentStatusView.as_view(), name="admin-payment-status"),
]
