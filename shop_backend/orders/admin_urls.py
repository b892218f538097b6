# orders/admin_urls.py

"""
ORDER OPERATOR URLS

Base path (mounted in backend/urls.py):
    /api/admin/orders/
"""

from django.urls import path

from orders.views import (
    AdminOrderDetailView,
    AdminOrderFinalizeView,
    AdminOrderListView,
    AdminOrderStatusView,
)

app_name = "orders-admin"

urlpatterns = [
    path("", AdminOrderListView.as_view(), name="admin-order-list"),
    path("<int:order_id>/", AdminOrderDetailView.as_view(), name="admin-order-detail"),
    path("<int:order_id>/status/", AdminOrderStatusView.as_view(), name="admin-order-status"),
    path("<int:order_id>/finalize/", AdminOrderFinalizeView.as_view(), name="admin-order-finalize"),
]
