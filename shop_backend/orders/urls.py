# orders/urls.py

"""
ORDER API URLS

Base path (mounted in backend/urls.py):
    /api/orders/
"""

from django.urls import path

from orders.views import (
    OrderCouponView,
    OrderDetailView,
    OrderFinalizeView,
    OrderInitView,
    OrderListView,
    OrderPickupView,
)

app_name = "orders"

urlpatterns = [
    path("", OrderListView.as_view(), name="order-list"),
    path("init/", OrderInitView.as_view(), name="order-init"),
    path("<int:order_id>/", OrderDetailView.as_view(), name="order-detail"),
    path("<int:order_id>/pickup/", OrderPickupView.as_view(), name="order-pickup"),
    path("<int:order_id>/coupon/", OrderCouponView.as_view(), name="order-coupon"),
    path("<int:order_id>/finalize/", OrderFinalizeView.as_view(), name="order-finalize"),
]
