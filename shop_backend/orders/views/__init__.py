from .admin import (
    AdminOrderDetailView,
    AdminOrderFinalizeView,
    AdminOrderListView,
    AdminOrderStatusView,
)
from .storefront import (
    OrderCouponView,
    OrderDetailView,
    OrderFinalizeView,
    OrderInitView,
    OrderListView,
    OrderPickupView,
)

__all__ = [
    "AdminOrderDetailView",
    "AdminOrderFinalizeView",
    "AdminOrderListView",
    "AdminOrderStatusView",
    "OrderCouponView",
    "OrderDetailView",
    "OrderFinalizeView",
    "OrderInitView",
    "OrderListView",
    "OrderPickupView",
]
