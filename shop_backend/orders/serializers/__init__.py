from .inputs import (
    ApplyCouponInputSerializer,
    FinalizeOrderInputSerializer,
    SelectPickupInputSerializer,
    UpdateOrderStatusInputSerializer,
)
from .order import OrderLineSerializer, OrderMutationResponseSerializer, OrderSerializer

__all__ = [
    "ApplyCouponInputSerializer",
    "FinalizeOrderInputSerializer",
    "OrderLineSerializer",
    "OrderMutationResponseSerializer",
    "OrderSerializer",
    "SelectPickupInputSerializer",
    "UpdateOrderStatusInputSerializer",
]
