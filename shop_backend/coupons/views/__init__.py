from .admin import (
    ActiveCouponListView,
    CouponAdminDetailView,
    CouponAdminListCreateView,
)
from .public import CouponValidateView

__all__ = [
    "ActiveCouponListView",
    "CouponAdminDetailView",
    "CouponAdminListCreateView",
    "CouponValidateView",
]
