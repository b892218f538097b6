from .coupon import (
    CouponSerializer,
    CouponValidateInputSerializer,
    CouponValidateResponseSerializer,
    CouponWriteSerializer,
)

__all__ = [
    "CouponSerializer",
    "CouponValidateInputSerializer",
    "CouponValidateResponseSerializer",
    "CouponWriteSerializer",
]
