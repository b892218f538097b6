# coupons/urls.py

"""
COUPON API URLS

Base path (mounted in backend/urls.py):
    /api/coupons/
"""

from django.urls import path

from coupons.views import CouponValidateView

app_name = "coupons"

urlpatterns = [
    path("validate/", CouponValidateView.as_view(), name="coupon-validate"),
]
