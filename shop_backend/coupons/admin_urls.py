# coupons/admin_urls.py

"""
COUPON OPERATOR URLS

Base path (mounted in backend/urls.py):
    /api/admin/coupons/
"""

from django.urls import path

from coupons.views import (
    ActiveCouponListView,
    CouponAdminDetailView,
    CouponAdminListCreateView,
)

app_name = "coupons-admin"

urlpatterns = [
    path("", CouponAdminListCreateView.as_view(), name="coupon-admin-list"),
    path("active/", ActiveCouponListView.as_view(), name="coupon-admin-active"),
    path("<uuid:coupon_id>/", CouponAdminDetailView.as_view(), name="coupon-admin-detail"),
]
