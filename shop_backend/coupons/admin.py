# coupons/admin.py

from django.contrib import admin

from coupons.models import Coupon


@admin.register(Coupon)
class CouponAdmin(admin.ModelAdmin):
    list_display = ("code", "coupon_type", "value", "valid_from", "valid_to", "usage_count", "usage_limit", "is_active")
    list_filter = ("coupon_type", "is_active")
    search_fields = ("code",)
    readonly_fields = ("usage_count", "created_at", "updated_at")
