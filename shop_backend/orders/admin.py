# orders/admin.py

"""
ORDER ADMIN

Read-mostly: totals, slot and status move only through the lifecycle
services, never through admin forms.
"""

from django.contrib import admin

from orders.models import Order, OrderLine


class OrderLineInline(admin.TabularInline):
    model = OrderLine
    extra = 0
    can_delete = False
    readonly_fields = ("product", "quantity", "unit_price", "line_total", "created_at")

    def has_add_permission(self, request, obj=None):
        return False


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    list_display = (
        "id",
        "status",
        "buyer",
        "guest_session",
        "delivery_method",
        "pickup_slot",
        "total_amount",
        "created_at",
    )
    list_filter = ("status", "delivery_method", "payment_method")
    search_fields = ("id", "customer_name", "customer_email", "customer_phone")
    list_select_related = ("buyer", "guest_session", "pickup_slot", "pickup_slot__point")
    inlines = [OrderLineInline]
    readonly_fields = (
        "status",
        "subtotal_amount",
        "discount_amount",
        "total_amount",
        "coupon",
        "pickup_point",
        "pickup_slot",
        "bonus_earned",
        "created_at",
        "updated_at",
        "paid_at",
        "cancelled_at",
    )
