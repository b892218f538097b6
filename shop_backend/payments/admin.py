# payments/admin.py

from django.contrib import admin

from payments.models import Payment


@admin.register(Payment)
class PaymentAdmin(admin.ModelAdmin):
    list_display = ("reference", "order", "method", "status", "amount", "created_at", "completed_at")
    list_filter = ("method", "status")
    search_fields = ("reference", "order__id")
    list_select_related = ("order",)
    readonly_fields = (
        "reference",
        "order",
        "amount",
        "method",
        "status",
        "provider_payload",
        "created_at",
        "updated_at",
        "completed_at",
        "refunded_at",
    )
