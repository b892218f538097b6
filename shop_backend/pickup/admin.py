# pickup/admin.py

from django.contrib import admin

from pickup.models import PickupPoint, PickupSlot


@admin.register(PickupPoint)
class PickupPointAdmin(admin.ModelAdmin):
    list_display = ("name", "address", "timezone", "is_active")
    list_filter = ("is_active",)
    search_fields = ("name", "address")


@admin.register(PickupSlot)
class PickupSlotAdmin(admin.ModelAdmin):
    """
    Counters are read-only here: they only move through the slot allocator.
    """

    list_display = ("point", "starts_at", "ends_at", "capacity", "reserved")
    list_filter = ("point",)
    list_select_related = ("point",)
    date_hierarchy = "starts_at"
    readonly_fields = ("capacity", "reserved", "created_at", "updated_at")
