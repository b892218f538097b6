# customers/admin.py

from django.contrib import admin

from customers.models import GuestSession


@admin.register(GuestSession)
class GuestSessionAdmin(admin.ModelAdmin):
    list_display = ("id", "is_active", "created_at", "last_seen_at")
    list_filter = ("is_active",)
    search_fields = ("id",)
    readonly_fields = ("id", "created_at", "last_seen_at")
