# loyalty/admin.py

from django.contrib import admin

from loyalty.models import BonusEntry, LoyaltyAccount


@admin.register(LoyaltyAccount)
class LoyaltyAccountAdmin(admin.ModelAdmin):
    list_display = ("user", "total_spent", "updated_at")
    search_fields = ("user__username", "user__email")
    readonly_fields = ("total_spent", "created_at", "updated_at")


@admin.register(BonusEntry)
class BonusEntryAdmin(admin.ModelAdmin):
    """
    Ledger is append-only: no edits, no deletes from the admin.
    """

    list_display = ("user", "entry_type", "amount", "order", "created_at")
    list_filter = ("entry_type",)
    search_fields = ("user__username", "description")
    list_select_related = ("user", "order")

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False
