# cart/admin.py

from django.contrib import admin

from cart.models import CartLine


@admin.register(CartLine)
class CartLineAdmin(admin.ModelAdmin):
    list_display = ("id", "buyer", "guest_session", "product", "quantity", "unit_price", "line_total")
    search_fields = ("product__name", "product__sku")
    list_select_related = ("buyer", "guest_session", "product")
    readonly_fields = ("unit_price", "line_total", "created_at", "updated_at")
