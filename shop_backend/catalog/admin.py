# catalog/admin.py

from django.contrib import admin

from catalog.models import Product


@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    list_display = ("name", "sku", "unit_price", "is_active", "updated_at")
    list_filter = ("is_active",)
    search_fields = ("name", "sku")
    ordering = ("name",)
