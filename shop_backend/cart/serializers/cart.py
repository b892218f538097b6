# cart/serializers/cart.py

"""
CART SERIALIZERS

Read-only projections; all writes go through cart.services.cart_service.
"""

from rest_framework import serializers

from cart.models import CartLine


class CartLineSerializer(serializers.ModelSerializer):
    product_id = serializers.UUIDField(read_only=True)
    product_name = serializers.CharField(source="product.name", read_only=True)
    sku = serializers.CharField(source="product.sku", read_only=True)

    class Meta:
        model = CartLine
        fields = [
            "id",
            "product_id",
            "product_name",
            "sku",
            "quantity",
            "unit_price",
            "line_total",
            "updated_at",
        ]
        read_only_fields = fields


class CartSerializer(serializers.Serializer):
    items = CartLineSerializer(many=True, read_only=True)
    item_count = serializers.IntegerField(read_only=True)
    subtotal_amount = serializers.DecimalField(max_digits=14, decimal_places=2, read_only=True)


class AddCartItemInputSerializer(serializers.Serializer):
    product_id = serializers.UUIDField()
    quantity = serializers.IntegerField(min_value=1, default=1)


class UpdateCartItemInputSerializer(serializers.Serializer):
    quantity = serializers.IntegerField(min_value=1)
