# cart/views/api.py

"""
CART API VIEWS

Purpose:
- Owner-scoped cart lifecycle (buyer JWT or X-Guest-Session header)
- Add/update/remove/clear items (server-owned pricing)

Hard rules:
- Money is server-owned: unit_price is snapshotted from Product on add
  and refreshed again when the order is initialized.
"""

from __future__ import annotations

from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from cart.serializers import (
    AddCartItemInputSerializer,
    CartSerializer,
    UpdateCartItemInputSerializer,
)
from cart.services.cart_service import (
    add_item,
    cart_summary,
    clear_cart,
    remove_item,
    set_quantity,
)
from common.exceptions import ShopError
from common.responses import shop_error_response
from common.throttling import PublicWriteThrottle
from customers.services.owner import resolve_owner


def _cart_response(owner, *, http_status=status.HTTP_200_OK):
    return Response(CartSerializer(cart_summary(owner)).data, status=http_status)


class CartView(APIView):
    """
    Retrieve or clear the caller's cart.
    """

    permission_classes = [AllowAny]
    throttle_classes = [PublicWriteThrottle]
    serializer_class = CartSerializer

    @extend_schema(
        tags=["Cart"],
        responses={200: CartSerializer, 401: OpenApiResponse(description="No owner")},
        description="Get the cart for the authenticated buyer or guest session",
    )
    def get(self, request):
        try:
            owner = resolve_owner(request)
        except ShopError as exc:
            return shop_error_response(exc)
        return _cart_response(owner)

    @extend_schema(
        tags=["Cart"],
        responses={200: CartSerializer},
        description="Remove every line from the cart",
    )
    def delete(self, request):
        try:
            owner = resolve_owner(request)
            clear_cart(owner)
        except ShopError as exc:
            return shop_error_response(exc)
        return _cart_response(owner)


class CartItemsView(APIView):
    """
    Add a product to the cart (increments quantity if the product is already there).
    """

    permission_classes = [AllowAny]
    throttle_classes = [PublicWriteThrottle]
    serializer_class = CartSerializer

    @extend_schema(
        tags=["Cart"],
        request=AddCartItemInputSerializer,
        responses={
            201: CartSerializer,
            400: OpenApiResponse(description="Validation error / product inactive"),
            404: OpenApiResponse(description="Product not found"),
        },
        description="Add a product to the cart",
    )
    def post(self, request):
        s = AddCartItemInputSerializer(data=request.data)
        s.is_valid(raise_exception=True)

        try:
            owner = resolve_owner(request)
            add_item(owner, s.validated_data["product_id"], s.validated_data["quantity"])
        except ShopError as exc:
            return shop_error_response(exc)

        return _cart_response(owner, http_status=status.HTTP_201_CREATED)


class CartItemDetailView(APIView):
    """
    Set the quantity of, or remove, one cart line.
    """

    permission_classes = [AllowAny]
    throttle_classes = [PublicWriteThrottle]
    serializer_class = CartSerializer

    @extend_schema(
        tags=["Cart"],
        request=UpdateCartItemInputSerializer,
        responses={200: CartSerializer, 404: OpenApiResponse(description="Cart item not found")},
        description="Set the quantity of a cart line",
    )
    def patch(self, request, line_id):
        s = UpdateCartItemInputSerializer(data=request.data)
        s.is_valid(raise_exception=True)

        try:
            owner = resolve_owner(request)
            set_quantity(owner, line_id, s.validated_data["quantity"])
        except ShopError as exc:
            return shop_error_response(exc)

        return _cart_response(owner)

    @extend_schema(
        tags=["Cart"],
        responses={200: CartSerializer, 404: OpenApiResponse(description="Cart item not found")},
        description="Remove a cart line",
    )
    def delete(self, request, line_id):
        try:
            owner = resolve_owner(request)
            remove_item(owner, line_id)
        except ShopError as exc:
            return shop_error_response(exc)

        return _cart_response(owner)
