from .api import CartItemDetailView, CartItemsView, CartView

__all__ = ["CartItemDetailView", "CartItemsView", "CartView"]
