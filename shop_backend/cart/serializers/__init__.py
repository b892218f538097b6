from .cart import (
    AddCartItemInputSerializer,
    CartLineSerializer,
    CartSerializer,
    UpdateCartItemInputSerializer,
)

__all__ = [
    "AddCartItemInputSerializer",
    "CartLineSerializer",
    "CartSerializer",
    "UpdateCartItemInputSerializer",
]
