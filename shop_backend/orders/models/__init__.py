"""
PATH: orders/models/__init__.py

Orders models export surface.
"""

from .order import Order
from .order_line import OrderLine

__all__ = ["Order", "OrderLine"]
