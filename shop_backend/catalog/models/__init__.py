"""
PATH: catalog/models/__init__.py

Catalog models export surface.
"""

from .product import Product

__all__ = ["Product"]
