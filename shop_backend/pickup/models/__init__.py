"""
PATH: pickup/models/__init__.py

Pickup models export surface.
"""

from .pickup_point import PickupPoint
from .pickup_slot import PickupSlot

__all__ = ["PickupPoint", "PickupSlot"]
