from .admin import PickupSlotAdminDetailView
from .public import PickupPointListView, PickupSlotAvailabilityView

__all__ = ["PickupPointListView", "PickupSlotAdminDetailView", "PickupSlotAvailabilityView"]
