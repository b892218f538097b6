from .pickup import (
    PickupPointSerializer,
    PickupSlotSerializer,
    SlotAvailabilityQuerySerializer,
    SlotAvailabilitySerializer,
)

__all__ = [
    "PickupPointSerializer",
    "PickupSlotSerializer",
    "SlotAvailabilityQuerySerializer",
    "SlotAvailabilitySerializer",
]
