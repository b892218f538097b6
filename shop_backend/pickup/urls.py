# pickup/urls.py

"""
PICKUP API URLS

Base path (mounted in backend/urls.py):
    /api/pickup/
"""

from django.urls import path

from pickup.views import PickupPointListView, PickupSlotAvailabilityView

app_name = "pickup"

urlpatterns = [
    path("points/", PickupPointListView.as_view(), name="pickup-point-list"),
    path("points/<uuid:point_id>/slots/", PickupSlotAvailabilityView.as_view(), name="pickup-slot-availability"),
]
