# pickup/admin_urls.py

"""
PICKUP OPERATOR URLS

Base path (mounted in backend/urls.py):
    /api/admin/pickup/
"""

from django.urls import path

from pickup.views import PickupSlotAdminDetailView

app_name = "pickup-admin"

urlpatterns = [
    path("slots/<uuid:slot_id>/", PickupSlotAdminDetailView.as_view(), name="pickup-slot-admin-detail"),
]
