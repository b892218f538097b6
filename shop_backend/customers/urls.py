# customers/urls.py

"""
GUEST API URLS

Base path (mounted in backend/urls.py):
    /api/guest/
"""

from django.urls import path

from customers.views import GuestSessionCreateView

app_name = "customers"

urlpatterns = [
    path("session/", GuestSessionCreateView.as_view(), name="guest-session-create"),
]
