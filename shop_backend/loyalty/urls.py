# loyalty/urls.py

"""
LOYALTY API URLS

Base path (mounted in backend/urls.py):
    /api/loyalty/
"""

from django.urls import path

from loyalty.views import CashbackPreviewView, LoyaltyHistoryView, LoyaltyInfoView

app_name = "loyalty"

urlpatterns = [
    path("", LoyaltyInfoView.as_view(), name="loyalty-info"),
    path("history/", LoyaltyHistoryView.as_view(), name="loyalty-history"),
    path("preview/", CashbackPreviewView.as_view(), name="loyalty-preview"),
]
