# loyalty/views/loyalty.py

"""
LOYALTY VIEWS (buyers only; guests have no ledger)

- GET /api/loyalty/                 balance, tier, next tier
- GET /api/loyalty/history/         bonus ledger, newest first (paginated)
- GET /api/loyalty/preview/?total=  cashback for a prospective total (read-only)
"""

from __future__ import annotations

from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.generics import ListAPIView
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from loyalty.serializers import (
    BonusEntrySerializer,
    CashbackPreviewQuerySerializer,
    CashbackPreviewSerializer,
    LoyaltyInfoSerializer,
)
from loyalty.services.loyalty_service import history, loyalty_info, preview_cashback


class LoyaltyInfoView(APIView):
    permission_classes = [IsAuthenticated]
    serializer_class = LoyaltyInfoSerializer

    @extend_schema(
        tags=["Loyalty"],
        responses={200: LoyaltyInfoSerializer},
        description="Bonus balance, current tier and progress to the next tier",
    )
    def get(self, request):
        data = loyalty_info(request.user)
        return Response(LoyaltyInfoSerializer(data).data, status=status.HTTP_200_OK)


class LoyaltyHistoryView(ListAPIView):
    permission_classes = [IsAuthenticated]
    serializer_class = BonusEntrySerializer

    def get_queryset(self):
        return history(self.request.user)

    @extend_schema(tags=["Loyalty"], description="Bonus ledger entries, newest first")
    def get(self, request, *args, **kwargs):
        return super().get(request, *args, **kwargs)


class CashbackPreviewView(APIView):
    permission_classes = [IsAuthenticated]
    serializer_class = CashbackPreviewSerializer

    @extend_schema(
        tags=["Loyalty"],
        parameters=[CashbackPreviewQuerySerializer],
        responses={200: CashbackPreviewSerializer},
        description="Cashback the caller would earn for an order total (no side effects)",
    )
    def get(self, request):
        q = CashbackPreviewQuerySerializer(data=request.query_params)
        q.is_valid(raise_exception=True)

        data = preview_cashback(request.user, q.validated_data["total"])
        return Response(CashbackPreviewSerializer(data).data, status=status.HTTP_200_OK)
