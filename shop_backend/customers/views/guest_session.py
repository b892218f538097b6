# customers/views/guest_session.py

from __future__ import annotations

from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from common.throttling import PublicWriteThrottle
from customers.serializers import GuestSessionSerializer
from customers.services.owner import start_guest_session


class GuestSessionCreateView(APIView):
    """
    Start an anonymous shopping session.

    The returned id must be sent back as the X-Guest-Session header on
    cart / order / payment calls.
    """

    permission_classes = [AllowAny]
    authentication_classes = []
    throttle_classes = [PublicWriteThrottle]
    serializer_class = GuestSessionSerializer

    @extend_schema(
        tags=["Guest"],
        request=None,
        responses={201: GuestSessionSerializer},
        description="Create a guest session for anonymous checkout",
    )
    def post(self, request):
        session = start_guest_session()
        return Response(GuestSessionSerializer(session).data, status=status.HTTP_201_CREATED)
