# customers/services/owner.py

"""
OWNER RESOLUTION

The order engine never branches on "is this a logged-in user or a
guest?" beyond this module. A caller is resolved once into an OwnerRef:

    Buyer(user_id)        authenticated (JWT) user
    Guest(session_id)     active GuestSession named by X-Guest-Session

OwnerRef.lookup() yields the ORM filter kwargs that scope carts and
orders to that owner; loyalty accrual only runs for Buyer.
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from typing import Union

from django.utils import timezone

from common.exceptions import OwnerRequired
from customers.models import GuestSession

logger = logging.getLogger(__name__)

GUEST_SESSION_HEADER = "X-Guest-Session"


@dataclass(frozen=True)
class Buyer:
    user_id: int

    is_buyer = True

    def lookup(self) -> dict:
        return {"buyer_id": self.user_id}

    def create_kwargs(self) -> dict:
        return {"buyer_id": self.user_id, "guest_session_id": None}


@dataclass(frozen=True)
class Guest:
    session_id: uuid.UUID

    is_buyer = False

    def lookup(self) -> dict:
        return {"guest_session_id": self.session_id}

    def create_kwargs(self) -> dict:
        return {"buyer_id": None, "guest_session_id": self.session_id}


OwnerRef = Union[Buyer, Guest]


def owner_of(obj) -> OwnerRef:
    """OwnerRef for a persisted cart line / order."""
    if getattr(obj, "buyer_id", None):
        return Buyer(user_id=obj.buyer_id)
    return Guest(session_id=obj.guest_session_id)


def _parse_session_id(raw: str) -> uuid.UUID | None:
    try:
        return uuid.UUID(str(raw).strip())
    except (ValueError, TypeError, AttributeError):
        return None


def resolve_guest(raw_session_id) -> Guest:
    session_id = _parse_session_id(raw_session_id)
    if session_id is None:
        raise OwnerRequired("Guest session id is malformed.")

    touched = GuestSession.objects.filter(id=session_id, is_active=True).update(
        last_seen_at=timezone.now()
    )
    if not touched:
        logger.info("Unknown or inactive guest session", extra={"session_id": str(session_id)})
        raise OwnerRequired("Guest session is unknown or expired.")

    return Guest(session_id=session_id)


def resolve_owner(request) -> OwnerRef:
    """
    Resolve the caller of a storefront request.

    Priority:
    1) authenticated user (JWT)
    2) X-Guest-Session header naming an active GuestSession
    """
    user = getattr(request, "user", None)
    if user is not None and user.is_authenticated:
        return Buyer(user_id=user.pk)

    raw = request.headers.get(GUEST_SESSION_HEADER)
    if not raw:
        raise OwnerRequired()

    return resolve_guest(raw)


def start_guest_session() -> GuestSession:
    session = GuestSession.objects.create()
    logger.info("Guest session started", extra={"session_id": str(session.id)})
    return session
