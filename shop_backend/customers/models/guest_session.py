# customers/models/guest_session.py

"""
GUEST SESSION MODEL

Anonymous shopper identity.

Rules:
- Client keeps the id and sends it as the X-Guest-Session header.
- Deactivated sessions no longer resolve to an owner.
- Guests never accrue loyalty cashback.
"""

import uuid

from django.db import models


class GuestSession(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    is_active = models.BooleanField(default=True)

    created_at = models.DateTimeField(auto_now_add=True)
    last_seen_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-created_at"]

    def __str__(self):
        state = "ACTIVE" if self.is_active else "CLOSED"
        return f"GuestSession {self.id} | {state}"
