# pickup/models/pickup_point.py

import uuid
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import models


def _default_timezone() -> str:
    return getattr(settings, "PICKUP_DEFAULT_TIMEZONE", "Europe/Moscow")


class PickupPoint(models.Model):
    """
    Physical pickup location.

    Service hours are evaluated in the point's own timezone.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    name = models.CharField(max_length=255, unique=True)
    address = models.CharField(max_length=500, blank=True, default="")
    timezone = models.CharField(
        max_length=64,
        default=_default_timezone,
        help_text="IANA timezone name, e.g. Europe/Moscow.",
    )

    is_active = models.BooleanField(default=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["name"]

    def clean(self):
        try:
            ZoneInfo(self.timezone)
        except (ZoneInfoNotFoundError, ValueError):
            raise ValidationError({"timezone": f"Unknown timezone '{self.timezone}'."})

    def save(self, *args, **kwargs):
        self.full_clean()
        return super().save(*args, **kwargs)

    @property
    def zone(self) -> ZoneInfo:
        return ZoneInfo(self.timezone)

    def __str__(self):
        status = "ACTIVE" if self.is_active else "INACTIVE"
        return f"{self.name} | {status}"
