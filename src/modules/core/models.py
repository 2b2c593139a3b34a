"""Base abstract models shared by the service modules.

Provides ``TimestampedModel``: ``created_at`` / ``updated_at`` bookkeeping
assigned explicitly by the service layer instead of ``auto_now`` hooks, so a
write path decides exactly when a record counts as modified.
"""

from __future__ import annotations

from datetime import datetime, timedelta

from django.db import models
from django.utils import timezone

# Smallest step the database can represent for a DateTimeField.
TIMESTAMP_RESOLUTION = timedelta(microseconds=1)


class TimestampedModel(models.Model):
    """Abstract base with explicitly assigned creation/modification stamps."""

    created_at = models.DateTimeField(editable=False)
    updated_at = models.DateTimeField()

    class Meta:
        abstract = True

    def stamp_created(self, now: datetime | None = None) -> None:
        """Set both timestamps to the same instant (first write)."""
        now = now or timezone.now()
        self.created_at = now
        self.updated_at = now

    def touch(self, now: datetime | None = None) -> None:
        """Advance ``updated_at``; never moves backwards or stands still."""
        now = now or timezone.now()
        if self.updated_at is not None and now <= self.updated_at:
            now = self.updated_at + TIMESTAMP_RESOLUTION
        self.updated_at = now
