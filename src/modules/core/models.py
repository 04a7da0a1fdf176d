"""Base abstract models shared by the service's apps.

Provides ``TimeStampedModel``: ``created_at`` / ``updated_at`` bookkeeping
on top of Django's default integer primary key.

Bulk ``QuerySet.update()`` calls bypass ``auto_now`` and must set
``updated_at`` themselves.
"""

from __future__ import annotations

from django.db import models


class TimeStampedModel(models.Model):
    """Abstract base with creation / modification timestamps."""

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True
