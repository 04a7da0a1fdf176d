"""Warehouse domain exceptions.

Rejected business requests are *not* exceptions: they come back as
``OperationResult`` / ``CreationResult`` values.  The classes below cover
concurrency outcomes only.  The store raises the first two; the service
retries them and raises the last two once its attempt budget is spent.
The API layer (Views) translates those into HTTP 409.
"""

from __future__ import annotations


class ConcurrentUpdateError(Exception):
    """The stored product version no longer matches the one that was read."""


class DuplicateProductName(Exception):
    """Another product was stored under the same name first."""


class QuantityUpdateConflict(Exception):
    """A quantity operation kept losing the version race and gave up."""


class ProductRegistrationConflict(Exception):
    """A registration kept colliding with concurrent registrations and gave up."""
