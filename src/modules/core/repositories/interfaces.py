"""Generic read-side store interface (Dependency Inversion Principle).

``IReadStore[T]`` is the read contract that domain-specific store
interfaces extend.  Service code depends on these abstractions and never
on the Django ORM directly, so the same service runs against the ORM
store in production and an in-memory store in tests.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Callable, Generic, List, Optional, TypeVar

T = TypeVar("T")

Predicate = Callable[[T], bool]


class IReadStore(ABC, Generic[T]):
    """Read access to a collection of entities of type ``T``."""

    @abstractmethod
    def list(self) -> List[T]:
        """Return every entity.  Order is not significant."""

    @abstractmethod
    def get(self, id: int) -> Optional[T]:
        """Return the entity with the given id, or ``None`` when absent."""

    def query(self, predicate: Predicate[T]) -> List[T]:
        """Return the entities for which ``predicate`` holds."""
        return [entity for entity in self.list() if predicate(entity)]
