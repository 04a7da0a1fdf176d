"""Product store interface.

Extends ``IReadStore[ProductDTO]`` with the two writes the warehouse
needs: quantity updates guarded by the product version, and inserts
guarded by name uniqueness.
"""

from __future__ import annotations

from abc import abstractmethod

from modules.core.repositories.interfaces import IReadStore
from modules.warehouse.dtos import ProductDTO


class IProductStore(IReadStore[ProductDTO]):
    """Store contract for warehouse products."""

    @abstractmethod
    def update_quantities(self, product: ProductDTO) -> ProductDTO:
        """Persist ``in_stock_quantity`` / ``reserved_quantity`` for ``product.id``.

        The write only happens if the stored version still equals
        ``product.version``.  Returns the stored snapshot with its new version.

        Raises:
            ConcurrentUpdateError: the product changed (or vanished) since it was read.
        """

    @abstractmethod
    def add(self, product: ProductDTO) -> ProductDTO:
        """Insert a new product and return it with its assigned id.

        Raises:
            DuplicateProductName: a product with the same name already exists.
        """
