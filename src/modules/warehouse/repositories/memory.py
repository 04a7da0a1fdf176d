"""Thread-safe in-memory implementation of the product store.

Keeps ``ProductDTO`` snapshots in a dict keyed by id.  A single lock
guards reads and the version compare-and-swap, which gives the same
per-product atomicity as the ORM store's conditional ``UPDATE``.
Used by unit tests and for running the service without a database.
"""

from __future__ import annotations

import itertools
import threading
from typing import Dict, Iterable, List, Optional

from modules.warehouse.dtos import ProductDTO
from modules.warehouse.exceptions import ConcurrentUpdateError, DuplicateProductName
from modules.warehouse.repositories.interfaces import IProductStore


class InMemoryProductStore(IProductStore):
    def __init__(self, products: Iterable[ProductDTO] = ()) -> None:
        self._lock = threading.Lock()
        self._products: Dict[int, ProductDTO] = {}
        self._ids = itertools.count(1)
        for product in products:
            self.add(product)

    def list(self) -> List[ProductDTO]:
        with self._lock:
            return list(self._products.values())

    def get(self, id: int) -> Optional[ProductDTO]:
        with self._lock:
            return self._products.get(id)

    def update_quantities(self, product: ProductDTO) -> ProductDTO:
        with self._lock:
            current = self._products.get(product.id)
            if current is None or current.version != product.version:
                raise ConcurrentUpdateError(
                    f"Product {product.id} changed since version {product.version} was read."
                )
            stored = current.model_copy(
                update={
                    "in_stock_quantity": product.in_stock_quantity,
                    "reserved_quantity": product.reserved_quantity,
                    "version": current.version + 1,
                }
            )
            self._products[stored.id] = stored
            return stored

    def add(self, product: ProductDTO) -> ProductDTO:
        with self._lock:
            if any(p.name == product.name for p in self._products.values()):
                raise DuplicateProductName(
                    f"Product name '{product.name}' is already taken."
                )
            product_id = product.id if product.id is not None else next(self._ids)
            while product_id in self._products:
                product_id = next(self._ids)
            stored = product.model_copy(update={"id": product_id, "version": 0})
            self._products[product_id] = stored
            return stored
