"""Quantity operations understood by the warehouse service.

Each operation is a capacity rule plus a mutation.  The service runs
all of them through the same validation pipeline; nothing here touches
a store.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from modules.warehouse.dtos import ProductDTO


@dataclass(frozen=True)
class QuantityOperation:
    name: str
    # True when applying ``quantity`` would break a stock bound.
    exceeds_capacity: Callable[[ProductDTO, int], bool]
    apply: Callable[[ProductDTO, int], ProductDTO]


def _reserve(product: ProductDTO, quantity: int) -> ProductDTO:
    return product.model_copy(
        update={"reserved_quantity": product.reserved_quantity + quantity}
    )


def _ship(product: ProductDTO, quantity: int) -> ProductDTO:
    # Shipping more than was reserved is allowed; the reservation floors at 0.
    return product.model_copy(
        update={
            "reserved_quantity": max(product.reserved_quantity - quantity, 0),
            "in_stock_quantity": product.in_stock_quantity - quantity,
        }
    )


def _restock(product: ProductDTO, quantity: int) -> ProductDTO:
    return product.model_copy(
        update={"in_stock_quantity": product.in_stock_quantity + quantity}
    )


ORDER = QuantityOperation(
    name="order",
    exceeds_capacity=lambda p, q: p.reserved_quantity + q > p.in_stock_quantity,
    apply=_reserve,
)

SHIP = QuantityOperation(
    name="ship",
    exceeds_capacity=lambda p, q: p.in_stock_quantity - q < 0,
    apply=_ship,
)

RESTOCK = QuantityOperation(
    name="restock",
    exceeds_capacity=lambda p, q: False,
    apply=_restock,
)
