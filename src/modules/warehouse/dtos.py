"""Warehouse DTOs for the Service Layer.

Framework-agnostic data transfer objects using Pydantic v2, shared by
the HTTP layer, the service and both product stores.  All DTOs are
immutable (``frozen=True``); mutations produce copies via
``model_copy(update=...)``.

- ``ProductDTO``: a product as read from / written to a store.
- ``QuantityChangeRequest``: input for Order / Ship / Restock.
- ``RegisterProductRequest``: input for product registration.
- ``OperationResult`` / ``CreationResult``: outcomes.

Request DTOs check strict integer *types* and the largest storable
quantity.  A negative quantity is a valid request that the service
rejects with ``ErrorReason.QUANTITY_INVALID``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictInt, model_validator

from modules.warehouse.constants import MAX_QUANTITY, ErrorReason

if TYPE_CHECKING:
    from modules.warehouse.models import Product


# ---------------------------------------------------------------------------
# Entity DTO
# ---------------------------------------------------------------------------


class ProductDTO(BaseModel):
    """Snapshot of a product.

    ``id`` is ``None`` only for a product that has not been stored yet.
    ``version`` is the store's concurrency token for this snapshot.
    """

    model_config = ConfigDict(frozen=True)

    id: Optional[int] = None
    name: str
    in_stock_quantity: int
    reserved_quantity: int = 0
    version: int = 0

    @property
    def available_quantity(self) -> int:
        return self.in_stock_quantity - self.reserved_quantity

    @classmethod
    def from_entity(cls, product: Product) -> ProductDTO:
        """Build a DTO from a Product model instance."""
        return cls(
            id=product.id,
            name=product.name,
            in_stock_quantity=product.in_stock_quantity,
            reserved_quantity=product.reserved_quantity,
            version=product.version,
        )


# ---------------------------------------------------------------------------
# Input DTOs
# ---------------------------------------------------------------------------


class QuantityChangeRequest(BaseModel):
    """Booleans, floats and numeric strings are not quantities."""

    model_config = ConfigDict(frozen=True)

    product_id: StrictInt
    quantity: StrictInt = Field(le=MAX_QUANTITY)


class RegisterProductRequest(BaseModel):
    """``name`` may be missing or blank; the service reports that as
    ``InvalidRequest`` rather than failing validation here."""

    model_config = ConfigDict(frozen=True)

    name: Optional[str] = None
    in_stock_quantity: StrictInt = Field(default=0, le=MAX_QUANTITY)


# ---------------------------------------------------------------------------
# Output DTOs
# ---------------------------------------------------------------------------


class OperationResult(BaseModel):
    """Outcome of a warehouse operation.

    Exactly one reason is set on failure; none on success.
    """

    model_config = ConfigDict(frozen=True)

    success: bool
    error_reason: Optional[ErrorReason] = None

    @model_validator(mode="after")
    def reason_matches_success(self) -> OperationResult:
        if self.success and self.error_reason is not None:
            raise ValueError("A successful result cannot carry an error reason.")
        if not self.success and self.error_reason is None:
            raise ValueError("A failed result must carry an error reason.")
        return self

    @classmethod
    def ok(cls) -> OperationResult:
        return cls(success=True)

    @classmethod
    def fail(cls, reason: ErrorReason) -> OperationResult:
        return cls(success=False, error_reason=reason)


class CreationResult(OperationResult):
    model: Optional[ProductDTO] = None

    @model_validator(mode="after")
    def model_only_on_success(self) -> CreationResult:
        if not self.success and self.model is not None:
            raise ValueError("A failed result cannot carry a model.")
        return self

    @classmethod
    def created(cls, product: ProductDTO) -> CreationResult:
        return cls(success=True, model=product)
