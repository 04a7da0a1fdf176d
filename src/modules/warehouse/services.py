"""Warehouse service layer (Use Cases).

Orchestrates quantity operations and product registration, delegating
persistence to the injected ``IProductStore``.

Business rules enforced here, in precedence order:
1. Negative quantities are rejected (``QuantityInvalid``).
2. Unknown products, blank names and names longer than the name column
   are rejected (``InvalidRequest``).
3. Order may not reserve more than is in stock, Ship may not take stock
   below zero (``NotEnoughQuantity``).
4. Restock may not raise the stock past ``MAX_QUANTITY``
   (``QuantityInvalid``).

The first failing rule decides the result and the remaining rules are
not evaluated.  Rejections are returned as result values; only
concurrency give-ups are raised.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, List, Optional, Tuple

import structlog

from modules.warehouse import operations
from modules.warehouse.constants import (
    DUPLICATE_NAME_MARKER,
    MAX_QUANTITY,
    MAX_UPDATE_ATTEMPTS,
    PRODUCT_NAME_MAX_LENGTH,
    ErrorReason,
)
from modules.warehouse.dtos import CreationResult, OperationResult, ProductDTO
from modules.warehouse.exceptions import (
    ConcurrentUpdateError,
    DuplicateProductName,
    ProductRegistrationConflict,
    QuantityUpdateConflict,
)
from modules.warehouse.naming import resolve_unique_name

if TYPE_CHECKING:
    from modules.warehouse.dtos import QuantityChangeRequest, RegisterProductRequest
    from modules.warehouse.operations import QuantityOperation
    from modules.warehouse.repositories.interfaces import IProductStore

logger = structlog.get_logger(__name__)


class WarehouseService:
    """Application service for warehouse use-cases.

    Receives an ``IProductStore`` via constructor injection (DIP).  The
    service itself is stateless; concurrent callers are serialised by the
    store's version check, and a lost race re-runs the whole validation
    against a fresh read, at most ``max_attempts`` times.
    """

    def __init__(
        self,
        store: IProductStore,
        max_attempts: int = MAX_UPDATE_ATTEMPTS,
        name_marker: str = DUPLICATE_NAME_MARKER,
    ) -> None:
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1.")
        self._store = store
        self._max_attempts = max_attempts
        self._name_marker = name_marker

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def order(self, request: QuantityChangeRequest) -> OperationResult:
        """Reserve ``request.quantity`` units of the product."""
        return self._change_quantity(operations.ORDER, request)

    def ship(self, request: QuantityChangeRequest) -> OperationResult:
        """Ship ``request.quantity`` units, releasing reservations down to zero."""
        return self._change_quantity(operations.SHIP, request)

    def restock(self, request: QuantityChangeRequest) -> OperationResult:
        """Add ``request.quantity`` units to the stock."""
        return self._change_quantity(operations.RESTOCK, request)

    def register_product(self, request: RegisterProductRequest) -> CreationResult:
        """Store a new product under a name no other product uses.

        Raises:
            ProductRegistrationConflict: concurrent registrations kept
                claiming the resolved name.
        """
        name = (request.name or "").strip()
        log = logger.bind(requested_name=request.name)

        if request.in_stock_quantity < 0:
            return self._reject_registration(log, ErrorReason.QUANTITY_INVALID)
        if not name:
            return self._reject_registration(log, ErrorReason.INVALID_REQUEST)
        if len(name) > PRODUCT_NAME_MAX_LENGTH:
            return self._reject_registration(log, ErrorReason.INVALID_REQUEST)

        for attempt in range(1, self._max_attempts + 1):
            existing = (p.name for p in self._store.list())
            resolved = resolve_unique_name(name, existing, self._name_marker)
            if len(resolved) > PRODUCT_NAME_MAX_LENGTH:
                return self._reject_registration(log, ErrorReason.INVALID_REQUEST)
            try:
                product = self._store.add(
                    ProductDTO(
                        name=resolved,
                        in_stock_quantity=request.in_stock_quantity,
                        reserved_quantity=0,
                    )
                )
            except DuplicateProductName:
                log.warning("product.name_race_lost", name=resolved, attempt=attempt)
                continue

            if resolved != name:
                log.info("product.name_resolved", name=resolved)
            log.info("product.registered", product_id=product.id, name=product.name)
            return CreationResult.created(product)

        log.error("product.registration_gave_up", attempts=self._max_attempts)
        raise ProductRegistrationConflict(
            f"Could not register '{name}' after {self._max_attempts} attempts."
        )

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_product(self, id: int) -> Optional[ProductDTO]:
        return self._store.get(id)

    def list_in_stock(self, name_contains: Optional[str] = None) -> List[ProductDTO]:
        """Products with stock left beyond their reservations.

        ``name_contains`` narrows the result by case-insensitive substring.
        """
        needle = (name_contains or "").strip().casefold()
        return self._store.query(
            lambda p: p.in_stock_quantity > p.reserved_quantity
            and needle in p.name.casefold()
        )

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _change_quantity(
        self, operation: QuantityOperation, request: QuantityChangeRequest
    ) -> OperationResult:
        """Validate, apply and persist one quantity operation.

        Raises:
            QuantityUpdateConflict: every attempt lost the version race.
        """
        log = logger.bind(
            operation=operation.name,
            product_id=request.product_id,
            quantity=request.quantity,
        )

        for attempt in range(1, self._max_attempts + 1):
            reason, product = self._validate(operation, request)
            if reason is not None:
                log.info("warehouse.operation_rejected", reason=reason.value)
                return OperationResult.fail(reason)

            try:
                stored = self._store.update_quantities(
                    operation.apply(product, request.quantity)
                )
            except ConcurrentUpdateError:
                log.warning("warehouse.version_conflict", attempt=attempt)
                continue

            log.info(
                "warehouse.operation_applied",
                in_stock_quantity=stored.in_stock_quantity,
                reserved_quantity=stored.reserved_quantity,
            )
            return OperationResult.ok()

        log.error("warehouse.operation_gave_up", attempts=self._max_attempts)
        raise QuantityUpdateConflict(
            f"{operation.name} on product {request.product_id} conflicted "
            f"{self._max_attempts} times."
        )

    def _validate(
        self, operation: QuantityOperation, request: QuantityChangeRequest
    ) -> Tuple[Optional[ErrorReason], Optional[ProductDTO]]:
        """Run the guard chain; return the first failure or the fetched product."""
        if request.quantity < 0:
            return ErrorReason.QUANTITY_INVALID, None

        product = self._store.get(request.product_id)
        if product is None:
            return ErrorReason.INVALID_REQUEST, None

        if operation.exceeds_capacity(product, request.quantity):
            return ErrorReason.NOT_ENOUGH_QUANTITY, product

        if operation.apply(product, request.quantity).in_stock_quantity > MAX_QUANTITY:
            return ErrorReason.QUANTITY_INVALID, product

        return None, product

    @staticmethod
    def _reject_registration(log, reason: ErrorReason) -> CreationResult:
        log.info("product.registration_rejected", reason=reason.value)
        return CreationResult.fail(reason)
