"""Django ORM implementation of the product store.

Satisfies ``IProductStore`` using Django's QuerySet API and hands out
``ProductDTO`` snapshots, never model instances.  Missing products are
reported as ``None``; the service decides what that means for a request.

Quantity writes are a single conditional ``UPDATE`` on ``(id, version)``,
so two writers that read the same version cannot both succeed, on any
database backend and without holding row locks across the request.
"""

from __future__ import annotations

from typing import List, Optional

import structlog
from django.db import IntegrityError, transaction
from django.db.models import F
from django.utils import timezone

from modules.warehouse.dtos import ProductDTO
from modules.warehouse.exceptions import ConcurrentUpdateError, DuplicateProductName
from modules.warehouse.models import Product
from modules.warehouse.repositories.interfaces import IProductStore

logger = structlog.get_logger(__name__)


class ProductDjangoStore(IProductStore):
    """Concrete product store backed by Django ORM."""

    def list(self) -> List[ProductDTO]:
        return [ProductDTO.from_entity(p) for p in Product.objects.all()]

    def get(self, id: int) -> Optional[ProductDTO]:
        """Returns ``None`` for unknown ids, including ids outside the column range."""
        try:
            product = Product.objects.filter(id=id).first()
        except (ValueError, OverflowError):
            return None
        return ProductDTO.from_entity(product) if product else None

    def update_quantities(self, product: ProductDTO) -> ProductDTO:
        updated = Product.objects.filter(id=product.id, version=product.version).update(
            in_stock_quantity=product.in_stock_quantity,
            reserved_quantity=product.reserved_quantity,
            version=F("version") + 1,
            updated_at=timezone.now(),
        )
        if not updated:
            raise ConcurrentUpdateError(
                f"Product {product.id} changed since version {product.version} was read."
            )

        stored = product.model_copy(update={"version": product.version + 1})
        logger.info(
            "product.quantities_saved",
            product_id=stored.id,
            in_stock_quantity=stored.in_stock_quantity,
            reserved_quantity=stored.reserved_quantity,
            version=stored.version,
        )
        return stored

    def add(self, product: ProductDTO) -> ProductDTO:
        try:
            with transaction.atomic():
                entity = Product.objects.create(
                    name=product.name,
                    in_stock_quantity=product.in_stock_quantity,
                    reserved_quantity=product.reserved_quantity,
                )
        except IntegrityError as exc:
            if Product.objects.filter(name=product.name).exists():
                raise DuplicateProductName(
                    f"Product name '{product.name}' is already taken."
                ) from exc
            raise
        return ProductDTO.from_entity(entity)
