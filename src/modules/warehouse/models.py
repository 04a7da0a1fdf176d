"""Product model backing the ORM product store.

Business rules implemented at the database level:
- Product names are unique (UNIQUE index on ``name``).
- In-stock quantity cannot be negative (check constraint).

``version`` is the optimistic-concurrency token: every quantity write
goes through ``UPDATE ... WHERE version = <read version>`` and bumps it.
"""

from __future__ import annotations

import structlog
from django.db import models

from modules.core.models import TimeStampedModel
from modules.warehouse.constants import PRODUCT_NAME_MAX_LENGTH

logger = structlog.get_logger(__name__)


class Product(TimeStampedModel):
    name = models.CharField(max_length=PRODUCT_NAME_MAX_LENGTH, unique=True)
    in_stock_quantity = models.BigIntegerField(default=0)
    reserved_quantity = models.BigIntegerField(default=0)
    version = models.PositiveIntegerField(default=0)

    class Meta:
        db_table = "warehouse_products"
        ordering = ["id"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(in_stock_quantity__gte=0),
                name="warehouse_products_in_stock_non_negative",
            ),
        ]

    def save(self, *args, **kwargs) -> None:
        is_new = self._state.adding
        super().save(*args, **kwargs)
        if is_new:
            logger.info(
                "product_created",
                product_id=self.id,
                name=self.name,
                in_stock_quantity=self.in_stock_quantity,
            )

    def __str__(self) -> str:
        return f"{self.name} ({self.in_stock_quantity} in stock, {self.reserved_quantity} reserved)"
