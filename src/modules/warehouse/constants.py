"""Warehouse domain constants.

``ErrorReason`` values are part of the public JSON contract and are
serialised verbatim (``"NotEnoughQuantity"`` etc.).
"""

from django.db import models


class ErrorReason(models.TextChoices):
    QUANTITY_INVALID = "QuantityInvalid", "Quantity invalid"
    INVALID_REQUEST = "InvalidRequest", "Invalid request"
    NOT_ENOUGH_QUANTITY = "NotEnoughQuantity", "Not enough quantity"


# Defaults for the WAREHOUSE_* settings.
MAX_UPDATE_ATTEMPTS = 5
DUPLICATE_NAME_MARKER = "x"

# Largest quantity a BigIntegerField column holds.
MAX_QUANTITY = 2**63 - 1
PRODUCT_NAME_MAX_LENGTH = 255
