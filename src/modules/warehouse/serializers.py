"""Warehouse DRF serializers for API output.

Render service-layer DTOs with the camelCase keys of the public JSON
contract.  Inputs are bound straight into Pydantic DTOs by the views.
"""

from __future__ import annotations

from rest_framework import serializers


class ProductSerializer(serializers.Serializer):
    id = serializers.IntegerField(read_only=True)
    name = serializers.CharField(read_only=True)
    inStockQuantity = serializers.IntegerField(source="in_stock_quantity", read_only=True)
    reservedQuantity = serializers.IntegerField(source="reserved_quantity", read_only=True)


class OperationResultSerializer(serializers.Serializer):
    success = serializers.BooleanField(read_only=True)
    errorReason = serializers.CharField(source="error_reason", read_only=True, allow_null=True)


class CreationResultSerializer(OperationResultSerializer):
    model = ProductSerializer(read_only=True, allow_null=True)
