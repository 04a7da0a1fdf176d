"""Warehouse API views.

Exposes ``WarehouseService`` over HTTP.  Rejected business requests are
ordinary ``200`` responses with ``success: false``; malformed bodies are
``400``; exhausted concurrency retries are ``409``.  The view never
swallows generic exceptions.
"""

from __future__ import annotations

from typing import Any, Callable, Dict

from django.conf import settings
from django.http import JsonResponse
from drf_spectacular.utils import extend_schema, inline_serializer
from pydantic import ValidationError as PydanticValidationError
from rest_framework import serializers, status
from rest_framework.decorators import action
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import GenericViewSet

from modules.warehouse.dtos import (
    OperationResult,
    QuantityChangeRequest,
    RegisterProductRequest,
)
from modules.warehouse.exceptions import (
    ProductRegistrationConflict,
    QuantityUpdateConflict,
)
from modules.warehouse.repositories.django_repository import ProductDjangoStore
from modules.warehouse.serializers import (
    CreationResultSerializer,
    OperationResultSerializer,
    ProductSerializer,
)
from modules.warehouse.services import WarehouseService

QUANTITY_REQUEST_SCHEMA = inline_serializer(
    name="QuantityChangeRequest",
    fields={"id": serializers.IntegerField(), "quantity": serializers.IntegerField()},
)

ADD_PRODUCT_SCHEMA = inline_serializer(
    name="AddProductRequest",
    fields={
        "name": serializers.CharField(),
        "inStockQuantity": serializers.IntegerField(),
    },
)


def _body(request: Request) -> Dict[str, Any]:
    return request.data if isinstance(request.data, dict) else {}


class WarehouseViewSet(GenericViewSet):
    """Product lookups and the Order / Ship / Restock / Add commands.

    Uses ``WarehouseService`` with ``ProductDjangoStore`` (DIP).
    """

    serializer_class = ProductSerializer
    lookup_value_regex = r"[0-9]+"

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = WarehouseService(
            store=ProductDjangoStore(),
            max_attempts=settings.WAREHOUSE_MAX_UPDATE_ATTEMPTS,
            name_marker=settings.WAREHOUSE_DUPLICATE_NAME_MARKER,
        )

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def list(self, request: Request) -> Response:
        """GET /api/warehouse[?name=]: products with unreserved stock."""
        products = self._service.list_in_stock(request.query_params.get("name"))
        return Response(ProductSerializer(products, many=True).data)

    def retrieve(self, request: Request, pk: str | None = None) -> JsonResponse:
        """GET /api/warehouse/{pk}: the product, or JSON ``null``."""
        product = self._service.get_product(int(pk)) if pk is not None else None
        # DRF renders a ``None`` payload as an empty body; clients expect ``null``.
        data = ProductSerializer(product).data if product else None
        return JsonResponse(data, safe=False)

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    @extend_schema(request=QUANTITY_REQUEST_SCHEMA, responses=OperationResultSerializer)
    @action(detail=False, methods=["post"], url_path="order")
    def order(self, request: Request) -> Response:
        """POST /api/warehouse/order"""
        return self._quantity_command(request, self._service.order)

    @extend_schema(request=QUANTITY_REQUEST_SCHEMA, responses=OperationResultSerializer)
    @action(detail=False, methods=["post"], url_path="ship")
    def ship(self, request: Request) -> Response:
        """POST /api/warehouse/ship"""
        return self._quantity_command(request, self._service.ship)

    @extend_schema(request=QUANTITY_REQUEST_SCHEMA, responses=OperationResultSerializer)
    @action(detail=False, methods=["post"], url_path="restock")
    def restock(self, request: Request) -> Response:
        """POST /api/warehouse/restock"""
        return self._quantity_command(request, self._service.restock)

    @extend_schema(request=ADD_PRODUCT_SCHEMA, responses=CreationResultSerializer)
    @action(detail=False, methods=["post"], url_path="add")
    def add(self, request: Request) -> Response:
        """POST /api/warehouse/add

        ``id`` and ``reservedQuantity`` in the body are ignored.
        """
        data = _body(request)
        try:
            dto = RegisterProductRequest(
                name=data.get("name"),
                in_stock_quantity=data.get("inStockQuantity", 0),
            )
        except PydanticValidationError as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)

        try:
            result = self._service.register_product(dto)
        except ProductRegistrationConflict as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_409_CONFLICT)

        return Response(CreationResultSerializer(result).data)

    def _quantity_command(
        self,
        request: Request,
        command: Callable[[QuantityChangeRequest], OperationResult],
    ) -> Response:
        data = _body(request)
        try:
            dto = QuantityChangeRequest(
                product_id=data.get("id"),
                quantity=data.get("quantity"),
            )
        except PydanticValidationError as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)

        try:
            result = command(dto)
        except QuantityUpdateConflict as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_409_CONFLICT)

        return Response(OperationResultSerializer(result).data)
