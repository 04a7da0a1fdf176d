import pytest

from rest_framework.test import APIClient

from modules.warehouse.dtos import ProductDTO
from modules.warehouse.repositories.memory import InMemoryProductStore
from modules.warehouse.services import WarehouseService


@pytest.fixture(autouse=True)
def _use_db(db):
    """Automatically use the test database for all tests."""


@pytest.fixture()
def api_client():
    """DRF APIClient for testing API endpoints."""
    return APIClient()


@pytest.fixture()
def memory_store():
    """In-memory store holding one product: 10 in stock, 5 reserved."""
    return InMemoryProductStore(
        [ProductDTO(name="Widget", in_stock_quantity=10, reserved_quantity=5)]
    )


@pytest.fixture()
def widget(memory_store):
    return memory_store.list()[0]


@pytest.fixture()
def service(memory_store):
    return WarehouseService(store=memory_store)
