"""Shared fixtures: a product store wired to the in-memory PostgREST fake."""

import pytest

from src.services.inventory_controller import InventoryController
from src.services.product_store import ProductStore, StoreCapabilities
from tests.fakes import BASE_URL, FakePostgrest

SEED_ROWS = [
    {"product_id": "a1", "product_name": "Bolt", "quantity": 40, "cost": 0.5, "isActive": True},
    {"product_id": "a2", "product_name": "Anvil", "quantity": 3, "cost": 120.0, "isActive": True},
    {"product_id": "a3", "product_name": "Crate", "quantity": 12, "cost": 8.0, "isActive": False},
]


def make_store(backend: FakePostgrest, capabilities: StoreCapabilities | None = None) -> ProductStore:
    return ProductStore(BASE_URL, "anon-key", capabilities=capabilities, session=backend)


@pytest.fixture
def backend() -> FakePostgrest:
    return FakePostgrest(SEED_ROWS)


@pytest.fixture
def legacy_backend() -> FakePostgrest:
    """A store whose table has no isActive column and no active view."""
    rows = [{k: v for k, v in r.items() if k != "isActive"} for r in SEED_ROWS]
    return FakePostgrest(rows, has_active_column=False, has_view=False)


@pytest.fixture
def store(backend) -> ProductStore:
    return make_store(backend)


@pytest.fixture
def legacy_store(legacy_backend) -> ProductStore:
    return make_store(legacy_backend)


@pytest.fixture
def controller(store) -> InventoryController:
    return InventoryController(store)
