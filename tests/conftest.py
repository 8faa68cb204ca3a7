from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from warehouse.core.config import InventoryConfig
from warehouse.core.dependencies import get_inventory_service
from warehouse.crud.memory_store import MemoryTabularStore
from warehouse.inventory.services.inventory_service import InventoryService
from warehouse.main import create_app


DEPARTMENTS = ["HR", "Billing and Collection"]


@pytest.fixture
def config() -> InventoryConfig:
    return InventoryConfig()


@pytest.fixture
def store() -> MemoryTabularStore:
    return MemoryTabularStore.with_departments("DEPARTMENTS", DEPARTMENTS)


@pytest.fixture
def service(store: MemoryTabularStore, config: InventoryConfig) -> InventoryService:
    return InventoryService(store=store, config=config)


@pytest.fixture
def app(service: InventoryService):
    app = create_app()
    app.dependency_overrides[get_inventory_service] = lambda: service
    return app


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c
