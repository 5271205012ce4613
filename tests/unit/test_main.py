"""Unit tests for the application entrypoint."""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from fastapi import status
from fastapi.testclient import TestClient

from carverse.adapters.outbound.catalog.in_memory_car_catalog_repository import (
    InMemoryCarCatalogRepository,
)
from carverse.application.seed_coordinator import (
    SeedCoordinator,
    SeedStartResult,
    SeedState,
)
from carverse.application.use_cases.seed_catalog import SeedCatalog
from carverse.infrastructure.wiring.dependencies import get_car_catalog_repository
from carverse.main import app


@pytest.fixture
def client():
    """Create test client over the real app with an in-memory catalog."""
    repository = InMemoryCarCatalogRepository()
    app.dependency_overrides[get_car_catalog_repository] = lambda: repository
    yield TestClient(app)
    app.dependency_overrides.clear()


def test_every_request_passes_the_seed_gate(client):
    """Test the seed gate is consulted on each request without blocking it."""
    coordinator = MagicMock(spec=SeedCoordinator)
    coordinator.try_start_seed.return_value = SeedStartResult.ALREADY_RUNNING

    with patch("carverse.main.get_seed_coordinator", return_value=coordinator):
        first = client.get("/api/cars")
        second = client.get("/api/cars/brands")

    assert first.status_code == status.HTTP_200_OK
    assert second.status_code == status.HTTP_200_OK
    assert coordinator.try_start_seed.call_count == 2


def test_seed_gate_settles_when_seeding_not_permitted(client):
    """Test a production gate moves straight to done on the first request."""
    seed_catalog = AsyncMock(spec=SeedCatalog)
    coordinator = SeedCoordinator(seed_catalog, seeding_permitted=False)

    with patch("carverse.main.get_seed_coordinator", return_value=coordinator):
        response = client.get("/api/cars")

    assert response.status_code == status.HTTP_200_OK
    assert coordinator.state is SeedState.DONE
    seed_catalog.execute.assert_not_called()
