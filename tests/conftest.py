"""Shared test fixtures."""

from datetime import datetime, timedelta, timezone

import pytest

from carverse.application.dtos.car import Car, CarDraft
from carverse.domain.value_objects.car_id import new_car_id

BASE_TIME = datetime(2025, 1, 1, tzinfo=timezone.utc)


def _draft_fields(**overrides) -> dict:
    fields = {
        "title": "Test Car",
        "brand": "TESTBRAND",
        "model": "T1",
        "body_type": "SUV",
        "fuel_type": "Petrol",
        "transmission": "Manual",
    }
    fields.update(overrides)
    return fields


@pytest.fixture
def make_draft():
    """Build a CarDraft with sensible defaults."""

    def _make(**overrides) -> CarDraft:
        return CarDraft(**_draft_fields(**overrides))

    return _make


@pytest.fixture
def make_car():
    """Build a stored Car; `age` orders createdAt (higher is older)."""

    def _make(age: int = 0, **overrides) -> Car:
        created_at = BASE_TIME - timedelta(days=age)
        fields = _draft_fields(**overrides)
        fields.setdefault("id", new_car_id())
        fields.setdefault("created_at", created_at)
        fields.setdefault("updated_at", created_at)
        return Car(**fields)

    return _make
