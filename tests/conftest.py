"""Pytest fixtures backed by a migrated temporary SQLite store."""

from __future__ import annotations

from datetime import date

import pytest

from locaprox.app import AppServices, build_services
from locaprox.db.connection import Database
from locaprox.db.migrations import init_database
from locaprox.domain.models import (
    DeliveryMode,
    RentalDraftItem,
    RentalInput,
    RentalMode,
    RentalStatus,
)

TODAY = date(2025, 6, 15)


@pytest.fixture
def database(tmp_path):
    db = Database(tmp_path / "locaprox_test.db")
    init_database(db)
    yield db
    db.close()


@pytest.fixture
def connection(database):
    return database.connection


@pytest.fixture
def services(connection) -> AppServices:
    return build_services(connection, today=lambda: TODAY)


@pytest.fixture
def client(services):
    return services.client_repo.create(name="Construtora Alfa", phone="(11) 4000-1000")


@pytest.fixture
def drill(services):
    return services.equipment_repo.create(
        name="Furadeira",
        category="Ferramentas",
        rental_mode=RentalMode.DAILY,
        daily_rate=50.0,
        equipment_value=800.0,
        stock=5,
    )


@pytest.fixture
def mixer(services):
    return services.equipment_repo.create(
        name="Betoneira",
        category="Obra",
        rental_mode=RentalMode.WEEKLY,
        daily_rate=120.0,
        equipment_value=3500.0,
        stock=2,
    )


@pytest.fixture
def make_input(client, drill):
    """Build a rental input with sensible defaults; keyword overrides win."""

    def _make(**overrides) -> RentalInput:
        values = {
            "client_id": client.id,
            "start_date": "15/06/2025",
            "start_time": "08:00",
            "end_date": "20/06/2025",
            "end_time": "18:00",
            "delivery_mode": DeliveryMode.PICKUP,
            "freight_value": 0.0,
            "status": RentalStatus.IN_PROGRESS,
            "items": [
                RentalDraftItem(
                    equipment_id=drill.id,
                    equipment_name=drill.name,
                    quantity=2,
                    unit_price=50.0,
                )
            ],
        }
        values.update(overrides)
        return RentalInput(**values)

    return _make
