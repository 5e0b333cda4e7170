"""Application entry point."""

from __future__ import annotations

import sqlite3
from dataclasses import dataclass
from datetime import date
from pathlib import Path
from typing import Callable

from locaprox.config import AppConfig
from locaprox.db.connection import Database
from locaprox.db.migrations import init_database
from locaprox.logging_config import configure_logging, get_logger
from locaprox.paths import get_config_path, get_db_path
from locaprox.repositories import ClientRepo, EquipmentRepo
from locaprox.services.pricing_service import PricingRulesService
from locaprox.services.rental_service import RentalService
from locaprox.services.settings_service import SettingsService
from locaprox.utils.config_store import load_runtime_settings


@dataclass(frozen=True)
class AppServices:
    """Shared repositories and services for dependency injection."""

    connection: sqlite3.Connection
    client_repo: ClientRepo
    equipment_repo: EquipmentRepo
    rental_service: RentalService
    settings_service: SettingsService
    pricing_service: PricingRulesService


def build_services(
    connection: sqlite3.Connection,
    *,
    today: Callable[[], date] = date.today,
) -> AppServices:
    settings_service = SettingsService(connection)
    return AppServices(
        connection=connection,
        client_repo=ClientRepo(connection),
        equipment_repo=EquipmentRepo(connection),
        rental_service=RentalService(
            connection, settings_service=settings_service, today=today
        ),
        settings_service=settings_service,
        pricing_service=PricingRulesService(),
    )


def main() -> int:
    """Open the LocaProx store, bring the schema up to date and sweep quotes."""
    runtime = load_runtime_settings(get_config_path())
    configure_logging(runtime.log_level)
    config = AppConfig()
    logger = get_logger(__name__)
    logger.info("Starting %s", config.app_name)

    database_path = Path(runtime.database_path) if runtime.database_path else get_db_path()
    database = Database(database_path)
    try:
        init_database(database)
        services = build_services(database.connection)
        rentals = services.rental_service.list_rentals()
        expired = sum(1 for rental in rentals if rental.quote_expired)
        logger.info(
            "Dashboard: %s clients, %s equipments, %s rentals (%s quotes expired)",
            services.client_repo.count(),
            services.equipment_repo.count(),
            len(rentals),
            expired,
        )
    finally:
        database.close()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
