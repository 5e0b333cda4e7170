"""Application configuration."""

from __future__ import annotations

from dataclasses import dataclass

from locaprox.version import __app_name__, __company__

APP_NAME = __app_name__
APP_DATA_DIRNAME = "LocaProx"
APP_HOME_ENV = "LOCAPROX_HOME"
DB_FILENAME = "locaprox.db"
LOGS_DIRNAME = "logs"
LOG_FILENAME = "app.log"
LOG_MAX_BYTES = 1_000_000
LOG_BACKUP_COUNT = 3
CONFIG_FILENAME = "config.json"

DATE_FORMAT = "%d/%m/%Y"
TIME_FORMAT = "%H:%M"
DEFAULT_START_TIME = "08:00"
DEFAULT_END_TIME = "18:00"


@dataclass(frozen=True)
class AppConfig:
    """Static configuration values for LocaProx."""

    app_name: str = APP_NAME
    organization_name: str = __company__
    organization_domain: str = "locaprox.local"
