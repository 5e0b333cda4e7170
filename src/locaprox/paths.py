"""Filesystem paths for LocaProx."""

from __future__ import annotations

import os
from pathlib import Path

from locaprox.config import (
    APP_DATA_DIRNAME,
    APP_HOME_ENV,
    CONFIG_FILENAME,
    DB_FILENAME,
    LOGS_DIRNAME,
)


def _ensure_dir(path: Path) -> Path:
    path.mkdir(parents=True, exist_ok=True)
    return path


def get_app_data_dir() -> Path:
    """Create and return the app data directory for the current user.

    ``LOCAPROX_HOME`` wins over the platform location, which makes it easy to
    point scripts and tests at a scratch directory.
    """
    override = os.getenv(APP_HOME_ENV)
    if override:
        return _ensure_dir(Path(override))
    appdata = os.getenv("APPDATA")
    if appdata:
        base_dir = Path(appdata)
    else:
        base_dir = Path.home() / ".locaprox"
    return _ensure_dir(base_dir / APP_DATA_DIRNAME)


def get_db_path() -> Path:
    """Return the path to the SQLite database file."""
    return get_app_data_dir() / DB_FILENAME


def get_logs_dir() -> Path:
    """Create and return the log directory inside the app data folder."""
    return _ensure_dir(get_app_data_dir() / LOGS_DIRNAME)


def get_config_path() -> Path:
    """Return the path to the JSON configuration file."""
    return get_app_data_dir() / CONFIG_FILENAME
