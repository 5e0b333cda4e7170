"""Shared JSON configuration storage."""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional


@dataclass(frozen=True)
class RuntimeSettings:
    """Startup settings read from ``config.json``."""

    database_path: Optional[str] = None
    log_level: str = "INFO"


def load_config_data(config_path: Path) -> dict[str, Any]:
    """Load configuration JSON data from disk."""
    if not config_path.exists():
        return {}
    try:
        data = json.loads(config_path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError):
        return {}
    if isinstance(data, dict):
        return data
    return {}


def save_config_data(config_path: Path, data: dict[str, Any]) -> None:
    """Persist configuration JSON data to disk."""
    config_path.write_text(
        json.dumps(data, ensure_ascii=False, indent=2), encoding="utf-8"
    )


def load_runtime_settings(config_path: Path) -> RuntimeSettings:
    """Load runtime settings, ignoring unknown or malformed values."""
    data = load_config_data(config_path)
    database_path = data.get("database_path")
    if not isinstance(database_path, str) or not database_path.strip():
        database_path = None
    log_level = data.get("log_level")
    if not isinstance(log_level, str) or not log_level.strip():
        log_level = RuntimeSettings.log_level
    return RuntimeSettings(database_path=database_path, log_level=log_level.strip())


def save_runtime_settings(config_path: Path, settings: RuntimeSettings) -> None:
    """Persist runtime settings, keeping any other keys in the file."""
    payload = load_config_data(config_path)
    payload["database_path"] = settings.database_path
    payload["log_level"] = settings.log_level
    save_config_data(config_path, payload)
