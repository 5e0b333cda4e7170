"""Repository for the ``app_settings`` key/value table."""

from __future__ import annotations

import sqlite3
from typing import Iterable

from locaprox.db.connection import transaction
from locaprox.logging_config import get_logger


class SettingsRepository:
    """Read and upsert raw settings values."""

    def __init__(self, connection: sqlite3.Connection) -> None:
        self._connection = connection
        self._connection.row_factory = sqlite3.Row
        self._logger = get_logger(self.__class__.__name__)

    def get_values(self, keys: Iterable[str]) -> dict[str, str]:
        keys = list(keys)
        if not keys:
            return {}
        placeholders = ", ".join(["?"] * len(keys))
        try:
            rows = self._connection.execute(
                f"SELECT key, value FROM app_settings WHERE key IN ({placeholders})",
                keys,
            ).fetchall()
        except Exception:
            self._logger.exception("Failed to load settings")
            raise
        return {row["key"]: row["value"] for row in rows}

    def upsert_many(self, values: Iterable[tuple[str, str]]) -> None:
        try:
            with transaction(self._connection):
                for key, value in values:
                    self._connection.execute(
                        """
                        INSERT INTO app_settings (key, value)
                        VALUES (?, ?)
                        ON CONFLICT(key) DO UPDATE SET value = excluded.value
                        """,
                        (key, value),
                    )
        except Exception:
            self._logger.exception("Failed to save settings")
            raise
