"""Database connection helpers."""

from __future__ import annotations

import sqlite3
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Optional

from locaprox.logging_config import get_logger

_SIDECAR_SUFFIXES = ("-journal", "-wal", "-shm")


def get_connection(database_path: Path) -> sqlite3.Connection:
    """Create a SQLite connection with foreign keys enabled."""
    connection = sqlite3.connect(database_path)
    connection.row_factory = sqlite3.Row
    connection.execute("PRAGMA foreign_keys = ON;")
    return connection


@contextmanager
def transaction(connection: sqlite3.Connection) -> Iterator[sqlite3.Connection]:
    """Provide a transaction scope for SQLite operations."""
    try:
        yield connection
    except Exception:
        connection.rollback()
        raise
    else:
        connection.commit()


class Database:
    """Lazily opened, shared handle to the application's SQLite store.

    The connection is created on first access and reused afterwards. When the
    open fails the handle stays empty, so the next access tries again instead
    of replaying the old failure.
    """

    def __init__(
        self,
        database_path: Path | str,
        *,
        connect: Callable[[Path], sqlite3.Connection] = get_connection,
    ) -> None:
        self._path = Path(database_path)
        self._connect = connect
        self._connection: Optional[sqlite3.Connection] = None
        self._logger = get_logger(self.__class__.__name__)

    @property
    def path(self) -> Path:
        return self._path

    @property
    def is_open(self) -> bool:
        return self._connection is not None

    @property
    def connection(self) -> sqlite3.Connection:
        if self._connection is None:
            try:
                self._connection = self._connect(self._path)
            except Exception:
                self._connection = None
                self._logger.exception("Failed to open database at %s", self._path)
                raise
            self._logger.info("Database opened at %s", self._path)
        return self._connection

    def close(self) -> None:
        """Close the connection, leaving the handle ready to reopen."""
        connection, self._connection = self._connection, None
        if connection is None:
            return
        try:
            connection.close()
        except sqlite3.Error:
            self._logger.warning("Failed to close database at %s", self._path)

    def reset(self) -> None:
        """Close the handle and delete the database file from disk."""
        self.close()
        for candidate in (
            self._path,
            *(self._path.with_name(self._path.name + s) for s in _SIDECAR_SUFFIXES),
        ):
            candidate.unlink(missing_ok=True)
        self._logger.warning("Database file removed at %s", self._path)
