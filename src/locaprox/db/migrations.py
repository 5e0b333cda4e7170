"""Schema bootstrap and additive migrations."""

from __future__ import annotations

import sqlite3

from locaprox.db.connection import Database, transaction
from locaprox.db.schema import schema_statements
from locaprox.logging_config import get_logger

logger = get_logger(__name__)


class DatabaseInitError(RuntimeError):
    """Raised when the schema cannot be applied, even after recreating the store."""

    def __init__(self, initial_error: BaseException, recovery_error: BaseException) -> None:
        self.initial_error = initial_error
        self.recovery_error = recovery_error
        super().__init__(
            "Falha ao inicializar o banco de dados. "
            f'erro_inicial="{describe_error(initial_error)}" '
            f'erro_recovery="{describe_error(recovery_error)}"'
        )


def describe_error(error: BaseException) -> str:
    """Render an exception as a single line, including SQLite codes when known."""
    parts: list[str] = []
    message = str(error)
    if message:
        parts.append(message)
    error_name = getattr(error, "sqlite_errorname", None)
    if error_name:
        parts.append(f"sqlite={error_name}")
    if not parts:
        parts.append(error.__class__.__name__)
    return " | ".join(parts)


def is_duplicate_column_error(error: BaseException) -> bool:
    return "duplicate column name" in describe_error(error).lower()


def apply_schema(connection: sqlite3.Connection) -> None:
    """Create tables, apply column migrations, seed settings and build indexes.

    Safe to run on every startup. Column migrations that hit an existing
    column are skipped; any other failure propagates.
    """
    connection.execute("PRAGMA foreign_keys = ON;")
    with transaction(connection):
        for statement in schema_statements():
            try:
                connection.execute(statement)
            except sqlite3.OperationalError as exc:
                if not is_duplicate_column_error(exc):
                    raise


def init_database(database: Database) -> None:
    """Apply the schema, recreating the store once if the first attempt fails."""
    try:
        apply_schema(database.connection)
    except Exception as first_error:
        logger.error("Initial schema apply failed: %s", describe_error(first_error))
        try:
            database.reset()
            apply_schema(database.connection)
        except Exception as recovery_error:
            logger.error("Database recovery failed: %s", describe_error(recovery_error))
            raise DatabaseInitError(first_error, recovery_error) from recovery_error
        logger.warning("Database was recreated after migration failure.")
