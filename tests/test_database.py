"""Tests for the database handle and schema initialization."""

from __future__ import annotations

import sqlite3

import pytest

from locaprox.db.connection import Database, get_connection
from locaprox.db.migrations import DatabaseInitError, apply_schema, init_database


def _tables(connection):
    rows = connection.execute(
        "SELECT name FROM sqlite_master WHERE type = 'table'"
    ).fetchall()
    return {row["name"] for row in rows}


def _columns(connection, table):
    return {row["name"] for row in connection.execute(f"PRAGMA table_info({table})")}


class TestDatabase:
    def test_connection_is_opened_lazily_and_reused(self, tmp_path):
        database = Database(tmp_path / "lazy.db")
        assert database.is_open is False

        first = database.connection
        assert database.is_open is True
        assert database.connection is first
        database.close()
        assert database.is_open is False

    def test_failed_open_is_retried(self, tmp_path):
        calls = []

        def flaky_connect(path):
            calls.append(path)
            if len(calls) == 1:
                raise sqlite3.OperationalError("unable to open database file")
            return get_connection(path)

        database = Database(tmp_path / "flaky.db", connect=flaky_connect)
        with pytest.raises(sqlite3.OperationalError):
            database.connection
        assert database.is_open is False

        assert database.connection is not None
        assert len(calls) == 2
        database.close()

    def test_foreign_keys_enabled(self, connection):
        assert connection.execute("PRAGMA foreign_keys").fetchone()[0] == 1

    def test_reset_removes_file(self, tmp_path):
        database = Database(tmp_path / "reset.db")
        init_database(database)
        database.reset()
        assert not (tmp_path / "reset.db").exists()
        assert database.is_open is False


class TestSchema:
    def test_tables_and_indexes(self, connection):
        assert {"clients", "equipments", "rentals", "rental_items", "app_settings"} <= _tables(
            connection
        )
        indexes = {
            row["name"]
            for row in connection.execute(
                "SELECT name FROM sqlite_master WHERE type = 'index'"
            )
        }
        assert {
            "idx_rentals_client_id",
            "idx_rental_items_rental_id",
            "idx_rental_items_equipment_id",
        } <= indexes

    def test_apply_is_idempotent(self, database, services):
        services.client_repo.create(name="Cliente")
        services.settings_service.save_settings(
            services.settings_service.get_settings()
        )
        init_database(database)
        apply_schema(database.connection)
        assert services.client_repo.count() == 1

    def test_settings_seed_does_not_overwrite(self, connection):
        with connection:
            connection.execute(
                "UPDATE app_settings SET value = 'USD' WHERE key = 'currency'"
            )
        apply_schema(connection)
        row = connection.execute(
            "SELECT value FROM app_settings WHERE key = 'currency'"
        ).fetchone()
        assert row["value"] == "USD"

    def test_legacy_tables_gain_new_columns(self, tmp_path):
        path = tmp_path / "legacy.db"
        legacy = sqlite3.connect(path)
        legacy.executescript(
            """
            CREATE TABLE equipments (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                name TEXT NOT NULL,
                category TEXT,
                daily_rate REAL NOT NULL,
                stock INTEGER NOT NULL DEFAULT 0,
                notes TEXT,
                created_at TEXT NOT NULL,
                updated_at TEXT NOT NULL
            );
            INSERT INTO equipments (name, daily_rate, created_at, updated_at)
            VALUES ('Serra', 30, '2024-01-01T00:00:00', '2024-01-01T00:00:00');
            """
        )
        legacy.close()

        database = Database(path)
        init_database(database)
        columns = _columns(database.connection, "equipments")
        assert {"rental_mode", "equipment_value"} <= columns
        row = database.connection.execute("SELECT * FROM equipments").fetchone()
        assert row["rental_mode"] == "daily"
        assert row["equipment_value"] == 0
        database.close()


class TestRecovery:
    def test_corrupt_file_is_recreated(self, tmp_path):
        path = tmp_path / "corrupt.db"
        path.write_bytes(b"this is not a sqlite database" * 64)

        database = Database(path)
        init_database(database)
        assert "rentals" in _tables(database.connection)
        database.close()

    def test_second_failure_raises_composite_error(self, tmp_path):
        def broken_connect(path):
            raise sqlite3.OperationalError("disk I/O error")

        database = Database(tmp_path / "broken.db", connect=broken_connect)
        with pytest.raises(DatabaseInitError) as excinfo:
            init_database(database)

        message = str(excinfo.value)
        assert message.startswith("Falha ao inicializar o banco de dados.")
        assert 'erro_inicial="disk I/O error' in message
        assert 'erro_recovery="disk I/O error' in message
        assert isinstance(excinfo.value.initial_error, sqlite3.OperationalError)
