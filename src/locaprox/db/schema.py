"""Database schema statements."""

from __future__ import annotations

from dataclasses import dataclass

TABLE_STATEMENTS: list[str] = [
    """
    CREATE TABLE IF NOT EXISTS clients (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        name TEXT NOT NULL,
        phone TEXT,
        document TEXT,
        notes TEXT,
        created_at TEXT NOT NULL,
        updated_at TEXT NOT NULL
    );
    """,
    """
    CREATE TABLE IF NOT EXISTS equipments (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        name TEXT NOT NULL,
        category TEXT,
        rental_mode TEXT NOT NULL DEFAULT 'daily',
        daily_rate REAL NOT NULL,
        equipment_value REAL NOT NULL DEFAULT 0,
        stock INTEGER NOT NULL DEFAULT 0,
        notes TEXT,
        created_at TEXT NOT NULL,
        updated_at TEXT NOT NULL
    );
    """,
    """
    CREATE TABLE IF NOT EXISTS rentals (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        client_id INTEGER NOT NULL,
        start_date TEXT NOT NULL,
        start_time TEXT NOT NULL DEFAULT '08:00',
        end_date TEXT NOT NULL,
        end_time TEXT NOT NULL DEFAULT '18:00',
        delivery_mode TEXT NOT NULL DEFAULT 'pickup',
        delivery_address TEXT,
        freight_value REAL NOT NULL DEFAULT 0,
        currency TEXT NOT NULL DEFAULT 'BRL',
        subtotal REAL NOT NULL,
        total REAL NOT NULL,
        status TEXT NOT NULL DEFAULT 'in_progress',
        quote_valid_until TEXT,
        notes TEXT,
        created_at TEXT NOT NULL,
        updated_at TEXT NOT NULL,
        FOREIGN KEY (client_id) REFERENCES clients(id) ON DELETE RESTRICT
    );
    """,
    """
    CREATE TABLE IF NOT EXISTS rental_items (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        rental_id INTEGER NOT NULL,
        equipment_id INTEGER NOT NULL,
        quantity INTEGER NOT NULL,
        unit_price REAL NOT NULL,
        line_total REAL NOT NULL,
        equipment_name_snapshot TEXT,
        FOREIGN KEY (rental_id) REFERENCES rentals(id) ON DELETE CASCADE,
        FOREIGN KEY (equipment_id) REFERENCES equipments(id) ON DELETE RESTRICT
    );
    """,
    """
    CREATE TABLE IF NOT EXISTS app_settings (
        key TEXT PRIMARY KEY,
        value TEXT NOT NULL
    );
    """,
]


@dataclass(frozen=True)
class ColumnMigration:
    """Additive column applied on every startup."""

    table: str
    column: str
    definition: str

    @property
    def statement(self) -> str:
        return f"ALTER TABLE {self.table} ADD COLUMN {self.column} {self.definition};"


COLUMN_MIGRATIONS: list[ColumnMigration] = [
    ColumnMigration("equipments", "rental_mode", "TEXT NOT NULL DEFAULT 'daily'"),
    ColumnMigration("equipments", "equipment_value", "REAL NOT NULL DEFAULT 0"),
    ColumnMigration("rentals", "start_time", "TEXT NOT NULL DEFAULT '08:00'"),
    ColumnMigration("rentals", "end_time", "TEXT NOT NULL DEFAULT '18:00'"),
    ColumnMigration("rentals", "delivery_mode", "TEXT NOT NULL DEFAULT 'pickup'"),
    ColumnMigration("rentals", "delivery_address", "TEXT"),
    ColumnMigration("rentals", "freight_value", "REAL NOT NULL DEFAULT 0"),
    ColumnMigration("rentals", "currency", "TEXT NOT NULL DEFAULT 'BRL'"),
    ColumnMigration("rentals", "quote_valid_until", "TEXT"),
    ColumnMigration("rental_items", "equipment_name_snapshot", "TEXT"),
]

DEFAULT_SETTINGS: dict[str, str] = {
    "currency": "BRL",
    "company_name": "",
    "company_logo_uri": "",
    "rental_start_reminder": "1d",
    "rental_end_reminder": "1h",
    "weekly_factor": "6",
    "fortnightly_factor": "12",
    "monthly_factor": "24",
}

INDEX_STATEMENTS: list[str] = [
    "CREATE INDEX IF NOT EXISTS idx_rentals_client_id ON rentals(client_id);",
    "CREATE INDEX IF NOT EXISTS idx_rental_items_rental_id ON rental_items(rental_id);",
    "CREATE INDEX IF NOT EXISTS idx_rental_items_equipment_id "
    "ON rental_items(equipment_id);",
]


def schema_statements() -> list[str]:
    """Return every startup statement in execution order."""
    settings_statements = [
        f"INSERT OR IGNORE INTO app_settings (key, value) VALUES ('{key}', '{value}');"
        for key, value in DEFAULT_SETTINGS.items()
    ]
    return [
        *TABLE_STATEMENTS,
        *(migration.statement for migration in COLUMN_MIGRATIONS),
        *settings_statements,
        *INDEX_STATEMENTS,
    ]
