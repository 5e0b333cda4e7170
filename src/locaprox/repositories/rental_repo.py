"""Repository helpers for rental persistence."""

from __future__ import annotations

import sqlite3
from collections import defaultdict
from datetime import datetime
from typing import Any, Iterable, Optional

from locaprox.db.connection import transaction
from locaprox.domain.models import (
    Rental,
    RentalDetailItem,
    RentalItem,
    RentalListItem,
    RentalStatus,
)
from locaprox.logging_config import get_logger
from locaprox.repositories.mappers import (
    normalize_rental_status,
    rental_detail_item_from_row,
    rental_from_row,
    rental_item_from_row,
    rental_list_item_from_row,
)
from locaprox.services.errors import PersistenceError

RENTAL_COLUMNS = (
    "client_id",
    "start_date",
    "start_time",
    "end_date",
    "end_time",
    "delivery_mode",
    "delivery_address",
    "freight_value",
    "currency",
    "subtotal",
    "total",
    "status",
    "quote_valid_until",
    "notes",
)

ITEM_COLUMNS = (
    "equipment_id",
    "quantity",
    "unit_price",
    "line_total",
    "equipment_name_snapshot",
)


def _now_iso() -> str:
    return datetime.now().isoformat(timespec="seconds")


def _insert_items(
    conn: sqlite3.Connection,
    rental_id: int,
    items: Iterable[dict[str, Any]],
) -> None:
    for item in items:
        conn.execute(
            """
            INSERT INTO rental_items (
                rental_id,
                equipment_id,
                quantity,
                unit_price,
                line_total,
                equipment_name_snapshot
            )
            VALUES (?, ?, ?, ?, ?, ?)
            """,
            (rental_id, *(item[column] for column in ITEM_COLUMNS)),
        )


def create_rental(
    record: dict[str, Any],
    items: Iterable[dict[str, Any]],
    *,
    connection: sqlite3.Connection,
) -> int:
    """Insert a rental header and its items in a single transaction."""
    logger = get_logger("rental_repo")
    created_at = _now_iso()
    try:
        with transaction(connection):
            cursor = connection.execute(
                """
                INSERT INTO rentals (
                    client_id,
                    start_date,
                    start_time,
                    end_date,
                    end_time,
                    delivery_mode,
                    delivery_address,
                    freight_value,
                    currency,
                    subtotal,
                    total,
                    status,
                    quote_valid_until,
                    notes,
                    created_at,
                    updated_at
                )
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    *(record[column] for column in RENTAL_COLUMNS),
                    created_at,
                    created_at,
                ),
            )
            rental_id = cursor.lastrowid
            if not rental_id:
                raise PersistenceError("Não foi possível criar a locação.")
            _insert_items(connection, rental_id, items)
    except Exception:
        logger.exception("Failed to create rental")
        raise
    return int(rental_id)


def update_rental(
    rental_id: int,
    record: dict[str, Any],
    items: Iterable[dict[str, Any]],
    *,
    connection: sqlite3.Connection,
) -> bool:
    """Overwrite rental data and replace all of its items in a transaction.

    Returns ``False`` without touching any row when the rental does not exist.
    """
    logger = get_logger("rental_repo")
    updated_at = _now_iso()
    try:
        with transaction(connection):
            cursor = connection.execute(
                """
                UPDATE rentals
                SET
                    client_id = ?,
                    start_date = ?,
                    start_time = ?,
                    end_date = ?,
                    end_time = ?,
                    delivery_mode = ?,
                    delivery_address = ?,
                    freight_value = ?,
                    currency = ?,
                    subtotal = ?,
                    total = ?,
                    status = ?,
                    quote_valid_until = ?,
                    notes = ?,
                    updated_at = ?
                WHERE id = ?
                """,
                (
                    *(record[column] for column in RENTAL_COLUMNS),
                    updated_at,
                    rental_id,
                ),
            )
            if cursor.rowcount == 0:
                return False
            connection.execute(
                "DELETE FROM rental_items WHERE rental_id = ?",
                (rental_id,),
            )
            _insert_items(connection, rental_id, items)
    except Exception:
        logger.exception("Failed to update rental id=%s", rental_id)
        raise
    return True


def set_status(
    rental_id: int,
    status: str | RentalStatus,
    *,
    connection: sqlite3.Connection,
) -> bool:
    """Update rental status."""
    logger = get_logger("rental_repo")
    updated_at = _now_iso()
    rental_status = normalize_rental_status(status)
    try:
        with transaction(connection):
            cursor = connection.execute(
                """
                UPDATE rentals
                SET status = ?,
                    updated_at = ?
                WHERE id = ?
                """,
                (rental_status.value, updated_at, rental_id),
            )
    except Exception:
        logger.exception("Failed to update rental status id=%s", rental_id)
        raise
    return cursor.rowcount > 0


def get_rental_with_items(
    rental_id: int,
    *,
    connection: sqlite3.Connection,
) -> Optional[tuple[Rental, list[RentalDetailItem]]]:
    """Fetch a rental and its items, each joined with the current equipment name."""
    logger = get_logger("rental_repo")
    try:
        rental_row = connection.execute(
            "SELECT * FROM rentals WHERE id = ?",
            (rental_id,),
        ).fetchone()
        if not rental_row:
            return None
        item_rows = connection.execute(
            """
            SELECT
                ri.id,
                ri.equipment_id,
                e.name AS equipment_name,
                ri.equipment_name_snapshot,
                ri.quantity,
                ri.unit_price,
                ri.line_total
            FROM rental_items ri
            INNER JOIN equipments e ON e.id = ri.equipment_id
            WHERE ri.rental_id = ?
            ORDER BY ri.id ASC
            """,
            (rental_id,),
        ).fetchall()
    except Exception:
        logger.exception("Failed to fetch rental id=%s", rental_id)
        raise
    return rental_from_row(rental_row), [
        rental_detail_item_from_row(row) for row in item_rows
    ]


def list_rental_items(
    rental_id: int,
    *,
    connection: sqlite3.Connection,
) -> list[RentalItem]:
    """Return the stored item rows of a rental in insertion order."""
    logger = get_logger("rental_repo")
    try:
        rows = connection.execute(
            "SELECT * FROM rental_items WHERE rental_id = ? ORDER BY id",
            (rental_id,),
        ).fetchall()
    except Exception:
        logger.exception("Failed to list items for rental id=%s", rental_id)
        raise
    return [rental_item_from_row(row) for row in rows]


def _snapshot_names(connection: sqlite3.Connection) -> dict[int, tuple[str, ...]]:
    rows = connection.execute(
        """
        SELECT
            ri.rental_id,
            COALESCE(ri.equipment_name_snapshot, e.name) AS equipment_name
        FROM rental_items ri
        LEFT JOIN equipments e ON e.id = ri.equipment_id
        ORDER BY ri.rental_id, ri.id
        """
    ).fetchall()
    grouped: dict[int, list[str]] = defaultdict(list)
    for row in rows:
        if row["equipment_name"]:
            grouped[int(row["rental_id"])].append(row["equipment_name"])
    return {rental_id: tuple(names) for rental_id, names in grouped.items()}


def list_rentals(*, connection: sqlite3.Connection) -> list[RentalListItem]:
    """List every rental newest first with client name and item summary.

    Equipment names come from the snapshot stored on each item, so renaming
    an equipment does not change what older rentals show here.
    """
    logger = get_logger("rental_repo")
    try:
        rows = connection.execute(
            """
            SELECT
                r.*,
                c.name AS client_name,
                COUNT(ri.id) AS item_count
            FROM rentals r
            INNER JOIN clients c ON c.id = r.client_id
            LEFT JOIN rental_items ri ON ri.rental_id = r.id
            GROUP BY r.id
            ORDER BY r.created_at DESC, r.id DESC
            """
        ).fetchall()
        names = _snapshot_names(connection)
    except Exception:
        logger.exception("Failed to list rentals")
        raise
    return [
        rental_list_item_from_row(row, equipment_names=names.get(int(row["id"])))
        for row in rows
    ]


def count_rentals(*, connection: sqlite3.Connection) -> int:
    row = connection.execute("SELECT COUNT(*) AS total FROM rentals").fetchone()
    return int(row["total"]) if row else 0
