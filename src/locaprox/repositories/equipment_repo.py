"""Repository for equipment persistence."""

from __future__ import annotations

import sqlite3
import tempfile
from datetime import datetime
from pathlib import Path
from typing import List, Optional

from locaprox.db.connection import Database, transaction
from locaprox.db.migrations import init_database
from locaprox.domain.models import Equipment, RentalMode
from locaprox.logging_config import configure_logging, get_logger
from locaprox.repositories.mappers import equipment_from_row, normalize_rental_mode
from locaprox.services.errors import PersistenceError
from locaprox.utils.formatting import clean_text


def _now_iso() -> str:
    return datetime.now().isoformat(timespec="seconds")


class EquipmentRepo:
    """CRUD operations for rentable equipment."""

    def __init__(self, connection: sqlite3.Connection) -> None:
        self._connection = connection
        self._connection.row_factory = sqlite3.Row
        self._logger = get_logger(self.__class__.__name__)

    def create(
        self,
        name: str,
        category: Optional[str],
        rental_mode: RentalMode | str,
        daily_rate: float,
        equipment_value: float = 0.0,
        stock: int = 0,
        notes: Optional[str] = None,
    ) -> Equipment:
        created_at = _now_iso()
        name = name.strip()
        category, notes = clean_text(category), clean_text(notes)
        mode = normalize_rental_mode(rental_mode)
        try:
            with transaction(self._connection):
                cursor = self._connection.execute(
                    """
                    INSERT INTO equipments (
                        name,
                        category,
                        rental_mode,
                        daily_rate,
                        equipment_value,
                        stock,
                        notes,
                        created_at,
                        updated_at
                    )
                    VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
                    """,
                    (
                        name,
                        category,
                        mode.value,
                        float(daily_rate),
                        float(equipment_value),
                        int(stock),
                        notes,
                        created_at,
                        created_at,
                    ),
                )
                if not cursor.lastrowid:
                    raise PersistenceError("Não foi possível criar o equipamento.")
        except Exception:
            self._logger.exception("Failed to create equipment")
            raise

        return Equipment(
            id=cursor.lastrowid,
            name=name,
            category=category,
            rental_mode=mode,
            daily_rate=float(daily_rate),
            equipment_value=float(equipment_value),
            stock=int(stock),
            notes=notes,
            created_at=created_at,
            updated_at=created_at,
        )

    def update(
        self,
        equipment_id: int,
        name: str,
        category: Optional[str],
        rental_mode: RentalMode | str,
        daily_rate: float,
        equipment_value: float = 0.0,
        stock: int = 0,
        notes: Optional[str] = None,
    ) -> Optional[Equipment]:
        updated_at = _now_iso()
        try:
            with transaction(self._connection):
                cursor = self._connection.execute(
                    """
                    UPDATE equipments
                    SET
                        name = ?,
                        category = ?,
                        rental_mode = ?,
                        daily_rate = ?,
                        equipment_value = ?,
                        stock = ?,
                        notes = ?,
                        updated_at = ?
                    WHERE id = ?
                    """,
                    (
                        name.strip(),
                        clean_text(category),
                        normalize_rental_mode(rental_mode).value,
                        float(daily_rate),
                        float(equipment_value),
                        int(stock),
                        clean_text(notes),
                        updated_at,
                        equipment_id,
                    ),
                )
        except Exception:
            self._logger.exception("Failed to update equipment id=%s", equipment_id)
            raise

        if cursor.rowcount == 0:
            return None
        return self.get_by_id(equipment_id)

    def delete(self, equipment_id: int) -> bool:
        try:
            with transaction(self._connection):
                cursor = self._connection.execute(
                    "DELETE FROM equipments WHERE id = ?",
                    (equipment_id,),
                )
        except Exception:
            self._logger.exception("Failed to delete equipment id=%s", equipment_id)
            raise
        return cursor.rowcount > 0

    def list_all(self) -> List[Equipment]:
        try:
            rows = self._connection.execute(
                "SELECT * FROM equipments ORDER BY name COLLATE NOCASE ASC"
            ).fetchall()
        except Exception:
            self._logger.exception("Failed to list equipments")
            raise
        return [equipment_from_row(row) for row in rows]

    def search_by_name(self, term: str) -> List[Equipment]:
        term = term.strip()
        if not term:
            return self.list_all()
        try:
            rows = self._connection.execute(
                """
                SELECT * FROM equipments
                WHERE name LIKE ? OR category LIKE ?
                ORDER BY name COLLATE NOCASE ASC
                """,
                (f"%{term}%", f"%{term}%"),
            ).fetchall()
        except Exception:
            self._logger.exception("Failed to search equipments term=%s", term)
            raise
        return [equipment_from_row(row) for row in rows]

    def get_by_id(self, equipment_id: int) -> Optional[Equipment]:
        try:
            row = self._connection.execute(
                "SELECT * FROM equipments WHERE id = ?",
                (equipment_id,),
            ).fetchone()
        except Exception:
            self._logger.exception("Failed to get equipment id=%s", equipment_id)
            raise
        return equipment_from_row(row) if row else None

    def count(self) -> int:
        row = self._connection.execute(
            "SELECT COUNT(*) AS total FROM equipments"
        ).fetchone()
        return int(row["total"]) if row else 0


def _debug_run() -> None:
    with tempfile.TemporaryDirectory() as temp_dir:
        configure_logging(log_dir=Path(temp_dir))
        database = Database(Path(temp_dir) / "debug_equipments.db")
        init_database(database)
        try:
            repo = EquipmentRepo(database.connection)
            equipment = repo.create(
                name="Betoneira 400L",
                category="Obra",
                rental_mode=RentalMode.WEEKLY,
                daily_rate=90.0,
                equipment_value=4200.0,
                stock=3,
            )
            repo.update(
                equipment_id=equipment.id or 0,
                name="Betoneira 400L",
                category="Obra",
                rental_mode=RentalMode.WEEKLY,
                daily_rate=95.0,
                equipment_value=4200.0,
                stock=2,
            )
            repo.search_by_name("obra")
            repo.list_all()
            repo.delete(equipment.id or 0)
        finally:
            database.close()


if __name__ == "__main__":
    _debug_run()
