"""Repository for client persistence."""

from __future__ import annotations

import sqlite3
import tempfile
from datetime import datetime
from pathlib import Path
from typing import List, Optional

from locaprox.db.connection import Database, transaction
from locaprox.db.migrations import init_database
from locaprox.domain.models import Client
from locaprox.logging_config import configure_logging, get_logger
from locaprox.repositories.mappers import client_from_row
from locaprox.services.errors import PersistenceError
from locaprox.utils.formatting import clean_text


def _now_iso() -> str:
    return datetime.now().isoformat(timespec="seconds")


class ClientRepo:
    """CRUD operations for clients.

    Deleting a client that is still referenced by a rental raises
    ``sqlite3.IntegrityError`` from the store's foreign key.
    """

    def __init__(self, connection: sqlite3.Connection) -> None:
        self._connection = connection
        self._connection.row_factory = sqlite3.Row
        self._logger = get_logger(self.__class__.__name__)

    def create(
        self,
        name: str,
        phone: Optional[str] = None,
        document: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> Client:
        created_at = _now_iso()
        name = name.strip()
        phone, document, notes = clean_text(phone), clean_text(document), clean_text(notes)
        try:
            with transaction(self._connection):
                cursor = self._connection.execute(
                    """
                    INSERT INTO clients (
                        name,
                        phone,
                        document,
                        notes,
                        created_at,
                        updated_at
                    )
                    VALUES (?, ?, ?, ?, ?, ?)
                    """,
                    (name, phone, document, notes, created_at, created_at),
                )
                if not cursor.lastrowid:
                    raise PersistenceError("Não foi possível criar o cliente.")
        except Exception:
            self._logger.exception("Failed to create client")
            raise

        return Client(
            id=cursor.lastrowid,
            name=name,
            phone=phone,
            document=document,
            notes=notes,
            created_at=created_at,
            updated_at=created_at,
        )

    def update(
        self,
        client_id: int,
        name: str,
        phone: Optional[str] = None,
        document: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> Optional[Client]:
        updated_at = _now_iso()
        try:
            with transaction(self._connection):
                cursor = self._connection.execute(
                    """
                    UPDATE clients
                    SET
                        name = ?,
                        phone = ?,
                        document = ?,
                        notes = ?,
                        updated_at = ?
                    WHERE id = ?
                    """,
                    (
                        name.strip(),
                        clean_text(phone),
                        clean_text(document),
                        clean_text(notes),
                        updated_at,
                        client_id,
                    ),
                )
        except Exception:
            self._logger.exception("Failed to update client id=%s", client_id)
            raise

        if cursor.rowcount == 0:
            return None
        return self.get_by_id(client_id)

    def delete(self, client_id: int) -> bool:
        try:
            with transaction(self._connection):
                cursor = self._connection.execute(
                    "DELETE FROM clients WHERE id = ?",
                    (client_id,),
                )
        except Exception:
            self._logger.exception("Failed to delete client id=%s", client_id)
            raise
        return cursor.rowcount > 0

    def list_all(self) -> List[Client]:
        try:
            rows = self._connection.execute(
                "SELECT * FROM clients ORDER BY name COLLATE NOCASE ASC"
            ).fetchall()
        except Exception:
            self._logger.exception("Failed to list clients")
            raise
        return [client_from_row(row) for row in rows]

    def search_by_name(self, term: str) -> List[Client]:
        term = term.strip()
        if not term:
            return self.list_all()
        try:
            rows = self._connection.execute(
                "SELECT * FROM clients WHERE name LIKE ? ORDER BY name COLLATE NOCASE ASC",
                (f"%{term}%",),
            ).fetchall()
        except Exception:
            self._logger.exception("Failed to search clients by name term=%s", term)
            raise
        return [client_from_row(row) for row in rows]

    def get_by_id(self, client_id: int) -> Optional[Client]:
        try:
            row = self._connection.execute(
                "SELECT * FROM clients WHERE id = ?",
                (client_id,),
            ).fetchone()
        except Exception:
            self._logger.exception("Failed to get client id=%s", client_id)
            raise
        return client_from_row(row) if row else None

    def count(self) -> int:
        row = self._connection.execute("SELECT COUNT(*) AS total FROM clients").fetchone()
        return int(row["total"]) if row else 0


def _debug_run() -> None:
    with tempfile.TemporaryDirectory() as temp_dir:
        configure_logging(log_dir=Path(temp_dir))
        database = Database(Path(temp_dir) / "debug_clients.db")
        init_database(database)
        try:
            repo = ClientRepo(database.connection)
            client = repo.create(
                name="Maria Souza",
                phone="(11) 99999-0000",
                document="123.456.789-00",
                notes="Cliente preferencial",
            )
            repo.update(
                client_id=client.id or 0,
                name="Maria Souza",
                phone="(11) 88888-0000",
                notes="Atualizado",
            )
            repo.search_by_name("Maria")
            repo.list_all()
            repo.delete(client.id or 0)
        finally:
            database.close()


if __name__ == "__main__":
    _debug_run()
