"""SQLite row mappers for domain models.

Stored enum strings go through the ``normalize_*`` helpers below and nowhere
else, so legacy or malformed rows degrade to safe defaults instead of raising.
"""

from __future__ import annotations

import sqlite3
from typing import Any, Optional

from locaprox.domain.models import (
    Client,
    Currency,
    DeliveryMode,
    Equipment,
    ReminderOption,
    Rental,
    RentalDetailItem,
    RentalItem,
    RentalListItem,
    RentalMode,
    RentalStatus,
)

LEGACY_STATUSES = {
    "closed": RentalStatus.COMPLETED,
    "draft": RentalStatus.QUOTE,
}


def _row_value(row: sqlite3.Row, key: str) -> Any:
    return row[key] if key in row.keys() else None


def _float(value: Any) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0.0


def _int(value: Any) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return 0


def normalize_rental_status(value: Any) -> RentalStatus:
    if isinstance(value, RentalStatus):
        return value
    raw = str(value or "").strip()
    if raw in LEGACY_STATUSES:
        return LEGACY_STATUSES[raw]
    try:
        return RentalStatus(raw)
    except ValueError:
        return RentalStatus.IN_PROGRESS


def normalize_currency(value: Any) -> Currency:
    if isinstance(value, Currency):
        return value
    try:
        return Currency(str(value or "").strip())
    except ValueError:
        return Currency.BRL


def normalize_delivery_mode(value: Any) -> DeliveryMode:
    if isinstance(value, DeliveryMode):
        return value
    try:
        return DeliveryMode(str(value or "").strip())
    except ValueError:
        return DeliveryMode.PICKUP


def normalize_rental_mode(value: Any) -> RentalMode:
    if isinstance(value, RentalMode):
        return value
    try:
        return RentalMode(str(value or "").strip())
    except ValueError:
        return RentalMode.DAILY


def normalize_reminder(value: Any, default: ReminderOption) -> ReminderOption:
    if isinstance(value, ReminderOption):
        return value
    try:
        return ReminderOption(str(value or "").strip())
    except ValueError:
        return default


def client_from_row(row: sqlite3.Row) -> Client:
    return Client(
        id=_row_value(row, "id"),
        name=row["name"],
        phone=_row_value(row, "phone"),
        document=_row_value(row, "document"),
        notes=_row_value(row, "notes"),
        created_at=_row_value(row, "created_at"),
        updated_at=_row_value(row, "updated_at"),
    )


def equipment_from_row(row: sqlite3.Row) -> Equipment:
    return Equipment(
        id=_row_value(row, "id"),
        name=row["name"],
        category=_row_value(row, "category"),
        rental_mode=normalize_rental_mode(_row_value(row, "rental_mode")),
        daily_rate=_float(row["daily_rate"]),
        equipment_value=_float(_row_value(row, "equipment_value")),
        stock=_int(_row_value(row, "stock")),
        notes=_row_value(row, "notes"),
        created_at=_row_value(row, "created_at"),
        updated_at=_row_value(row, "updated_at"),
    )


def rental_from_row(row: sqlite3.Row) -> Rental:
    return Rental(
        id=_row_value(row, "id"),
        client_id=row["client_id"],
        start_date=row["start_date"],
        start_time=_row_value(row, "start_time"),
        end_date=row["end_date"],
        end_time=_row_value(row, "end_time"),
        delivery_mode=normalize_delivery_mode(_row_value(row, "delivery_mode")),
        delivery_address=_row_value(row, "delivery_address"),
        freight_value=_float(_row_value(row, "freight_value")),
        currency=normalize_currency(_row_value(row, "currency")),
        subtotal=_float(row["subtotal"]),
        total=_float(row["total"]),
        status=normalize_rental_status(row["status"]),
        quote_valid_until=_row_value(row, "quote_valid_until"),
        notes=_row_value(row, "notes"),
        created_at=_row_value(row, "created_at"),
        updated_at=_row_value(row, "updated_at"),
    )


def rental_item_from_row(row: sqlite3.Row) -> RentalItem:
    return RentalItem(
        id=_row_value(row, "id"),
        rental_id=row["rental_id"],
        equipment_id=row["equipment_id"],
        quantity=_int(row["quantity"]),
        unit_price=_float(row["unit_price"]),
        line_total=_float(row["line_total"]),
        equipment_name_snapshot=_row_value(row, "equipment_name_snapshot"),
    )


def rental_detail_item_from_row(row: sqlite3.Row) -> RentalDetailItem:
    return RentalDetailItem(
        id=row["id"],
        equipment_id=row["equipment_id"],
        equipment_name=row["equipment_name"],
        equipment_name_snapshot=_row_value(row, "equipment_name_snapshot"),
        quantity=_int(row["quantity"]),
        unit_price=_float(row["unit_price"]),
        line_total=_float(row["line_total"]),
    )


def rental_list_item_from_row(
    row: sqlite3.Row,
    *,
    quote_expired: bool = False,
    equipment_names: Optional[tuple[str, ...]] = None,
) -> RentalListItem:
    rental = rental_from_row(row)
    return RentalListItem(
        id=row["id"],
        client_id=rental.client_id,
        client_name=row["client_name"],
        start_date=rental.start_date,
        start_time=rental.start_time,
        end_date=rental.end_date,
        end_time=rental.end_time,
        delivery_mode=rental.delivery_mode,
        delivery_address=rental.delivery_address,
        freight_value=rental.freight_value,
        currency=rental.currency,
        subtotal=rental.subtotal,
        total=rental.total,
        status=rental.status,
        quote_valid_until=rental.quote_valid_until,
        quote_expired=quote_expired,
        notes=rental.notes,
        item_count=_int(row["item_count"]),
        created_at=rental.created_at or "",
        equipment_names=equipment_names or (),
    )
