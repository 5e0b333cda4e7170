"""Rental service for business rules.

Owns the pricing of a rental (line totals, subtotal, freight, total), the
delivery and quote normalization rules, and the automatic cancellation of
quotes whose validity date has passed.
"""

from __future__ import annotations

import sqlite3
from dataclasses import dataclass, replace
from datetime import date
from typing import Any, Callable, Iterable, Optional

from locaprox.domain.models import (
    Currency,
    DeliveryMode,
    RentalDetails,
    RentalDraftItem,
    RentalInput,
    RentalListItem,
    RentalStatus,
)
from locaprox.logging_config import get_logger
from locaprox.repositories import rental_repo
from locaprox.services.errors import NotFoundError, ValidationError
from locaprox.services.settings_service import SettingsService
from locaprox.utils.formatting import clean_text, parse_br_date


@dataclass(frozen=True)
class RentalTotals:
    subtotal: float
    freight_value: float
    total: float


def compute_totals(
    items: Iterable[RentalDraftItem],
    delivery_mode: DeliveryMode,
    freight_value: float,
) -> RentalTotals:
    """Recompute totals from the items; freight only counts for deliveries."""
    subtotal = sum(item.quantity * item.unit_price for item in items)
    freight = float(freight_value or 0) if delivery_mode == DeliveryMode.DELIVERY else 0.0
    return RentalTotals(subtotal=subtotal, freight_value=freight, total=subtotal + freight)


def is_quote_expired(
    quote_valid_until: Optional[str],
    status: RentalStatus,
    today: date,
) -> bool:
    """A quote is expired when its validity date parses and is before today.

    Quotes with a missing or malformed date never expire.
    """
    if status != RentalStatus.QUOTE or not quote_valid_until:
        return False
    valid_until = parse_br_date(quote_valid_until)
    if valid_until is None:
        return False
    return valid_until < today


def sanitize_quote_valid_until(
    status: RentalStatus,
    quote_valid_until: Optional[str],
) -> Optional[str]:
    if status != RentalStatus.QUOTE:
        return None
    return clean_text(quote_valid_until)


def _coerce_quantity(item: RentalDraftItem) -> int:
    try:
        quantity = int(item.quantity)
    except (TypeError, ValueError) as exc:
        raise ValidationError(
            f"Quantidade inválida para {item.equipment_name}."
        ) from exc
    if quantity != item.quantity:
        raise ValidationError(
            f"A quantidade de {item.equipment_name} deve ser um número inteiro."
        )
    return quantity


def _coerce_enum(enum_type: type, value: Any, label: str) -> Any:
    if isinstance(value, enum_type):
        return value
    try:
        return enum_type(str(value).strip())
    except ValueError as exc:
        raise ValidationError(f"{label} inválido: {value!r}.") from exc


class RentalService:
    """Service for rental business rules."""

    def __init__(
        self,
        connection: sqlite3.Connection,
        *,
        settings_service: Optional[SettingsService] = None,
        today: Callable[[], date] = date.today,
    ) -> None:
        self._connection = connection
        self._connection.row_factory = sqlite3.Row
        self._settings_service = settings_service or SettingsService(connection)
        self._today = today
        self._logger = get_logger(self.__class__.__name__)

    def _build_payload(
        self, data: RentalInput
    ) -> tuple[dict[str, Any], list[dict[str, Any]]]:
        status = _coerce_enum(RentalStatus, data.status, "Status")
        delivery_mode = _coerce_enum(DeliveryMode, data.delivery_mode, "Modo de entrega")
        if data.currency:
            currency = _coerce_enum(Currency, data.currency, "Moeda")
        else:
            currency = self._settings_service.get_default_currency()

        items = [
            replace(item, quantity=_coerce_quantity(item)) for item in data.items
        ]
        totals = compute_totals(items, delivery_mode, data.freight_value)
        is_delivery = delivery_mode == DeliveryMode.DELIVERY
        record = {
            "client_id": data.client_id,
            "start_date": data.start_date,
            "start_time": data.start_time,
            "end_date": data.end_date,
            "end_time": data.end_time,
            "delivery_mode": delivery_mode.value,
            "delivery_address": clean_text(data.delivery_address) if is_delivery else None,
            "freight_value": totals.freight_value,
            "currency": currency.value,
            "subtotal": totals.subtotal,
            "total": totals.total,
            "status": status.value,
            "quote_valid_until": sanitize_quote_valid_until(
                status, data.quote_valid_until
            ),
            "notes": clean_text(data.notes),
        }
        item_records = [
            {
                "equipment_id": int(item.equipment_id),
                "quantity": item.quantity,
                "unit_price": float(item.unit_price),
                "line_total": item.line_total,
                "equipment_name_snapshot": clean_text(item.equipment_name),
            }
            for item in items
        ]
        return record, item_records

    def create(self, data: RentalInput) -> int:
        """Persist a new rental with its items atomically and return its id."""
        record, items = self._build_payload(data)
        rental_id = rental_repo.create_rental(
            record, items, connection=self._connection
        )
        self._logger.info(
            "Rental %s created (status=%s, total=%.2f)",
            rental_id,
            record["status"],
            record["total"],
        )
        return rental_id

    def update(self, rental_id: int, data: RentalInput) -> None:
        """Overwrite a rental and replace its whole item set atomically."""
        record, items = self._build_payload(data)
        updated = rental_repo.update_rental(
            rental_id, record, items, connection=self._connection
        )
        if not updated:
            raise NotFoundError(f"Locação {rental_id} não encontrada.")
        self._logger.info("Rental %s updated (status=%s)", rental_id, record["status"])

    def is_quote_expired(
        self, quote_valid_until: Optional[str], status: RentalStatus
    ) -> bool:
        return is_quote_expired(quote_valid_until, status, self._today())

    def _cancel_expired_quote(self, rental_id: int) -> None:
        rental_repo.set_status(
            rental_id, RentalStatus.CANCELED, connection=self._connection
        )
        self._logger.info("Quote %s expired; status set to canceled", rental_id)

    def get_by_id(self, rental_id: int) -> Optional[RentalDetails]:
        """Return a rental with its items, or ``None`` when it does not exist.

        This read may write: an expired quote is saved as canceled before it
        is returned.
        """
        rental_data = rental_repo.get_rental_with_items(
            rental_id, connection=self._connection
        )
        if not rental_data:
            return None
        rental, items = rental_data
        if self.is_quote_expired(rental.quote_valid_until, rental.status):
            self._cancel_expired_quote(rental_id)
            rental = replace(rental, status=RentalStatus.CANCELED)
        return RentalDetails(rental=rental, items=items)

    def list_rentals(self) -> list[RentalListItem]:
        """List all rentals, newest first.

        This read may write. Every expired quote is flagged with
        ``quote_expired``, saved as canceled one row at a time, and returned
        with its canceled status.
        """
        rentals = [
            replace(
                rental,
                quote_expired=self.is_quote_expired(
                    rental.quote_valid_until, rental.status
                ),
            )
            for rental in rental_repo.list_rentals(connection=self._connection)
        ]
        for rental in rentals:
            if rental.quote_expired:
                self._cancel_expired_quote(rental.id)
        return [
            replace(rental, status=RentalStatus.CANCELED)
            if rental.quote_expired
            else rental
            for rental in rentals
        ]

    def count(self) -> int:
        return rental_repo.count_rentals(connection=self._connection)
