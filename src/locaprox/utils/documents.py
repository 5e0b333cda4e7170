"""Data and filenames for rental and quote documents."""

from __future__ import annotations

import re
import unicodedata
from dataclasses import dataclass
from datetime import date, datetime
from typing import Mapping, Optional

from locaprox.domain.models import (
    AppSettings,
    Client,
    Currency,
    DeliveryMode,
    Equipment,
    RentalDetails,
    RentalStatus,
)
from locaprox.utils.formatting import format_br_date

QUOTE_WARNING = (
    "ATENÇÃO: ESTE DOCUMENTO É UM ORÇAMENTO E NÃO REPRESENTA RESERVA DE EQUIPAMENTO."
)


@dataclass(frozen=True)
class RentalDocumentItem:
    equipment_name: str
    quantity: int
    unit_price: float
    equipment_value: float
    line_total: float


@dataclass(frozen=True)
class RentalDocumentData:
    """Everything a rendered rental or quote document shows."""

    document_type: str
    company_name: str
    company_document: str
    company_logo_uri: str
    client_name: str
    client_document: str
    client_phone: str
    generated_at: str
    start_date: str
    start_time: str
    end_date: str
    end_time: str
    status: RentalStatus
    quote_valid_until: str
    delivery_label: str
    delivery_address: str
    freight_value: float
    notes: str
    currency: Currency
    items: tuple[RentalDocumentItem, ...]
    subtotal: float
    total: float

    @property
    def quote_warning(self) -> Optional[str]:
        if self.status == RentalStatus.QUOTE:
            return QUOTE_WARNING
        return None


def document_type_for(status: RentalStatus) -> str:
    return "ORCAMENTO" if status == RentalStatus.QUOTE else "LOCACAO"


def delivery_label_for(mode: DeliveryMode) -> str:
    return "Entrega" if mode == DeliveryMode.DELIVERY else "Retirada"


def sanitize_filename(value: str) -> str:
    """Normalize text to be safe for filenames."""
    decomposed = unicodedata.normalize("NFD", value)
    cleaned = "".join(char for char in decomposed if not unicodedata.combining(char))
    cleaned = re.sub(r"[^A-Za-z0-9_-]", "_", cleaned)
    cleaned = re.sub(r"_{2,}", "_", cleaned).strip("_")
    return cleaned or "cliente"


def build_document_filename(
    client_name: str,
    status: RentalStatus,
    today: Optional[date] = None,
) -> str:
    """Build default filename for a rental or quote document."""
    prefix = "orcamento" if status == RentalStatus.QUOTE else "locacao"
    date_part = format_br_date(today or date.today()).replace("/", "-")
    return f"{prefix}_{sanitize_filename(client_name)}_{date_part}.pdf"


def build_rental_document_data(
    details: RentalDetails,
    client: Client,
    equipments: Mapping[int, Equipment],
    settings: AppSettings,
    *,
    generated_at: Optional[datetime] = None,
) -> RentalDocumentData:
    """Gather rental, client, company and item data for a document.

    Items show the name saved with the rental when there is one.
    """
    rental = details.rental
    generated_at = generated_at or datetime.now()
    items = []
    for item in details.items:
        equipment = equipments.get(item.equipment_id)
        items.append(
            RentalDocumentItem(
                equipment_name=item.equipment_name_snapshot or item.equipment_name,
                quantity=item.quantity,
                unit_price=item.unit_price,
                equipment_value=equipment.equipment_value if equipment else 0.0,
                line_total=item.line_total,
            )
        )
    return RentalDocumentData(
        document_type=document_type_for(rental.status),
        company_name=settings.company_name,
        company_document=settings.company_document,
        company_logo_uri=settings.company_logo_uri.strip(),
        client_name=client.name,
        client_document=client.document or "",
        client_phone=client.phone or "",
        generated_at=generated_at.strftime("%d/%m/%Y %H:%M"),
        start_date=rental.start_date,
        start_time=rental.start_time,
        end_date=rental.end_date,
        end_time=rental.end_time,
        status=rental.status,
        quote_valid_until=rental.quote_valid_until or "",
        delivery_label=delivery_label_for(rental.delivery_mode),
        delivery_address=rental.delivery_address or "",
        freight_value=rental.freight_value,
        notes=rental.notes or "",
        currency=rental.currency,
        items=tuple(items),
        subtotal=rental.subtotal,
        total=rental.total,
    )
