"""Tests for document data and filenames."""

from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime

from locaprox.domain.models import RentalStatus
from locaprox.utils.documents import (
    QUOTE_WARNING,
    build_document_filename,
    build_rental_document_data,
    sanitize_filename,
)


def test_sanitize_filename():
    assert sanitize_filename("João  da Silva & Cia.") == "Joao_da_Silva_Cia"
    assert sanitize_filename("  ***  ") == "cliente"


def test_filename_by_status():
    today = date(2025, 6, 15)
    assert (
        build_document_filename("Maria Souza", RentalStatus.QUOTE, today)
        == "orcamento_Maria_Souza_15-06-2025.pdf"
    )
    assert (
        build_document_filename("Maria Souza", RentalStatus.IN_PROGRESS, today)
        == "locacao_Maria_Souza_15-06-2025.pdf"
    )


def test_document_data_from_rental(services, client, drill, make_input):
    rental_id = services.rental_service.create(
        make_input(status=RentalStatus.QUOTE, quote_valid_until="20/06/2025")
    )
    details = services.rental_service.get_by_id(rental_id)
    settings = replace(
        services.settings_service.get_settings(), company_name="LocaMax"
    )

    data = build_rental_document_data(
        details,
        client,
        {drill.id: drill},
        settings,
        generated_at=datetime(2025, 6, 15, 9, 30),
    )

    assert data.document_type == "ORCAMENTO"
    assert data.quote_warning == QUOTE_WARNING
    assert data.company_name == "LocaMax"
    assert data.client_name == "Construtora Alfa"
    assert data.generated_at == "15/06/2025 09:30"
    assert data.delivery_label == "Retirada"
    assert len(data.items) == 1
    item = data.items[0]
    assert item.equipment_name == "Furadeira"
    assert item.equipment_value == 800.0
    assert item.line_total == 100.0
    assert data.total == 100.0


def test_rental_document_has_no_warning(services, client, make_input):
    rental_id = services.rental_service.create(make_input())
    details = services.rental_service.get_by_id(rental_id)
    data = build_rental_document_data(
        details, client, {}, services.settings_service.get_settings()
    )
    assert data.document_type == "LOCACAO"
    assert data.quote_warning is None
    assert data.items[0].equipment_value == 0.0
