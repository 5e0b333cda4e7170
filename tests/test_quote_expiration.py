"""Tests for automatic cancellation of expired quotes."""

from __future__ import annotations

from datetime import date

import pytest

from locaprox.domain.models import RentalStatus
from locaprox.repositories import rental_repo
from locaprox.services.rental_service import is_quote_expired

TODAY = date(2025, 6, 15)


def _stored_status(connection, rental_id):
    row = connection.execute(
        "SELECT status FROM rentals WHERE id = ?", (rental_id,)
    ).fetchone()
    return row["status"]


class TestIsQuoteExpired:
    @pytest.mark.parametrize(
        "valid_until, expected",
        [
            ("14/06/2025", True),
            ("01/01/2000", True),
            ("15/06/2025", False),
            ("16/06/2025", False),
            ("31/02/2025", False),
            ("2025-06-01", False),
            ("", False),
            (None, False),
        ],
    )
    def test_quote_dates(self, valid_until, expected):
        assert is_quote_expired(valid_until, RentalStatus.QUOTE, TODAY) is expected

    def test_only_quotes_expire(self):
        for status in (
            RentalStatus.IN_PROGRESS,
            RentalStatus.COMPLETED,
            RentalStatus.CANCELED,
        ):
            assert is_quote_expired("01/01/2000", status, TODAY) is False


class TestSweep:
    def test_list_cancels_expired_quote(self, services, make_input):
        rental_id = services.rental_service.create(
            make_input(status=RentalStatus.QUOTE, quote_valid_until="14/06/2025")
        )

        listed = services.rental_service.list_rentals()
        assert len(listed) == 1
        assert listed[0].quote_expired is True
        assert listed[0].status == RentalStatus.CANCELED
        assert _stored_status(services.connection, rental_id) == "canceled"

    def test_second_list_is_stable(self, services, make_input):
        services.rental_service.create(
            make_input(status=RentalStatus.QUOTE, quote_valid_until="14/06/2025")
        )
        services.rental_service.list_rentals()

        listed = services.rental_service.list_rentals()
        assert listed[0].quote_expired is False
        assert listed[0].status == RentalStatus.CANCELED

    def test_valid_quote_is_kept(self, services, make_input):
        rental_id = services.rental_service.create(
            make_input(status=RentalStatus.QUOTE, quote_valid_until="16/06/2025")
        )

        listed = services.rental_service.list_rentals()
        assert listed[0].quote_expired is False
        assert listed[0].status == RentalStatus.QUOTE
        assert _stored_status(services.connection, rental_id) == "quote"

    def test_malformed_validity_never_expires(self, services, make_input):
        rental_id = services.rental_service.create(
            make_input(status=RentalStatus.QUOTE, quote_valid_until="amanhã")
        )

        listed = services.rental_service.list_rentals()
        assert listed[0].status == RentalStatus.QUOTE
        assert _stored_status(services.connection, rental_id) == "quote"

    def test_only_expired_rows_change(self, services, make_input):
        expired_id = services.rental_service.create(
            make_input(status=RentalStatus.QUOTE, quote_valid_until="01/01/2000")
        )
        active_id = services.rental_service.create(make_input())

        services.rental_service.list_rentals()
        assert _stored_status(services.connection, expired_id) == "canceled"
        assert _stored_status(services.connection, active_id) == "in_progress"

    def test_get_by_id_saves_cancellation(self, services, make_input):
        rental_id = services.rental_service.create(
            make_input(status=RentalStatus.QUOTE, quote_valid_until="10/06/2025")
        )

        details = services.rental_service.get_by_id(rental_id)
        assert details.rental.status == RentalStatus.CANCELED
        assert _stored_status(services.connection, rental_id) == "canceled"

    def test_legacy_draft_status_is_read_as_quote(self, services, make_input):
        rental_id = services.rental_service.create(
            make_input(status=RentalStatus.QUOTE, quote_valid_until="01/01/2000")
        )
        with services.connection:
            services.connection.execute(
                "UPDATE rentals SET status = 'draft' WHERE id = ?", (rental_id,)
            )

        details = services.rental_service.get_by_id(rental_id)
        assert details.rental.status == RentalStatus.CANCELED
        assert rental_repo.get_rental_with_items(
            rental_id, connection=services.connection
        )[0].status == RentalStatus.CANCELED
