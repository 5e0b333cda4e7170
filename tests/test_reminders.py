"""Tests for reminder scheduling."""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime

from locaprox.domain.models import (
    Currency,
    DeliveryMode,
    ReminderOption,
    Rental,
    RentalStatus,
)
from locaprox.services.settings_service import DEFAULT_SETTINGS
from locaprox.utils.reminders import reminder_times


def _rental(status=RentalStatus.IN_PROGRESS) -> Rental:
    return Rental(
        id=1,
        client_id=1,
        start_date="01/03/2025",
        start_time="08:00",
        end_date="05/03/2025",
        end_time="00:30",
        delivery_mode=DeliveryMode.PICKUP,
        delivery_address=None,
        freight_value=0.0,
        currency=Currency.BRL,
        subtotal=100.0,
        total=100.0,
        status=status,
        quote_valid_until=None,
        notes=None,
    )


def test_default_offsets():
    times = reminder_times(_rental(), DEFAULT_SETTINGS)
    assert times.start == datetime(2025, 2, 28, 8, 0)
    assert times.end == datetime(2025, 3, 4, 23, 30)


def test_none_option_skips_reminder():
    settings = replace(DEFAULT_SETTINGS, rental_start_reminder=ReminderOption.NONE)
    times = reminder_times(_rental(), settings)
    assert times.start is None
    assert times.end is not None


def test_finished_rentals_have_no_reminders():
    for status in (RentalStatus.CANCELED, RentalStatus.COMPLETED):
        times = reminder_times(_rental(status), DEFAULT_SETTINGS)
        assert times.start is None and times.end is None


def test_malformed_dates_have_no_reminders():
    rental = _rental()
    rental.start_date = "2025-03-01"
    assert reminder_times(rental, DEFAULT_SETTINGS).start is None
