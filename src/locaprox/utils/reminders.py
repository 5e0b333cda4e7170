"""Reminder times derived from the stored reminder preferences."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from dateutil.relativedelta import relativedelta

from locaprox.domain.models import AppSettings, ReminderOption, Rental, RentalStatus
from locaprox.utils.formatting import parse_br_datetime

_OFFSETS = {
    ReminderOption.ONE_HOUR: relativedelta(hours=1),
    ReminderOption.ONE_DAY: relativedelta(days=1),
}


@dataclass(frozen=True)
class ReminderTimes:
    start: Optional[datetime]
    end: Optional[datetime]


def reminder_offset(option: ReminderOption) -> Optional[relativedelta]:
    return _OFFSETS.get(option)


def reminder_at(
    date_value: str,
    time_value: str,
    option: ReminderOption,
) -> Optional[datetime]:
    offset = reminder_offset(option)
    if offset is None:
        return None
    moment = parse_br_datetime(date_value, time_value)
    if moment is None:
        return None
    return moment - offset


def reminder_times(rental: Rental, settings: AppSettings) -> ReminderTimes:
    """Return when to remind about the start and end of a rental.

    Canceled and completed rentals get no reminders.
    """
    if rental.status in (RentalStatus.CANCELED, RentalStatus.COMPLETED):
        return ReminderTimes(start=None, end=None)
    return ReminderTimes(
        start=reminder_at(
            rental.start_date, rental.start_time, settings.rental_start_reminder
        ),
        end=reminder_at(rental.end_date, rental.end_time, settings.rental_end_reminder),
    )
