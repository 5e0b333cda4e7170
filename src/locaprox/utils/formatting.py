"""Date, time and money helpers for the DD/MM/YYYY and HH:MM formats used on forms."""

from __future__ import annotations

import re
from datetime import date, datetime
from typing import Optional

from locaprox.config import DATE_FORMAT, TIME_FORMAT
from locaprox.domain.models import Currency

_BR_DATE_RE = re.compile(r"^(\d{2})/(\d{2})/(\d{4})$")
_TIME_RE = re.compile(r"^(\d{2}):(\d{2})$")


def clean_text(value: Optional[str]) -> Optional[str]:
    """Strip text input, turning blanks into ``None``."""
    if value is None:
        return None
    cleaned = value.strip()
    return cleaned or None


def parse_br_date(value: Optional[str]) -> Optional[date]:
    """Parse a strict DD/MM/YYYY date, returning ``None`` when invalid."""
    if not value:
        return None
    match = _BR_DATE_RE.match(value.strip())
    if not match:
        return None
    day, month, year = (int(part) for part in match.groups())
    try:
        return date(year, month, day)
    except ValueError:
        return None


def is_valid_br_date(value: Optional[str]) -> bool:
    return parse_br_date(value) is not None


def is_valid_time_hhmm(value: Optional[str]) -> bool:
    if not value:
        return False
    match = _TIME_RE.match(value.strip())
    if not match:
        return False
    hour, minute = (int(part) for part in match.groups())
    return 0 <= hour <= 23 and 0 <= minute <= 59


def parse_br_datetime(date_value: str, time_value: str) -> Optional[datetime]:
    parsed = parse_br_date(date_value)
    if parsed is None or not is_valid_time_hhmm(time_value):
        return None
    hour, minute = (int(part) for part in time_value.strip().split(":"))
    return datetime(parsed.year, parsed.month, parsed.day, hour, minute)


def compare_br_datetime(
    start_date: str,
    start_time: str,
    end_date: str,
    end_time: str,
) -> int:
    """Return -1, 0 or 1 comparing start against end.

    Raises ``ValueError`` when any part is malformed.
    """
    start = parse_br_datetime(start_date, start_time)
    end = parse_br_datetime(end_date, end_time)
    if start is None or end is None:
        raise ValueError("Data ou hora inválida.")
    if start == end:
        return 0
    return -1 if start < end else 1


def format_br_date(value: date) -> str:
    return value.strftime(DATE_FORMAT)


def today_br_date(today: Optional[date] = None) -> str:
    return format_br_date(today or date.today())


def now_hhmm(now: Optional[datetime] = None) -> str:
    return (now or datetime.now()).strftime(TIME_FORMAT)


def parse_decimal_input(raw_value: Optional[str]) -> float:
    """Parse user typed numbers such as ``1.234,56`` or ``12.5``; invalid input is 0."""
    normalized = re.sub(r"\s", "", raw_value or "")
    if not normalized:
        return 0.0
    if "," in normalized:
        if "." in normalized:
            normalized = normalized.replace(".", "").replace(",", ".", 1)
        else:
            normalized = normalized.replace(",", ".", 1)
    try:
        return float(normalized)
    except ValueError:
        return 0.0


def _group(value: float, thousands: str, decimal: str) -> str:
    formatted = f"{value:,.2f}"
    return formatted.replace(",", "X").replace(".", decimal).replace("X", thousands)


def format_currency(value: float, currency: Currency | str = Currency.BRL) -> str:
    """Format a money value the way each supported currency's locale shows it."""
    code = currency.value if isinstance(currency, Currency) else str(currency)
    sign = "-" if value < 0 else ""
    amount = abs(value)
    if code == Currency.USD.value:
        return f"{sign}${_group(amount, ',', '.')}"
    if code == Currency.EUR.value:
        return f"{sign}{_group(amount, '.', ',')} €"
    return f"{sign}R$ {_group(amount, '.', ',')}"
