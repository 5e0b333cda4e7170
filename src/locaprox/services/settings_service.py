"""Application settings stored in the database."""

from __future__ import annotations

import math
import sqlite3
from typing import Optional

from locaprox.domain.models import AppSettings, Currency, PricingRules, ReminderOption
from locaprox.logging_config import get_logger
from locaprox.repositories.mappers import normalize_currency, normalize_reminder
from locaprox.repositories.settings_repo import SettingsRepository
from locaprox.services.pricing_service import DEFAULT_PRICING_RULES
from locaprox.services.validation import validate_settings_input

SETTINGS_KEYS = (
    "currency",
    "company_name",
    "company_document",
    "company_logo_uri",
    "rental_start_reminder",
    "rental_end_reminder",
    "weekly_factor",
    "fortnightly_factor",
    "monthly_factor",
)

DEFAULT_SETTINGS = AppSettings(
    pricing_rules=DEFAULT_PRICING_RULES,
    currency=Currency.BRL,
    company_name="",
    company_document="",
    company_logo_uri="",
    rental_start_reminder=ReminderOption.ONE_DAY,
    rental_end_reminder=ReminderOption.ONE_HOUR,
)


def _positive_float(value: Optional[str], fallback: float) -> float:
    if not value:
        return fallback
    try:
        parsed = float(value)
    except ValueError:
        return fallback
    if not math.isfinite(parsed) or parsed <= 0:
        return fallback
    return parsed


class SettingsService:
    """Load and save :class:`AppSettings`."""

    def __init__(self, connection: sqlite3.Connection) -> None:
        self._repo = SettingsRepository(connection)
        self._logger = get_logger(self.__class__.__name__)

    def get_settings(self) -> AppSettings:
        """Return stored values merged over the defaults.

        Factors that are missing, unparsable or not positive use the default.
        """
        values = self._repo.get_values(SETTINGS_KEYS)
        defaults = DEFAULT_SETTINGS
        return AppSettings(
            pricing_rules=PricingRules(
                weekly_factor=_positive_float(
                    values.get("weekly_factor"),
                    defaults.pricing_rules.weekly_factor,
                ),
                fortnightly_factor=_positive_float(
                    values.get("fortnightly_factor"),
                    defaults.pricing_rules.fortnightly_factor,
                ),
                monthly_factor=_positive_float(
                    values.get("monthly_factor"),
                    defaults.pricing_rules.monthly_factor,
                ),
            ),
            currency=normalize_currency(values.get("currency")),
            company_name=values.get("company_name", defaults.company_name),
            company_document=values.get("company_document", defaults.company_document),
            company_logo_uri=values.get("company_logo_uri", defaults.company_logo_uri),
            rental_start_reminder=normalize_reminder(
                values.get("rental_start_reminder"), defaults.rental_start_reminder
            ),
            rental_end_reminder=normalize_reminder(
                values.get("rental_end_reminder"), defaults.rental_end_reminder
            ),
        )

    def get_default_currency(self) -> Currency:
        return self.get_settings().currency

    def save_settings(self, settings: AppSettings) -> None:
        validate_settings_input(settings)
        rules = settings.pricing_rules
        payload = [
            ("currency", normalize_currency(settings.currency).value),
            ("company_name", settings.company_name.strip()),
            ("company_document", settings.company_document.strip()),
            ("company_logo_uri", settings.company_logo_uri.strip()),
            (
                "rental_start_reminder",
                normalize_reminder(
                    settings.rental_start_reminder,
                    DEFAULT_SETTINGS.rental_start_reminder,
                ).value,
            ),
            (
                "rental_end_reminder",
                normalize_reminder(
                    settings.rental_end_reminder,
                    DEFAULT_SETTINGS.rental_end_reminder,
                ).value,
            ),
            ("weekly_factor", _format_factor(rules.weekly_factor)),
            ("fortnightly_factor", _format_factor(rules.fortnightly_factor)),
            ("monthly_factor", _format_factor(rules.monthly_factor)),
        ]
        self._repo.upsert_many(payload)
        self._logger.info("Settings saved")


def _format_factor(value: float) -> str:
    value = float(value)
    return str(int(value)) if value.is_integer() else str(value)
