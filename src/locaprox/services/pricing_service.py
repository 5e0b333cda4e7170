"""Pricing rules for deriving weekly, fortnightly and monthly rates."""

from __future__ import annotations

from locaprox.domain.models import PricingRules, RentalMode
from locaprox.repositories.mappers import normalize_rental_mode

DEFAULT_PRICING_RULES = PricingRules(
    weekly_factor=6.0,
    fortnightly_factor=12.0,
    monthly_factor=24.0,
)


class PricingRulesService:
    """Stateless helpers mapping a daily rate to the rate of a rental mode.

    The result is only a suggestion for the unit price of a new rental item;
    rentals keep whatever unit price was saved with them.
    """

    def get_suggested_values(self) -> PricingRules:
        return DEFAULT_PRICING_RULES

    def get_factor_for_mode(self, mode: RentalMode | str, rules: PricingRules) -> float:
        mode = normalize_rental_mode(mode)
        if mode == RentalMode.WEEKLY:
            return rules.weekly_factor
        if mode == RentalMode.FORTNIGHTLY:
            return rules.fortnightly_factor
        if mode == RentalMode.MONTHLY:
            return rules.monthly_factor
        return 1.0

    def calculate_rate_by_mode(
        self,
        daily_rate: float,
        mode: RentalMode | str,
        rules: PricingRules,
    ) -> float:
        return daily_rate * self.get_factor_for_mode(mode, rules)
