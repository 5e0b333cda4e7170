"""Domain models for LocaProx."""

from locaprox.domain.models import (
    AppSettings,
    Client,
    Currency,
    DeliveryMode,
    Equipment,
    PricingRules,
    ReminderOption,
    Rental,
    RentalDetailItem,
    RentalDetails,
    RentalDraftItem,
    RentalInput,
    RentalItem,
    RentalListItem,
    RentalMode,
    RentalStatus,
)

__all__ = [
    "AppSettings",
    "Client",
    "Currency",
    "DeliveryMode",
    "Equipment",
    "PricingRules",
    "ReminderOption",
    "Rental",
    "RentalDetailItem",
    "RentalDetails",
    "RentalDraftItem",
    "RentalInput",
    "RentalItem",
    "RentalListItem",
    "RentalMode",
    "RentalStatus",
]
