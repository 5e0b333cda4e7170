"""Domain dataclasses and enums."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class RentalMode(str, Enum):
    DAILY = "daily"
    WEEKLY = "weekly"
    FORTNIGHTLY = "fortnightly"
    MONTHLY = "monthly"


class DeliveryMode(str, Enum):
    PICKUP = "pickup"
    DELIVERY = "delivery"


class Currency(str, Enum):
    BRL = "BRL"
    USD = "USD"
    EUR = "EUR"


class RentalStatus(str, Enum):
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CANCELED = "canceled"
    QUOTE = "quote"


class ReminderOption(str, Enum):
    NONE = "none"
    ONE_HOUR = "1h"
    ONE_DAY = "1d"


@dataclass(slots=True)
class Client:
    id: Optional[int]
    name: str
    phone: Optional[str]
    document: Optional[str]
    notes: Optional[str]
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


@dataclass(slots=True)
class Equipment:
    id: Optional[int]
    name: str
    category: Optional[str]
    rental_mode: RentalMode
    daily_rate: float
    equipment_value: float
    stock: int
    notes: Optional[str]
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


@dataclass(slots=True)
class Rental:
    id: Optional[int]
    client_id: int
    start_date: str
    start_time: str
    end_date: str
    end_time: str
    delivery_mode: DeliveryMode
    delivery_address: Optional[str]
    freight_value: float
    currency: Currency
    subtotal: float
    total: float
    status: RentalStatus
    quote_valid_until: Optional[str]
    notes: Optional[str]
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


@dataclass(slots=True)
class RentalItem:
    id: Optional[int]
    rental_id: int
    equipment_id: int
    quantity: int
    unit_price: float
    line_total: float
    equipment_name_snapshot: Optional[str] = None


@dataclass(slots=True)
class RentalDraftItem:
    """Line item as chosen on the rental form, with its locked-in unit price."""

    equipment_id: int
    equipment_name: str
    quantity: int
    unit_price: float

    @property
    def line_total(self) -> float:
        return self.quantity * self.unit_price


@dataclass(slots=True)
class RentalInput:
    client_id: int
    start_date: str
    start_time: str
    end_date: str
    end_time: str
    delivery_mode: DeliveryMode | str
    freight_value: float
    status: RentalStatus | str
    items: list[RentalDraftItem] = field(default_factory=list)
    currency: Optional[Currency | str] = None
    delivery_address: Optional[str] = None
    quote_valid_until: Optional[str] = None
    notes: Optional[str] = None


@dataclass(frozen=True)
class RentalDetailItem:
    """Item on the detail view.

    ``equipment_name`` is the equipment's current name; the name captured when
    the item was saved is kept in ``equipment_name_snapshot``.
    """

    id: int
    equipment_id: int
    equipment_name: str
    equipment_name_snapshot: Optional[str]
    quantity: int
    unit_price: float
    line_total: float


@dataclass(frozen=True)
class RentalDetails:
    rental: Rental
    items: list[RentalDetailItem]


@dataclass(frozen=True)
class RentalListItem:
    id: int
    client_id: int
    client_name: str
    start_date: str
    start_time: str
    end_date: str
    end_time: str
    delivery_mode: DeliveryMode
    delivery_address: Optional[str]
    freight_value: float
    currency: Currency
    subtotal: float
    total: float
    status: RentalStatus
    quote_valid_until: Optional[str]
    quote_expired: bool
    notes: Optional[str]
    item_count: int
    created_at: str
    equipment_names: tuple[str, ...] = ()


@dataclass(frozen=True)
class PricingRules:
    weekly_factor: float
    fortnightly_factor: float
    monthly_factor: float


@dataclass(frozen=True)
class AppSettings:
    pricing_rules: PricingRules
    currency: Currency
    company_name: str
    company_document: str
    company_logo_uri: str
    rental_start_reminder: ReminderOption
    rental_end_reminder: ReminderOption
