"""Repositories for data access."""

from locaprox.repositories.client_repo import ClientRepo
from locaprox.repositories.equipment_repo import EquipmentRepo
from locaprox.repositories.mappers import (
    client_from_row,
    equipment_from_row,
    rental_detail_item_from_row,
    rental_from_row,
    rental_item_from_row,
    rental_list_item_from_row,
)
from locaprox.repositories.settings_repo import SettingsRepository

__all__ = [
    "ClientRepo",
    "client_from_row",
    "EquipmentRepo",
    "equipment_from_row",
    "rental_detail_item_from_row",
    "rental_from_row",
    "rental_item_from_row",
    "rental_list_item_from_row",
    "SettingsRepository",
]
