"""Tests for client and equipment repositories."""

from __future__ import annotations

import sqlite3

import pytest

from locaprox.domain.models import RentalMode
from locaprox.repositories import client_repo, equipment_repo


class TestClientRepo:
    def test_create_trims_text(self, services):
        client = services.client_repo.create(
            name="  Maria Souza ", phone="  ", document=" 123.456.789-00 "
        )
        assert client.id is not None
        assert client.name == "Maria Souza"
        assert client.phone is None
        assert client.document == "123.456.789-00"

    def test_list_is_sorted_by_name(self, services):
        for name in ("carlos", "Ana", "bruno"):
            services.client_repo.create(name=name)
        names = [client.name for client in services.client_repo.list_all()]
        assert names == ["Ana", "bruno", "carlos"]

    def test_search_and_update(self, services, client):
        assert [c.id for c in services.client_repo.search_by_name("alfa")] == [client.id]
        updated = services.client_repo.update(client.id, name="Construtora Beta")
        assert updated.name == "Construtora Beta"
        assert services.client_repo.update(9999, name="Ninguém") is None

    def test_delete_unreferenced_client(self, services, client):
        assert services.client_repo.delete(client.id) is True
        assert services.client_repo.get_by_id(client.id) is None
        assert services.client_repo.count() == 0

    def test_delete_referenced_client_fails(self, services, client, make_input):
        services.rental_service.create(make_input())
        with pytest.raises(sqlite3.IntegrityError):
            services.client_repo.delete(client.id)
        assert services.client_repo.get_by_id(client.id) is not None


class TestEquipmentRepo:
    def test_unknown_rental_mode_is_stored_as_daily(self, services):
        equipment = services.equipment_repo.create(
            name="Andaime",
            category=None,
            rental_mode="yearly",
            daily_rate=15.0,
        )
        stored = services.equipment_repo.get_by_id(equipment.id)
        assert stored.rental_mode == RentalMode.DAILY

    def test_search_matches_category(self, services, drill, mixer):
        found = services.equipment_repo.search_by_name("obra")
        assert [equipment.id for equipment in found] == [mixer.id]

    def test_delete_referenced_equipment_fails(self, services, drill, make_input):
        services.rental_service.create(make_input())
        with pytest.raises(sqlite3.IntegrityError):
            services.equipment_repo.delete(drill.id)
        assert services.equipment_repo.get_by_id(drill.id) is not None

    def test_delete_unreferenced_equipment(self, services, mixer):
        assert services.equipment_repo.delete(mixer.id) is True
        assert services.equipment_repo.count() == 0


@pytest.mark.parametrize("module", [client_repo, equipment_repo])
def test_debug_run_exercises_crud(module, monkeypatch):
    monkeypatch.setattr(module, "configure_logging", lambda **kwargs: None)
    module._debug_run()
