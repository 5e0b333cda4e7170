"""Seed demo data into the LocaProx SQLite database."""

from __future__ import annotations

import argparse
import random
import sys
from dataclasses import dataclass
from datetime import date, timedelta
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
SRC_ROOT = REPO_ROOT / "src"
if str(SRC_ROOT) not in sys.path:
    sys.path.insert(0, str(SRC_ROOT))

from locaprox.app import AppServices, build_services  # noqa: E402
from locaprox.config import DEFAULT_END_TIME, DEFAULT_START_TIME  # noqa: E402
from locaprox.db.connection import Database  # noqa: E402
from locaprox.db.migrations import init_database  # noqa: E402
from locaprox.domain.models import (  # noqa: E402
    DeliveryMode,
    Equipment,
    RentalDraftItem,
    RentalInput,
    RentalMode,
    RentalStatus,
)
from locaprox.logging_config import configure_logging  # noqa: E402
from locaprox.paths import get_db_path  # noqa: E402
from locaprox.services.errors import ValidationError  # noqa: E402
from locaprox.services.validation import validate_rental_input  # noqa: E402
from locaprox.utils.formatting import format_br_date, format_currency  # noqa: E402

SEED_TAG = "Seed Demo"
DEFAULT_SEED = 42
RENTAL_COUNT = 30


@dataclass(frozen=True)
class EquipmentSeed:
    name: str
    category: str
    rental_mode: RentalMode
    daily_rate: float
    equipment_value: float
    stock: int


EQUIPMENT_SEEDS = [
    EquipmentSeed("Betoneira 400L", "obra", RentalMode.WEEKLY, 90.0, 4200.0, 3),
    EquipmentSeed("Andaime tubular", "obra", RentalMode.MONTHLY, 12.0, 650.0, 40),
    EquipmentSeed("Martelete rompedor", "ferramenta", RentalMode.DAILY, 75.0, 3100.0, 4),
    EquipmentSeed("Furadeira de impacto", "ferramenta", RentalMode.DAILY, 35.0, 700.0, 6),
    EquipmentSeed("Compactador de solo", "obra", RentalMode.WEEKLY, 140.0, 8900.0, 2),
    EquipmentSeed("Gerador 5kVA", "energia", RentalMode.FORTNIGHTLY, 160.0, 6500.0, 2),
    EquipmentSeed("Lavadora de alta pressão", "limpeza", RentalMode.DAILY, 60.0, 1800.0, 3),
]

CLIENT_NAMES = [
    "Construtora Horizonte",
    "Marcos Pereira",
    "Reformas Silva & Filhos",
    "Ana Beatriz Costa",
    "Condomínio Jardim Azul",
    "Paulo Henrique Lima",
]


def _parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Seed demo data for LocaProx")
    parser.add_argument(
        "--reset",
        action="store_true",
        help="Remove o banco atual e recria antes de inserir dados.",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=DEFAULT_SEED,
        help="Seed para aleatoriedade.",
    )
    return parser.parse_args()


def _seed_exists(services: AppServices) -> bool:
    return any(
        client.notes == SEED_TAG for client in services.client_repo.list_all()
    )


def _build_rental(
    rng: random.Random,
    services: AppServices,
    client_id: int,
    equipments: list[Equipment],
    today: date,
) -> RentalInput:
    rules = services.settings_service.get_settings().pricing_rules
    start = today + timedelta(days=rng.randint(-30, 20))
    end = start + timedelta(days=rng.randint(1, 20))
    chosen = rng.sample(equipments, k=rng.randint(1, 3))
    items = [
        RentalDraftItem(
            equipment_id=equipment.id or 0,
            equipment_name=equipment.name,
            quantity=rng.randint(1, max(1, min(equipment.stock, 4))),
            unit_price=services.pricing_service.calculate_rate_by_mode(
                equipment.daily_rate, equipment.rental_mode, rules
            ),
        )
        for equipment in chosen
    ]
    status = rng.choice(
        [
            RentalStatus.IN_PROGRESS,
            RentalStatus.IN_PROGRESS,
            RentalStatus.COMPLETED,
            RentalStatus.QUOTE,
        ]
    )
    delivery = rng.random() < 0.5
    return RentalInput(
        client_id=client_id,
        start_date=format_br_date(start),
        start_time=DEFAULT_START_TIME,
        end_date=format_br_date(end),
        end_time=DEFAULT_END_TIME,
        delivery_mode=DeliveryMode.DELIVERY if delivery else DeliveryMode.PICKUP,
        delivery_address="Rua das Palmeiras, 250" if delivery else None,
        freight_value=float(rng.choice([40, 60, 80])) if delivery else 0.0,
        status=status,
        quote_valid_until=(
            format_br_date(today + timedelta(days=rng.randint(0, 10)))
            if status == RentalStatus.QUOTE
            else None
        ),
        items=items,
        notes=SEED_TAG,
    )


def main() -> None:
    args = _parse_args()
    rng = random.Random(args.seed)
    configure_logging()

    db_path = get_db_path()
    database = Database(db_path)
    if args.reset:
        database.reset()
        print(f"Banco removido: {db_path}")

    print(f"Usando banco de dados: {db_path}")
    init_database(database)
    try:
        services = build_services(database.connection)
        if _seed_exists(services) and not args.reset:
            print("Dados de seed já encontrados. Use --reset para recriar o banco.")
            return

        equipments = [
            services.equipment_repo.create(
                name=seed.name,
                category=seed.category,
                rental_mode=seed.rental_mode,
                daily_rate=seed.daily_rate,
                equipment_value=seed.equipment_value,
                stock=seed.stock,
            )
            for seed in EQUIPMENT_SEEDS
        ]
        stock = {equipment.id: equipment.stock for equipment in equipments}
        client_ids = [
            services.client_repo.create(name=name, notes=SEED_TAG).id or 0
            for name in CLIENT_NAMES
        ]

        today = date.today()
        created = 0
        skipped = 0
        total_value = 0.0
        for _ in range(RENTAL_COUNT):
            data = _build_rental(
                rng, services, rng.choice(client_ids), equipments, today
            )
            try:
                validate_rental_input(data, today=today, stock_by_equipment=stock)
            except ValidationError as exc:
                skipped += 1
                print(f"Locação ignorada: {exc}")
                continue
            rental_id = services.rental_service.create(data)
            total_value += services.rental_service.get_by_id(rental_id).rental.total
            created += 1

        print("\nSeed concluído com sucesso:")
        print(f"Equipamentos seed: {len(equipments)}")
        print(f"Clientes seed: {len(client_ids)}")
        print(f"Locações seed: {created} (ignoradas: {skipped})")
        print(f"Valor total gerado: {format_currency(total_value)}")
    finally:
        database.close()


if __name__ == "__main__":
    main()
