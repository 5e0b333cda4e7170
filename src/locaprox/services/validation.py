"""Input validation applied by callers before data reaches the services.

The rental service trusts what it receives apart from recomputing totals, so
forms and scripts run these checks first.
"""

from __future__ import annotations

from datetime import date
from typing import Mapping, Optional

from locaprox.domain.models import AppSettings, DeliveryMode, RentalInput, RentalStatus
from locaprox.services.errors import ValidationError
from locaprox.utils.formatting import (
    compare_br_datetime,
    is_valid_br_date,
    is_valid_time_hhmm,
    parse_br_date,
)


def validate_client_input(name: Optional[str]) -> None:
    if not name or not name.strip():
        raise ValidationError("Informe o nome do cliente.")


def validate_equipment_input(
    name: Optional[str],
    daily_rate: float,
    equipment_value: float,
    stock: int,
) -> None:
    if not name or not name.strip():
        raise ValidationError("Informe o nome do equipamento.")
    if not daily_rate or daily_rate <= 0:
        raise ValidationError("Informe uma diária válida.")
    if equipment_value < 0:
        raise ValidationError("Informe um valor de equipamento válido.")
    if stock < 0 or int(stock) != stock:
        raise ValidationError("Informe um estoque válido.")


def validate_rental_input(
    data: RentalInput,
    *,
    today: Optional[date] = None,
    stock_by_equipment: Optional[Mapping[int, int]] = None,
) -> None:
    """Check a rental form before saving it.

    ``stock_by_equipment`` enables the stock check for the listed equipments.
    """
    today = today or date.today()
    if not data.client_id:
        raise ValidationError("Selecione um cliente.")
    if not data.items:
        raise ValidationError("Selecione ao menos um equipamento.")
    if not is_valid_br_date(data.start_date) or not is_valid_br_date(data.end_date):
        raise ValidationError("Use o formato de data dia/mês/ano (dd/mm/aaaa).")
    if not is_valid_time_hhmm(data.start_time) or not is_valid_time_hhmm(data.end_time):
        raise ValidationError("Use o formato de hora hora:minuto (HH:mm).")
    if compare_br_datetime(data.start_date, data.start_time, data.end_date, data.end_time) == 1:
        raise ValidationError(
            "A data/hora de início não pode ser maior que a de término."
        )

    is_delivery = data.delivery_mode == DeliveryMode.DELIVERY
    if is_delivery and not (data.delivery_address or "").strip():
        raise ValidationError("Informe o endereço de entrega.")
    if is_delivery and data.freight_value < 0:
        raise ValidationError("Informe um valor de frete válido.")

    if data.status == RentalStatus.QUOTE:
        if not (data.quote_valid_until or "").strip():
            raise ValidationError("Informe a validade do orçamento.")
        valid_until = parse_br_date(data.quote_valid_until)
        if valid_until is None:
            raise ValidationError(
                "Use o formato de data dia/mês/ano (dd/mm/aaaa) para validade."
            )
        if valid_until < today:
            raise ValidationError(
                "A validade do orçamento não pode ser anterior a hoje."
            )

    for item in data.items:
        if item.quantity <= 0:
            raise ValidationError(
                f"Quantidade inválida para {item.equipment_name}."
            )
        if int(item.quantity) != item.quantity:
            raise ValidationError(
                f"A quantidade de {item.equipment_name} deve ser um número inteiro."
            )
        if item.unit_price < 0:
            raise ValidationError(f"Preço inválido para {item.equipment_name}.")
        if stock_by_equipment is not None and item.equipment_id in stock_by_equipment:
            if item.quantity > stock_by_equipment[item.equipment_id]:
                raise ValidationError(
                    "A quantidade selecionada excede o estoque disponível "
                    f"de {item.equipment_name}."
                )

    subtotal = sum(item.line_total for item in data.items)
    total = subtotal + (data.freight_value if is_delivery else 0)
    if total <= 0:
        raise ValidationError("O total da locação deve ser maior que zero.")


def validate_settings_input(settings: AppSettings) -> None:
    rules = settings.pricing_rules
    if (
        rules.weekly_factor <= 0
        or rules.fortnightly_factor <= 0
        or rules.monthly_factor <= 0
    ):
        raise ValidationError(
            "Informe fatores válidos para semanal, quinzenal e mensal."
        )
