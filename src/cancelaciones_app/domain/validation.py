from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Sequence

_DIGITS = re.compile(r"^\d+$")

MSG_CASHIER_REQUIRED = "⚠️ Debe ingresar el nombre del cajero"
MSG_DATE_REQUIRED = "⚠️ Debe seleccionar la fecha"
MSG_DATE_IN_FUTURE = "⚠️ La fecha no puede ser posterior a hoy"
MSG_ITEMS_REQUIRED = "⚠️ Debe agregar al menos una pizza"
MSG_ITEM_INCOMPLETE = "⚠️ Complete todos los campos de las pizzas"
MSG_ITEM_QUANTITY = "⚠️ La cantidad debe ser un número entero mayor a cero"
MSG_ARRIVED_INVALID = "Por favor, ingrese un número válido de pizzas que llegaron a central."


@dataclass
class ValidationResult:
    ok: bool
    field_errors: dict[str, str] = field(default_factory=dict)
    summary: list[str] = field(default_factory=list)

    @property
    def first_error(self) -> str | None:
        return self.summary[0] if self.summary else None


def _result(errors: dict[str, str]) -> ValidationResult:
    return ValidationResult(ok=not errors, field_errors=errors, summary=list(dict.fromkeys(errors.values())))


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def parse_non_negative_int(raw: Any) -> int | None:
    if isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw if raw >= 0 else None
    text = str(raw or "").strip()
    if not _DIGITS.match(text):
        return None
    return int(text)


def parse_positive_int(raw: Any) -> int | None:
    value = parse_non_negative_int(raw)
    if value is None or value == 0:
        return None
    return value


def validate_record_draft(
    *,
    cashier_name: str | None,
    record_date: date | None,
    items: Sequence[Any],
    today: date,
) -> ValidationResult:
    """Errors come back in the order the entry form reports them."""
    errors: dict[str, str] = {}
    if _is_blank(cashier_name):
        errors["cashier_name"] = MSG_CASHIER_REQUIRED
    if record_date is None:
        errors["date"] = MSG_DATE_REQUIRED
    elif record_date > today:
        errors["date"] = MSG_DATE_IN_FUTURE
    if not items:
        errors["items"] = MSG_ITEMS_REQUIRED
    for idx, item in enumerate(items):
        if _is_blank(item.flavor_id) or _is_blank(item.reason_id) or _is_blank(item.cantidad):
            errors.setdefault("items.incomplete", MSG_ITEM_INCOMPLETE)
            errors[f"items[{idx}]"] = MSG_ITEM_INCOMPLETE
        elif parse_positive_int(item.cantidad) is None:
            errors.setdefault("items.cantidad", MSG_ITEM_QUANTITY)
            errors[f"items[{idx}].cantidad"] = MSG_ITEM_QUANTITY
    return _result(errors)


def validate_arrived_count(raw: Any) -> ValidationResult:
    if parse_non_negative_int(raw) is None:
        return _result({"total_sent": MSG_ARRIVED_INVALID})
    return _result({})
