from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from cancelaciones_sdk.models import CancellationRecord, CancelledPizza

from cancelaciones_app.domain.dates import format_display_date
from cancelaciones_app.domain.discrepancy import is_validated
from cancelaciones_app.domain.validation import validate_arrived_count
from cancelaciones_app.services.supervisor_records_service import (
    MSG_VALIDATION_SAVED,
    SupervisorRecordsService,
    SupervisorRecordsServiceError,
)


@dataclass
class DetailPanel:
    service: SupervisorRecordsService
    record: CancellationRecord | None = None
    items: list[CancelledPizza] = field(default_factory=list)
    arrived_input: str = ""
    is_loading: bool = False
    is_saving: bool = False
    message: str | None = None
    error_code: str | None = None
    trace_id: str | None = None

    @property
    def is_open(self) -> bool:
        return self.record is not None

    @property
    def can_validate(self) -> bool:
        return self.record is not None and not is_validated(self.record.total_sent)

    @property
    def total_reported(self) -> int:
        return sum(item.cantidad or 0 for item in self.items)

    def toggle(self, record: CancellationRecord) -> bool:
        if self.record is not None and self.record.id == record.id:
            self.close()
            return True
        self.close()
        self.record = record
        self.arrived_input = "" if record.total_sent is None else str(record.total_sent)
        self.is_loading = True
        try:
            self.items = self.service.load_detail(record.id)
            return True
        except SupervisorRecordsServiceError as exc:
            self.items = []
            self.message = exc.message
            self.trace_id = exc.trace_id
            return False
        finally:
            self.is_loading = False

    def close(self) -> None:
        self.record = None
        self.items = []
        self.arrived_input = ""
        self.message = None
        self.error_code = None

    def submit_validation(self, raw: Any = None) -> CancellationRecord | None:
        if self.record is None:
            return None
        value = self.arrived_input if raw is None else raw
        self.arrived_input = str(value)
        self.message = None
        self.error_code = None
        check = validate_arrived_count(value)
        if not check.ok:
            self.message = check.first_error
            self.error_code = "INVALID_INPUT"
            return None
        self.is_saving = True
        try:
            updated = self.service.validate_record(self.record, value)
        except SupervisorRecordsServiceError as exc:
            self.message = exc.message
            self.error_code = exc.code
            self.trace_id = exc.trace_id
            return None
        finally:
            self.is_saving = False
        self.record = updated
        self.message = MSG_VALIDATION_SAVED
        return updated

    def render(self) -> dict[str, Any]:
        if self.record is None:
            return {"open": False}
        record = self.record
        confirmation = None
        if not self.can_validate:
            confirmation = f"Validación realizada: llegaron {record.total_sent} pizzas."
        return {
            "open": True,
            "fecha": format_display_date(record.date),
            "turno": record.turno,
            "sucursal": record.branch_name or "—",
            "cajero": record.cashier_name,
            "loading": self.is_loading,
            "items": [
                {"sabor": item.flavor_name, "motivo": item.reason_name, "cantidad": item.cantidad}
                for item in self.items
            ],
            "total_reported": self.total_reported,
            "can_validate": self.can_validate,
            "arrived_input": self.arrived_input,
            "confirmation": confirmation,
            "message": self.message,
        }
