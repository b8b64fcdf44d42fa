from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Any

from cancelaciones_sdk.models import RowId, ShiftPeriod

from cancelaciones_app.app.state import AppContext
from cancelaciones_app.domain.dates import current_shift, format_display_date, today_in
from cancelaciones_app.domain.validation import validate_record_draft
from cancelaciones_app.services.cashier_records_service import (
    CashierRecordsService,
    CashierRecordsServiceError,
    LineItemDraft,
    RecordDraft,
)
from cancelaciones_app.services.catalog_service import CatalogService, CatalogServiceError, EntryCatalogs
from cancelaciones_app.ui.cashier.recent_records_view import RecentRecordsView

MSG_SAVED = "✅ Registro guardado correctamente"
ITEM_FIELDS = {"flavor_id", "reason_id", "cantidad"}


@dataclass
class EntryFormView:
    service: CashierRecordsService
    catalog_service: CatalogService
    context: AppContext
    recent: RecentRecordsView | None = None
    draft: RecordDraft = field(default_factory=RecordDraft)
    catalogs: EntryCatalogs = field(default_factory=EntryCatalogs)
    is_saving: bool = False
    message: str | None = None
    trace_id: str | None = None

    def load(self) -> bool:
        self.reset()
        ok = True
        try:
            self.catalogs = self.catalog_service.load_entry_catalogs()
        except CatalogServiceError as exc:
            self.message = exc.message
            self.trace_id = exc.trace_id
            ok = False
        if self.recent is not None:
            self.recent.reload_first_page()
        return ok

    def today(self) -> date:
        return today_in(self.context.config.timezone)

    def reset(self) -> None:
        tz = self.context.config.timezone
        self.draft = RecordDraft(date=today_in(tz), turno=current_shift(tz))

    def set_cashier_name(self, value: str) -> None:
        self.draft.cashier_name = value

    def set_date(self, value: date | None) -> None:
        self.draft.date = value

    def set_turno(self, value: ShiftPeriod | str) -> None:
        self.draft.turno = ShiftPeriod(value)

    def add_item(self) -> None:
        self.draft.items.append(LineItemDraft())

    def remove_item(self, index: int) -> None:
        if 0 <= index < len(self.draft.items):
            del self.draft.items[index]

    def update_item(self, index: int, field_name: str, value: RowId | str | None) -> None:
        if field_name not in ITEM_FIELDS:
            raise ValueError(f"Unknown line item field: {field_name}")
        setattr(self.draft.items[index], field_name, value)

    def submit(self) -> bool:
        validation = validate_record_draft(
            cashier_name=self.draft.cashier_name,
            record_date=self.draft.date,
            items=self.draft.items,
            today=self.today(),
        )
        if not validation.ok:
            self.message = validation.first_error
            return False

        user_id = self.context.user_id
        if user_id is None or self.context.profile is None:
            self.message = "Sesión no disponible"
            return False

        self.is_saving = True
        self.message = None
        try:
            self.service.submit(
                self.draft,
                branch_id=self.context.profile.branch_id,
                created_by=user_id,
                today=self.today(),
            )
        except CashierRecordsServiceError as exc:
            self.message = exc.message
            self.trace_id = exc.trace_id
            return False
        finally:
            self.is_saving = False

        self.message = MSG_SAVED
        self.reset()
        if self.recent is not None:
            self.recent.reload_first_page()
        return True

    def _label(self, options: list[Any], value: RowId | None) -> str | None:
        for option in options:
            if str(option.id) == str(value):
                return option.label
        return None

    def render(self) -> dict[str, Any]:
        return {
            "branch": self.context.branch_name or "—",
            "cashier_name": self.draft.cashier_name,
            "fecha": format_display_date(self.draft.date),
            "turno": self.draft.turno.value,
            "items": [
                {
                    "sabor": self._label(self.catalogs.flavors, item.flavor_id),
                    "motivo": self._label(self.catalogs.reasons, item.reason_id),
                    "cantidad": item.cantidad,
                }
                for item in self.draft.items
            ],
            "save_label": "Guardando..." if self.is_saving else "Guardar registro",
            "message": self.message,
        }
