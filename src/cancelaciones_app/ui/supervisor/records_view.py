from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Any

from cancelaciones_sdk.clients.records import RecordFilters
from cancelaciones_sdk.models import Branch, CancellationRecord, RowId

from cancelaciones_app.app.state import AppContext
from cancelaciones_app.domain.dates import format_display_date, today_in
from cancelaciones_app.domain.discrepancy import PageTotals, classify_discrepancy, summarize
from cancelaciones_app.services.catalog_service import CatalogService, CatalogServiceError
from cancelaciones_app.services.export_service import ExportResult, ExportService, ExportServiceError
from cancelaciones_app.services.supervisor_records_service import (
    SupervisorRecordsService,
    SupervisorRecordsServiceError,
)
from cancelaciones_app.ui.pagination import PaginationState, next_page, prev_page, reset_page
from cancelaciones_app.ui.shared.view_state import ListingState, listing_state
from cancelaciones_app.ui.supervisor.detail_panel import DetailPanel


@dataclass
class FilterInput:
    branch_id: RowId | None = None
    date: date | None = None

    def to_filters(self) -> RecordFilters:
        return RecordFilters(branch_id=self.branch_id, date=self.date)


@dataclass
class SupervisorRecordsView:
    service: SupervisorRecordsService
    catalog_service: CatalogService
    export_service: ExportService
    context: AppContext
    branches: list[Branch] = field(default_factory=list)
    pending: FilterInput = field(default_factory=FilterInput)
    applied: RecordFilters = field(default_factory=RecordFilters)
    pagination: PaginationState = field(default_factory=PaginationState)
    records: list[CancellationRecord] = field(default_factory=list)
    totals: PageTotals = field(default_factory=PageTotals)
    detail: DetailPanel | None = None
    is_loading: bool = False
    error_message: str | None = None
    export_message: str | None = None
    trace_id: str | None = None

    def __post_init__(self) -> None:
        self.pagination.page_size = self.context.config.page_size
        if self.detail is None:
            self.detail = DetailPanel(service=self.service)

    def load(self) -> bool:
        try:
            self.branches = self.catalog_service.list_branches()
        except CatalogServiceError as exc:
            self.branches = []
            self.trace_id = exc.trace_id
        return self.load_records()

    def load_records(self) -> bool:
        self.is_loading = True
        self.error_message = None
        self.detail.close()
        try:
            self.records = self.service.list_records(
                self.applied,
                page=self.pagination.page,
                page_size=self.pagination.page_size,
            )
            self.pagination.last_count = len(self.records)
            return True
        except SupervisorRecordsServiceError as exc:
            self.records = []
            self.pagination.last_count = 0
            self.error_message = exc.message
            self.trace_id = exc.trace_id
            return False
        finally:
            self.totals = summarize(self.records)
            self.is_loading = False

    def set_branch_filter(self, branch_id: RowId | None) -> None:
        self.pending.branch_id = branch_id

    def set_date_filter(self, value: date | None) -> None:
        self.pending.date = value

    def apply_filters(self) -> bool:
        self.applied = self.pending.to_filters()
        reset_page(self.pagination)
        return self.load_records()

    def clear_filters(self) -> bool:
        self.pending = FilterInput()
        return self.apply_filters()

    def next_page(self) -> bool:
        if not self.pagination.has_next:
            return False
        next_page(self.pagination)
        return self.load_records()

    def prev_page(self) -> bool:
        if not self.pagination.has_prev:
            return False
        prev_page(self.pagination)
        return self.load_records()

    def toggle_detail(self, record_id: RowId) -> bool:
        record = self._find(record_id)
        if record is None:
            return False
        return self.detail.toggle(record)

    def validate_selected(self, raw: Any) -> bool:
        updated = self.detail.submit_validation(raw)
        if updated is None:
            return False
        self.records = [updated if record.id == updated.id else record for record in self.records]
        self.totals = summarize(self.records)
        return True

    def export_summary(self) -> ExportResult | None:
        return self._export(detailed=False)

    def export_detail(self) -> ExportResult | None:
        return self._export(detailed=True)

    def _export(self, *, detailed: bool) -> ExportResult | None:
        self.export_message = None
        today = today_in(self.context.config.timezone)
        try:
            records = self.service.list_all_records(self.applied)
            if detailed:
                result = self.export_service.export_detail(records, today=today)
            else:
                result = self.export_service.export_summary(records, today=today)
        except (SupervisorRecordsServiceError, ExportServiceError) as exc:
            self.export_message = exc.message
            self.trace_id = exc.trace_id
            return None
        self.export_message = f"Archivo generado: {result.path} ({result.row_count} filas)"
        return result

    def _find(self, record_id: RowId) -> CancellationRecord | None:
        for record in self.records:
            if str(record.id) == str(record_id):
                return record
        return None

    def _branch_label(self, branch_id: RowId | None) -> str:
        if branch_id is None:
            return "Todas"
        for branch in self.branches:
            if str(branch.id) == str(branch_id):
                return branch.name
        return str(branch_id)

    def state(self) -> ListingState:
        return listing_state(
            is_loading=self.is_loading,
            error=self.error_message,
            has_rows=bool(self.records),
            trace_id=self.trace_id,
        )

    def render(self) -> dict[str, Any]:
        state = self.state()
        return {
            "state": state.render(),
            "notice": state.notice,
            "filters": {
                "sucursal": self._branch_label(self.pending.branch_id),
                "fecha": format_display_date(self.pending.date) if self.pending.date else "Todas",
            },
            "totals": self.totals.render(),
            "rows": [
                {
                    "id": record.id,
                    "fecha": format_display_date(record.date),
                    "turno": record.turno,
                    "sucursal": record.branch_name,
                    "cajero": record.cashier_name,
                    "total_cancelled": record.total_cancelled,
                    "total_sent": record.total_sent,
                    "discrepancia": classify_discrepancy(record.total_cancelled, record.total_sent).label,
                }
                for record in self.records
            ],
            "page": self.pagination.label,
            "has_next": self.pagination.has_next,
            "has_prev": self.pagination.has_prev,
            "detail": self.detail.render(),
            "export_message": self.export_message,
        }
