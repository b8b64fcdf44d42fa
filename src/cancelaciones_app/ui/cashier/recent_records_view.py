from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from cancelaciones_sdk.models import CancellationRecord, CancelledPizza, RowId

from cancelaciones_app.app.state import AppContext
from cancelaciones_app.domain.dates import format_display_date
from cancelaciones_app.services.cashier_records_service import CashierRecordsService, CashierRecordsServiceError
from cancelaciones_app.ui.pagination import PaginationState, next_page, prev_page, reset_page
from cancelaciones_app.ui.shared.view_state import ListingState, listing_state


@dataclass
class RecentRecordsView:
    service: CashierRecordsService
    context: AppContext
    pagination: PaginationState = field(default_factory=PaginationState)
    records: list[CancellationRecord] = field(default_factory=list)
    expanded_id: RowId | None = None
    detail_cache: dict[RowId, list[CancelledPizza]] = field(default_factory=dict)
    is_loading: bool = False
    detail_loading: bool = False
    error_message: str | None = None
    trace_id: str | None = None

    def __post_init__(self) -> None:
        self.pagination.page_size = self.context.config.page_size

    def load(self) -> bool:
        user_id = self.context.user_id
        if user_id is None:
            self.records = []
            return False
        self.is_loading = True
        self.error_message = None
        self._collapse()
        try:
            self.records = self.service.list_recent(
                user_id,
                page=self.pagination.page,
                page_size=self.pagination.page_size,
            )
            self.pagination.last_count = len(self.records)
            return True
        except CashierRecordsServiceError as exc:
            self.records = []
            self.pagination.last_count = 0
            self.error_message = exc.message
            self.trace_id = exc.trace_id
            return False
        finally:
            self.is_loading = False

    def reload_first_page(self) -> bool:
        reset_page(self.pagination)
        return self.load()

    def next_page(self) -> bool:
        if not self.pagination.has_next:
            return False
        next_page(self.pagination)
        return self.load()

    def prev_page(self) -> bool:
        if not self.pagination.has_prev:
            return False
        prev_page(self.pagination)
        return self.load()

    def toggle(self, record_id: RowId) -> bool:
        """Expand a row (fetching its pizzas) or collapse it if already open."""
        record_id = self._resolve_id(record_id)
        if self.expanded_id == record_id:
            self._collapse()
            return True
        self._collapse()
        self.detail_loading = True
        try:
            items = self.service.load_detail(record_id)
        except CashierRecordsServiceError as exc:
            self.error_message = exc.message
            self.trace_id = exc.trace_id
            return False
        finally:
            self.detail_loading = False
        self.expanded_id = record_id
        self.detail_cache[record_id] = items
        return True

    def expanded_items(self) -> list[CancelledPizza]:
        if self.expanded_id is None:
            return []
        return self.detail_cache.get(self.expanded_id, [])

    def _resolve_id(self, record_id: RowId) -> RowId:
        for record in self.records:
            if str(record.id) == str(record_id):
                return record.id
        return record_id

    def _collapse(self) -> None:
        if self.expanded_id is not None:
            self.detail_cache.pop(self.expanded_id, None)
        self.expanded_id = None

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
            "rows": [
                {
                    "id": record.id,
                    "fecha": format_display_date(record.date),
                    "turno": record.turno,
                    "total_cancelled": record.total_cancelled,
                    "expanded": record.id == self.expanded_id,
                }
                for record in self.records
            ],
            "detail": [
                {"sabor": item.flavor_name, "motivo": item.reason_name, "cantidad": item.cantidad}
                for item in self.expanded_items()
            ],
            "page": self.pagination.label,
            "has_next": self.pagination.has_next,
            "has_prev": self.pagination.has_prev,
        }
