from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from ..exceptions import EmptyResultError
from ..models import CancellationRecord, RecordCreate, RowId
from ..query import table
from .base import BaseClient

RECORD_TABLE = "cancellation_records"
RECENT_COLUMNS = "id, date, turno, total_cancelled, total_sent"
LISTING_COLUMNS = "id, date, turno, total_cancelled, total_sent, cashier_name, branch_id, branches(name)"
# total_sent may only move away from "unset" once
UNVALIDATED_CONDITIONS = ("total_sent.is.null", "total_sent.eq.0")


@dataclass(frozen=True)
class RecordFilters:
    branch_id: RowId | None = None
    date: date | None = None


class RecordsClient(BaseClient):
    def list_recent_for_creator(self, created_by: str, *, offset: int, limit: int) -> list[CancellationRecord]:
        query = (
            table(RECORD_TABLE)
            .select(RECENT_COLUMNS)
            .eq("created_by", created_by)
            .order("date", desc=True)
            .order("id", desc=True)
            .range(offset, limit)
        )
        return [CancellationRecord.model_validate(row) for row in self._select(query, operation="list_recent")]

    def list_records(
        self,
        filters: RecordFilters | None = None,
        *,
        offset: int | None = None,
        limit: int | None = None,
    ) -> list[CancellationRecord]:
        filters = filters or RecordFilters()
        query = table(RECORD_TABLE).select(LISTING_COLUMNS).order("date", desc=True).order("id", desc=True)
        if filters.branch_id is not None:
            query.eq("branch_id", filters.branch_id)
        if filters.date is not None:
            query.eq("date", filters.date)
        if limit is None:
            rows = self._select_all(query, operation="list_all_records")
        else:
            rows = self._select(query.range(offset or 0, limit), operation="list_records")
        return [CancellationRecord.model_validate(row) for row in rows]

    def insert_record(self, payload: RecordCreate) -> CancellationRecord:
        body = payload.model_dump(mode="json")
        rows = self._write("POST", table(RECORD_TABLE), body, operation="insert_record")
        if not rows:
            raise EmptyResultError(
                code="RECORD_NOT_RETURNED",
                message="Insert returned no record",
                details=None,
                trace_id=self._trace_id(),
                status_code=201,
            )
        return CancellationRecord.model_validate(rows[0])

    def set_total_sent(self, record_id: RowId, total_sent: int) -> list[CancellationRecord]:
        """Write total_sent only while it is still unset; an empty list means no row matched."""
        query = table(RECORD_TABLE).eq("id", record_id).or_(*UNVALIDATED_CONDITIONS)
        rows = self._write("PATCH", query, {"total_sent": total_sent}, operation="set_total_sent")
        return [CancellationRecord.model_validate(row) for row in rows]

    def delete_record(self, record_id: RowId) -> None:
        query = table(RECORD_TABLE).eq("id", record_id)
        self._write("DELETE", query, None, operation="delete_record", return_rows=False)

    def _trace_id(self) -> str | None:
        return self.http.trace.trace_id if self.http.trace else None
