from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date

from cancelaciones_sdk import ApiSession
from cancelaciones_sdk.models import (
    CancellationRecord,
    CancelledPizza,
    PizzaCreate,
    RecordCreate,
    RowId,
    ShiftPeriod,
)

from cancelaciones_app.domain.validation import parse_positive_int, validate_record_draft

from .errors import ServiceError, normalize_error

logger = logging.getLogger(__name__)

MSG_SAVE_FAILED = "❌ Error al guardar registro"
MSG_LIST_FAILED = "Error cargando registros"
MSG_DETAIL_FAILED = "Error cargando detalle"


class CashierRecordsServiceError(ServiceError):
    pass


@dataclass
class LineItemDraft:
    flavor_id: RowId | None = None
    reason_id: RowId | None = None
    cantidad: int | str | None = 1


@dataclass
class RecordDraft:
    cashier_name: str = ""
    date: date | None = None
    turno: ShiftPeriod = ShiftPeriod.AM
    items: list[LineItemDraft] = field(default_factory=lambda: [LineItemDraft()])


@dataclass(frozen=True)
class SubmitResult:
    record: CancellationRecord
    item_count: int


class CashierRecordsService:
    def __init__(self, session: ApiSession) -> None:
        self.session = session

    def submit(self, draft: RecordDraft, *, branch_id: RowId | None, created_by: str, today: date) -> SubmitResult:
        validation = validate_record_draft(
            cashier_name=draft.cashier_name,
            record_date=draft.date,
            items=draft.items,
            today=today,
        )
        if not validation.ok:
            raise CashierRecordsServiceError(message=validation.first_error or MSG_SAVE_FAILED, code="CLIENT_VALIDATION")

        header = RecordCreate(
            branch_id=branch_id,
            cashier_name=draft.cashier_name.strip(),
            date=draft.date,
            turno=draft.turno,
            total_cancelled=len(draft.items),
            created_by=created_by,
        )
        try:
            record = self.session.records_client().insert_record(header)
        except Exception as exc:
            logger.exception("record_insert_failure", extra={"created_by": created_by})
            raise normalize_error(exc, CashierRecordsServiceError, fallback=MSG_SAVE_FAILED, code="INSERT_FAILED") from exc

        items = [
            PizzaCreate(
                record_id=record.id,
                flavor_id=item.flavor_id,
                reason_id=item.reason_id,
                cantidad=parse_positive_int(item.cantidad),
            )
            for item in draft.items
        ]
        try:
            inserted = self.session.pizzas_client().insert_pizzas(items)
        except Exception as exc:
            logger.exception("pizzas_insert_failure", extra={"record_id": record.id, "items": len(items)})
            self._discard_header(record.id)
            raise normalize_error(exc, CashierRecordsServiceError, fallback=MSG_SAVE_FAILED, code="INSERT_FAILED") from exc

        logger.info("record_saved", extra={"record_id": record.id, "items": inserted})
        return SubmitResult(record=record, item_count=inserted)

    def list_recent(self, created_by: str, *, page: int, page_size: int) -> list[CancellationRecord]:
        try:
            return self.session.records_client().list_recent_for_creator(
                created_by,
                offset=page * page_size,
                limit=page_size,
            )
        except Exception as exc:
            logger.warning("recent_records_failure", extra={"created_by": created_by, "error_type": type(exc).__name__})
            raise normalize_error(exc, CashierRecordsServiceError, fallback=MSG_LIST_FAILED) from exc

    def load_detail(self, record_id: RowId) -> list[CancelledPizza]:
        try:
            return self.session.pizzas_client().list_for_record(record_id)
        except Exception as exc:
            logger.warning("record_detail_failure", extra={"record_id": record_id, "error_type": type(exc).__name__})
            raise normalize_error(exc, CashierRecordsServiceError, fallback=MSG_DETAIL_FAILED) from exc

    def _discard_header(self, record_id: RowId) -> None:
        try:
            self.session.records_client().delete_record(record_id)
        except Exception:
            logger.exception("orphan_record_left", extra={"record_id": record_id})
            return
        logger.info("orphan_record_removed", extra={"record_id": record_id})
