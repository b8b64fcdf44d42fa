from __future__ import annotations

import logging
from typing import Any

from cancelaciones_sdk import ApiSession
from cancelaciones_sdk.clients.records import RecordFilters
from cancelaciones_sdk.models import CancellationRecord, CancelledPizza, RowId

from cancelaciones_app.domain.discrepancy import is_validated
from cancelaciones_app.domain.validation import parse_non_negative_int, validate_arrived_count

from .errors import ServiceError, normalize_error

logger = logging.getLogger(__name__)

MSG_LIST_FAILED = "Error cargando registros"
MSG_DETAIL_FAILED = "Error cargando detalle"
MSG_VALIDATION_FAILED = "❌ Error al guardar la validación"
MSG_VALIDATION_NOT_APPLIED = "⚠️ No se pudo verificar la actualización (revisa políticas RLS)"
MSG_ALREADY_VALIDATED = "El registro ya fue validado"
MSG_VALIDATION_SAVED = "Validación guardada correctamente"

CODE_INVALID_INPUT = "INVALID_INPUT"
CODE_ALREADY_VALIDATED = "ALREADY_VALIDATED"
CODE_UPDATE_FAILED = "UPDATE_FAILED"
CODE_UPDATE_NOT_APPLIED = "UPDATE_NOT_APPLIED"


class SupervisorRecordsServiceError(ServiceError):
    pass


class SupervisorRecordsService:
    def __init__(self, session: ApiSession) -> None:
        self.session = session

    def list_records(self, filters: RecordFilters, *, page: int, page_size: int) -> list[CancellationRecord]:
        try:
            return self.session.records_client().list_records(
                filters,
                offset=page * page_size,
                limit=page_size,
            )
        except Exception as exc:
            logger.warning("records_list_failure", extra={"page": page, "error_type": type(exc).__name__})
            raise normalize_error(exc, SupervisorRecordsServiceError, fallback=MSG_LIST_FAILED) from exc

    def list_all_records(self, filters: RecordFilters) -> list[CancellationRecord]:
        try:
            return self.session.records_client().list_records(filters)
        except Exception as exc:
            logger.warning("records_list_all_failure", extra={"error_type": type(exc).__name__})
            raise normalize_error(exc, SupervisorRecordsServiceError, fallback=MSG_LIST_FAILED) from exc

    def load_detail(self, record_id: RowId) -> list[CancelledPizza]:
        try:
            return self.session.pizzas_client().list_for_record(record_id)
        except Exception as exc:
            logger.warning("record_detail_failure", extra={"record_id": record_id, "error_type": type(exc).__name__})
            raise normalize_error(exc, SupervisorRecordsServiceError, fallback=MSG_DETAIL_FAILED) from exc

    def validate_record(self, record: CancellationRecord, raw_count: Any) -> CancellationRecord:
        """Store the arrived-at-central count once; returns the updated row."""
        check = validate_arrived_count(raw_count)
        if not check.ok:
            raise SupervisorRecordsServiceError(message=check.first_error or "", code=CODE_INVALID_INPUT)
        if is_validated(record.total_sent):
            raise SupervisorRecordsServiceError(message=MSG_ALREADY_VALIDATED, code=CODE_ALREADY_VALIDATED)
        total_sent = parse_non_negative_int(raw_count)

        try:
            rows = self.session.records_client().set_total_sent(record.id, total_sent)
        except Exception as exc:
            logger.exception("validation_save_failure", extra={"record_id": record.id})
            raise normalize_error(
                exc,
                SupervisorRecordsServiceError,
                fallback=MSG_VALIDATION_FAILED,
                code=CODE_UPDATE_FAILED,
            ) from exc
        if not rows:
            logger.warning("validation_not_applied", extra={"record_id": record.id})
            raise SupervisorRecordsServiceError(message=MSG_VALIDATION_NOT_APPLIED, code=CODE_UPDATE_NOT_APPLIED)

        updated = rows[0]
        logger.info("validation_saved", extra={"record_id": record.id, "total_sent": updated.total_sent})
        return record.model_copy(update={"total_sent": updated.total_sent})
