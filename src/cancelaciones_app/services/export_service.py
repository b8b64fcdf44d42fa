from __future__ import annotations

import io
import logging
import os
from dataclasses import dataclass
from datetime import date
from pathlib import Path
from typing import Mapping, Sequence

from openpyxl import Workbook

from cancelaciones_sdk import ApiSession
from cancelaciones_sdk.models import CancellationRecord, CancelledPizza, RowId

from cancelaciones_app.config import AppConfig
from cancelaciones_app.domain.dates import PLACEHOLDER, format_display_date
from cancelaciones_app.domain.discrepancy import classify_discrepancy

from .errors import ServiceError, normalize_error

logger = logging.getLogger(__name__)

SUMMARY_COLUMNS = [
    "Fecha",
    "Turno",
    "Sucursal",
    "Cajero",
    "Total Canceladas",
    "Enviadas a central",
    "Discrepancia",
]
DETAIL_COLUMNS = ["Fecha", "Turno", "Sucursal", "Cajero", "Sabor", "Motivo", "Cantidad"]
MSG_EXPORT_FAILED = "❌ Error al generar el archivo"


class ExportServiceError(ServiceError):
    pass


@dataclass
class ExportDataset:
    title: str
    columns: list[str]
    rows: list[list[object]]


@dataclass(frozen=True)
class ExportResult:
    path: Path
    row_count: int


def _header_cells(record: CancellationRecord) -> list[object]:
    return [
        format_display_date(record.date),
        record.turno or PLACEHOLDER,
        record.branch_name or PLACEHOLDER,
        record.cashier_name or PLACEHOLDER,
    ]


def build_summary_dataset(records: Sequence[CancellationRecord]) -> ExportDataset:
    rows = [
        [
            *_header_cells(record),
            record.total_cancelled,
            record.total_sent,
            classify_discrepancy(record.total_cancelled, record.total_sent).label,
        ]
        for record in records
    ]
    return ExportDataset(title="Resumen", columns=list(SUMMARY_COLUMNS), rows=rows)


def build_detail_dataset(
    records: Sequence[CancellationRecord],
    items_by_record: Mapping[RowId, Sequence[CancelledPizza]],
) -> ExportDataset:
    blank_header = [""] * 4
    rows: list[list[object]] = []
    for record in records:
        items = items_by_record.get(record.id) or []
        if not items:
            rows.append([*_header_cells(record), PLACEHOLDER, PLACEHOLDER, 0])
            continue
        for index, item in enumerate(items):
            header = _header_cells(record) if index == 0 else blank_header
            rows.append([*header, item.flavor_name or PLACEHOLDER, item.reason_name or PLACEHOLDER, item.cantidad])
    return ExportDataset(title="Detalle", columns=list(DETAIL_COLUMNS), rows=rows)


def render_xlsx(dataset: ExportDataset) -> bytes:
    workbook = Workbook()
    worksheet = workbook.active
    worksheet.title = dataset.title
    worksheet.append(dataset.columns)
    for row in dataset.rows:
        worksheet.append(row)
    output = io.BytesIO()
    workbook.save(output)
    return output.getvalue()


def export_filename(kind: str, today: date) -> str:
    return f"cancelaciones_{kind}_{today.isoformat()}.xlsx"


class ExportService:
    def __init__(self, session: ApiSession, config: AppConfig) -> None:
        self.session = session
        self.config = config

    def export_summary(self, records: Sequence[CancellationRecord], *, today: date) -> ExportResult:
        dataset = build_summary_dataset(records)
        return self._write(dataset, export_filename("resumen", today))

    def export_detail(self, records: Sequence[CancellationRecord], *, today: date) -> ExportResult:
        client = self.session.pizzas_client()
        items_by_record: dict[RowId, list[CancelledPizza]] = {}
        for record in records:
            try:
                items_by_record[record.id] = client.list_for_record(record.id)
            except Exception as exc:
                logger.warning("export_detail_fetch_failure", extra={"record_id": record.id})
                raise normalize_error(exc, ExportServiceError, fallback=MSG_EXPORT_FAILED) from exc
        dataset = build_detail_dataset(records, items_by_record)
        return self._write(dataset, export_filename("detalle", today))

    def _write(self, dataset: ExportDataset, filename: str) -> ExportResult:
        target_dir = Path(self.config.export_dir)
        path = target_dir / filename
        try:
            target_dir.mkdir(parents=True, exist_ok=True)
            payload = render_xlsx(dataset)
            tmp_path = path.with_name(f"{path.name}.tmp")
            tmp_path.write_bytes(payload)
            os.replace(tmp_path, path)
        except OSError as exc:
            logger.exception("export_write_failure", extra={"path": str(path)})
            raise ExportServiceError(message=MSG_EXPORT_FAILED, details=str(exc)) from exc
        logger.info("export_written", extra={"path": str(path), "rows": len(dataset.rows)})
        return ExportResult(path=path, row_count=len(dataset.rows))
