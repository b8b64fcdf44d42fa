from __future__ import annotations

from datetime import date
from typing import Any, Sequence

from cancelaciones_app.domain.dates import PLACEHOLDER, format_display_date


def normalize_value(value: Any) -> str:
    if value is None:
        return PLACEHOLDER
    if isinstance(value, str):
        clean = value.strip()
        return clean or PLACEHOLDER
    if isinstance(value, date):
        return format_display_date(value)
    return str(value)


def format_table(rows: Sequence[dict[str, Any]], columns: Sequence[tuple[str, str]]) -> list[str]:
    if not rows:
        return ["(sin resultados)"]
    widths = []
    for key, header in columns:
        max_cell = max(len(normalize_value(row.get(key))) for row in rows)
        widths.append(max(len(header), max_cell))

    lines = [
        " | ".join(header.ljust(widths[idx]) for idx, (_, header) in enumerate(columns)),
        "-+-".join("-" * width for width in widths),
    ]
    for row in rows:
        lines.append(" | ".join(normalize_value(row.get(key)).ljust(widths[idx]) for idx, (key, _) in enumerate(columns)))
    return lines


def print_table(title: str, rows: Sequence[dict[str, Any]], columns: Sequence[tuple[str, str]]) -> None:
    print(f"\n{title}")
    for line in format_table(rows, columns):
        print(line)
