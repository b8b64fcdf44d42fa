from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any

def format_filter_value(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    return str(value)

@dataclass
class TableQuery:
    """Builds PostgREST query-string parameters for one table read or write."""

    table: str
    columns: str = "*"
    filters: dict[str, str] = field(default_factory=dict)
    order_by: list[str] = field(default_factory=list)
    offset: int | None = None
    limit: int | None = None

    @property
    def path(self) -> str:
        return f"/rest/v1/{self.table}"

    def select(self, columns: str) -> "TableQuery":
        self.columns = " ".join(columns.split()).replace(", ", ",")
        return self

    def eq(self, column: str, value: Any) -> "TableQuery":
        self.filters[column] = f"eq.{format_filter_value(value)}"
        return self

    def or_(self, *conditions: str) -> "TableQuery":
        self.filters["or"] = f"({','.join(conditions)})"
        return self

    def order(self, column: str, *, desc: bool = False) -> "TableQuery":
        self.order_by.append(f"{column}.{'desc' if desc else 'asc'}")
        return self

    def range(self, offset: int, limit: int) -> "TableQuery":
        if offset < 0:
            raise ValueError("offset must be >= 0")
        if limit < 1:
            raise ValueError("limit must be >= 1")
        self.offset = offset
        self.limit = limit
        return self

    def to_params(self, *, include_select: bool = True) -> dict[str, str]:
        params: dict[str, str] = {}
        if include_select:
            params["select"] = self.columns
        params.update(self.filters)
        if self.order_by:
            params["order"] = ",".join(self.order_by)
        if self.offset is not None:
            params["offset"] = str(self.offset)
        if self.limit is not None:
            params["limit"] = str(self.limit)
        return params

def table(name: str) -> TableQuery:
    return TableQuery(table=name)
