from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ..http_client import HttpClient
from ..query import TableQuery

FETCH_PAGE_SIZE = 1000


@dataclass
class BaseClient:
    http: HttpClient
    access_token: str | None = None

    def _auth_headers(self) -> dict[str, str]:
        anon_key = self.http.config.anon_key
        return {
            "apikey": anon_key,
            "Authorization": f"Bearer {self.access_token or anon_key}",
        }

    def _request(self, method: str, path: str, **kwargs):
        headers = kwargs.pop("headers", {})
        merged = {**self._auth_headers(), **headers}
        return self.http.request(method, path, headers=merged, **kwargs)

    def _select(self, query: TableQuery, *, operation: str) -> list[dict[str, Any]]:
        data = self._request(
            "GET",
            query.path,
            params=query.to_params(),
            module=query.table,
            operation=operation,
        )
        return _as_rows(data)

    def _select_all(
        self,
        query: TableQuery,
        *,
        operation: str,
        page_size: int = FETCH_PAGE_SIZE,
    ) -> list[dict[str, Any]]:
        """Read every matching row, paging past the server's max-rows cap."""
        rows: list[dict[str, Any]] = []
        totals: list[int | None] = []
        while True:
            query.range(len(rows), page_size)
            data = self._request(
                "GET",
                query.path,
                params=query.to_params(),
                headers={"Prefer": "count=exact"},
                response_hook=lambda response: totals.append(parse_total(response.headers.get("Content-Range"))),
                module=query.table,
                operation=operation,
            )
            page = _as_rows(data)
            rows.extend(page)
            total = totals[-1] if totals else None
            if not page:
                return rows
            if total is not None and len(rows) >= total:
                return rows
            # without a count, only a short page proves the end
            if total is None and len(page) < page_size:
                return rows

    def _write(
        self,
        method: str,
        query: TableQuery,
        body: dict[str, Any] | list[dict[str, Any]] | None,
        *,
        operation: str,
        return_rows: bool = True,
    ) -> list[dict[str, Any]]:
        prefer = "return=representation" if return_rows else "return=minimal"
        data = self._request(
            method,
            query.path,
            json_body=body,
            params=query.to_params(include_select=return_rows) or None,
            headers={"Prefer": prefer},
            module=query.table,
            operation=operation,
        )
        return _as_rows(data)


def _as_rows(data: Any) -> list[dict[str, Any]]:
    if data is None:
        return []
    if isinstance(data, dict):
        return [data]
    if not isinstance(data, list):
        raise ValueError("Expected a JSON array of rows")
    return data


def parse_total(content_range: str | None) -> int | None:
    # "0-999/2500"; the total is "*" unless a count was requested
    if not content_range or "/" not in content_range:
        return None
    total = content_range.rsplit("/", 1)[1].strip()
    return int(total) if total.isdigit() else None
