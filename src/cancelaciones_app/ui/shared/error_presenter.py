from __future__ import annotations

from typing import Any

from cancelaciones_app.services.errors import ServiceError


def build_error_payload(error: Exception) -> dict[str, Any]:
    if isinstance(error, ServiceError):
        return {
            "code": error.code,
            "message": error.message,
            "details": error.details,
            "trace_id": error.trace_id,
        }
    return {
        "code": "INTERNAL_ERROR",
        "message": str(error) or "Error inesperado",
        "details": type(error).__name__,
        "trace_id": None,
    }


def format_error_banner(payload: dict[str, Any]) -> str:
    trace_id = payload.get("trace_id") or "n/a"
    return f"[ERROR] {payload.get('message')} (code={payload.get('code')} trace_id={trace_id})"


def print_error_banner(payload: dict[str, Any]) -> None:
    print(format_error_banner(payload))
