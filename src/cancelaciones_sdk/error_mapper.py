from __future__ import annotations

from typing import Mapping

from .exceptions import (
    ApiError,
    AuthError,
    ConflictError,
    EmptyResultError,
    InvalidCredentialsError,
    NotFoundError,
    PermissionError,
    RateLimitError,
    ServerError,
    ValidationError,
)

# PostgREST surfaces Postgres SQLSTATEs and its own PGRST codes in "code".
_PERMISSION_CODES = {"42501", "PGRST301", "PGRST302"}
_CONFLICT_CODES = {"23505", "23503"}
_EMPTY_RESULT_CODES = {"PGRST116"}
_INVALID_CREDENTIAL_CODES = {"invalid_grant", "invalid_credentials"}


def _resolve_code(payload: Mapping[str, object]) -> str:
    for key in ("code", "error_code", "error"):
        value = payload.get(key)
        if value is not None and str(value).strip():
            return str(value)
    return "HTTP_ERROR"


def _resolve_message(payload: Mapping[str, object]) -> str:
    for key in ("message", "msg", "error_description"):
        value = payload.get(key)
        if value:
            return str(value)
    return "Request failed"


def map_error(status_code: int, payload: Mapping[str, object] | None, trace_id: str | None) -> ApiError:
    payload = payload or {}
    code = _resolve_code(payload)
    # GoTrue sends the HTTP status again as a numeric "code"
    if code.isdigit() and int(code) == status_code and payload.get("error_code"):
        code = str(payload["error_code"])
    message = _resolve_message(payload)
    details = payload.get("details") or payload.get("hint")
    payload_trace_id = payload.get("trace_id")
    resolved_trace_id = str(payload_trace_id) if payload_trace_id is not None else trace_id
    mapped: type[ApiError]
    if code in _INVALID_CREDENTIAL_CODES:
        mapped = InvalidCredentialsError
    elif code in _PERMISSION_CODES or status_code == 403:
        mapped = PermissionError
    elif code in _EMPTY_RESULT_CODES:
        mapped = EmptyResultError
    elif code in _CONFLICT_CODES or status_code == 409:
        mapped = ConflictError
    elif status_code == 401:
        mapped = AuthError
    elif status_code == 404:
        mapped = NotFoundError
    elif status_code in {400, 422}:
        mapped = ValidationError
    elif status_code == 429:
        mapped = RateLimitError
    elif status_code >= 500:
        mapped = ServerError
    else:
        mapped = ApiError
    return mapped(
        code=code,
        message=message,
        details=details,
        trace_id=resolved_trace_id,
        status_code=status_code,
        raw_payload=dict(payload),
    )
