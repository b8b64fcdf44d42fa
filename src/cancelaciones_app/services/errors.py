from __future__ import annotations

from dataclasses import dataclass

from cancelaciones_sdk.exceptions import ApiError
from cancelaciones_sdk.ui_errors import to_user_facing_error


@dataclass(frozen=True)
class ServiceError(RuntimeError):
    message: str
    details: str | None = None
    trace_id: str | None = None
    code: str = "SERVICE_ERROR"

    def __str__(self) -> str:
        return self.message


def normalize_error(
    exc: Exception,
    error_type: type[ServiceError] = ServiceError,
    *,
    fallback: str = "Ocurrió un error inesperado",
    code: str = "SERVICE_ERROR",
) -> ServiceError:
    if isinstance(exc, ServiceError):
        return exc
    if isinstance(exc, ApiError):
        user_facing = to_user_facing_error(exc, fallback=fallback)
        return error_type(
            message=user_facing.message,
            details=user_facing.technical_details,
            trace_id=user_facing.trace_id,
            code=code,
        )
    return error_type(message=fallback, details=str(exc) or type(exc).__name__, code=code)
