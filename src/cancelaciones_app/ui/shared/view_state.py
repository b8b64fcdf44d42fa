from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

MSG_LOADING = "Cargando..."
MSG_EMPTY = "No hay registros"


class ListingStatus(str, Enum):
    LOADING = "loading"
    EMPTY = "empty"
    ERROR = "error"
    READY = "ready"


@dataclass(frozen=True)
class ListingState:
    """What a record listing shows above its rows."""

    status: ListingStatus
    message: str | None = None
    trace_id: str | None = None

    @property
    def notice(self) -> str | None:
        if self.status is ListingStatus.READY:
            return None
        if self.status is ListingStatus.ERROR and self.trace_id:
            return f"{self.message} (trace_id={self.trace_id})"
        return self.message

    def render(self) -> dict[str, Any]:
        return {"status": self.status.value, "message": self.message, "trace_id": self.trace_id}


def listing_state(*, is_loading: bool, error: str | None, has_rows: bool, trace_id: str | None = None) -> ListingState:
    if is_loading:
        return ListingState(ListingStatus.LOADING, MSG_LOADING)
    if error:
        return ListingState(ListingStatus.ERROR, error, trace_id=trace_id)
    if not has_rows:
        return ListingState(ListingStatus.EMPTY, MSG_EMPTY)
    return ListingState(ListingStatus.READY)
