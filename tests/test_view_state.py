from __future__ import annotations

from cancelaciones_app.ui.shared.view_state import MSG_EMPTY, MSG_LOADING, ListingStatus, listing_state


def test_loading_wins_over_everything() -> None:
    state = listing_state(is_loading=True, error="boom", has_rows=True)
    assert state.status is ListingStatus.LOADING
    assert state.notice == MSG_LOADING


def test_error_notice_carries_trace_id() -> None:
    state = listing_state(is_loading=False, error="Error cargando registros", has_rows=False, trace_id="t-1")
    assert state.status is ListingStatus.ERROR
    assert state.notice == "Error cargando registros (trace_id=t-1)"
    assert listing_state(is_loading=False, error="Error", has_rows=False).notice == "Error"


def test_empty_and_ready() -> None:
    empty = listing_state(is_loading=False, error=None, has_rows=False)
    ready = listing_state(is_loading=False, error=None, has_rows=True)

    assert empty.notice == MSG_EMPTY
    assert ready.status is ListingStatus.READY
    assert ready.notice is None
    assert ready.render() == {"status": "ready", "message": None, "trace_id": None}
