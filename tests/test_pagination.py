from __future__ import annotations

from cancelaciones_app.ui.pagination import PaginationState, next_page, prev_page, reset_page


def test_next_enabled_only_after_full_page() -> None:
    state = PaginationState(page_size=5, last_count=5)
    assert state.has_next is True

    next_page(state)
    assert state.page == 1
    assert state.offset == 5

    state.last_count = 3
    assert state.has_next is False
    next_page(state)
    assert state.page == 1


def test_prev_and_reset_bounds() -> None:
    state = PaginationState(page=0, page_size=5)
    prev_page(state)
    assert state.page == 0
    assert state.has_prev is False

    state.page = 3
    state.last_count = 5
    reset_page(state)
    assert state.page == 0
    assert state.last_count == 0
    assert state.label == "Página 1"
