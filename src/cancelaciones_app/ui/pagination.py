from __future__ import annotations

from dataclasses import dataclass


@dataclass
class PaginationState:
    page: int = 0
    page_size: int = 5
    last_count: int = 0

    @property
    def offset(self) -> int:
        return self.page * self.page_size

    @property
    def has_next(self) -> bool:
        # a full page is the only hint that more rows may exist
        return self.last_count >= self.page_size

    @property
    def has_prev(self) -> bool:
        return self.page > 0

    @property
    def label(self) -> str:
        return f"Página {self.page + 1}"


def next_page(state: PaginationState) -> PaginationState:
    if not state.has_next:
        return state
    state.page += 1
    return state


def prev_page(state: PaginationState) -> PaginationState:
    state.page = max(0, state.page - 1)
    return state


def reset_page(state: PaginationState) -> PaginationState:
    state.page = 0
    state.last_count = 0
    return state
