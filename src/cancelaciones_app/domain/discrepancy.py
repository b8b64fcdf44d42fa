from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Protocol


class DiscrepancyKind(str, Enum):
    PENDING = "pending"
    NONE = "no_discrepancy"
    MISSING = "missing"
    SURPLUS = "surplus"


_LABELS = {
    DiscrepancyKind.PENDING: "Pendiente",
    DiscrepancyKind.NONE: "Sin discrepancia",
    DiscrepancyKind.MISSING: "Faltan {amount}",
    DiscrepancyKind.SURPLUS: "Sobra {amount}",
}


@dataclass(frozen=True)
class Discrepancy:
    kind: DiscrepancyKind
    amount: int = 0

    @property
    def label(self) -> str:
        return _LABELS[self.kind].format(amount=self.amount)


def classify_discrepancy(total_cancelled: int | None, total_sent: int | None) -> Discrepancy:
    if total_sent is None:
        return Discrepancy(DiscrepancyKind.PENDING)
    cancelled = total_cancelled or 0
    if total_sent == cancelled:
        return Discrepancy(DiscrepancyKind.NONE)
    if total_sent < cancelled:
        return Discrepancy(DiscrepancyKind.MISSING, cancelled - total_sent)
    return Discrepancy(DiscrepancyKind.SURPLUS, total_sent - cancelled)


class _Totals(Protocol):
    total_cancelled: int
    total_sent: int | None


@dataclass(frozen=True)
class PageTotals:
    record_count: int = 0
    total_cancelled: int = 0
    total_sent: int = 0

    def render(self) -> dict[str, int]:
        return {
            "record_count": self.record_count,
            "total_cancelled": self.total_cancelled,
            "total_sent": self.total_sent,
        }


def summarize(records: Iterable[_Totals]) -> PageTotals:
    count = 0
    cancelled = 0
    sent = 0
    for record in records:
        count += 1
        cancelled += record.total_cancelled or 0
        sent += record.total_sent or 0
    return PageTotals(record_count=count, total_cancelled=cancelled, total_sent=sent)


def is_validated(total_sent: int | None) -> bool:
    """A record counts as validated once a positive sent total is stored."""
    return bool(total_sent)
