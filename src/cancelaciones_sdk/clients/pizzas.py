from __future__ import annotations

from ..models import CancelledPizza, PizzaCreate, RowId
from ..query import table
from .base import BaseClient

PIZZA_TABLE = "cancelled_pizzas"
DETAIL_COLUMNS = "id, record_id, cantidad, flavors(name), cancellation_reasons(reason)"


class PizzasClient(BaseClient):
    def insert_pizzas(self, items: list[PizzaCreate]) -> int:
        if not items:
            return 0
        body = [item.model_dump(mode="json") for item in items]
        self._write("POST", table(PIZZA_TABLE), body, operation="insert_pizzas", return_rows=False)
        return len(body)

    def list_for_record(self, record_id: RowId) -> list[CancelledPizza]:
        query = table(PIZZA_TABLE).select(DETAIL_COLUMNS).eq("record_id", record_id).order("id")
        return [CancelledPizza.model_validate(row) for row in self._select_all(query, operation="list_for_record")]
