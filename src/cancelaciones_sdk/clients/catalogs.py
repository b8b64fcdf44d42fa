from __future__ import annotations

from ..models import Branch, CancellationReason, Flavor
from ..query import table
from .base import BaseClient


class CatalogsClient(BaseClient):
    def list_active_flavors(self) -> list[Flavor]:
        query = table("flavors").select("id, name").eq("is_active", True)
        return [Flavor.model_validate(row) for row in self._select(query, operation="list_flavors")]

    def list_active_reasons(self) -> list[CancellationReason]:
        query = table("cancellation_reasons").select("id, reason").eq("is_active", True)
        rows = self._select(query, operation="list_reasons")
        return [CancellationReason.model_validate(row) for row in rows]

    def list_branches(self) -> list[Branch]:
        query = table("branches").select("id, name").order("name")
        return [Branch.model_validate(row) for row in self._select(query, operation="list_branches")]
