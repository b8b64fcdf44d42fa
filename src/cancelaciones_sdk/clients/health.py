from __future__ import annotations

from .base import BaseClient


class HealthClient(BaseClient):
    def health(self) -> dict:
        data = self._request("GET", "/auth/v1/health", module="health", operation="health")
        return data if isinstance(data, dict) else {}
