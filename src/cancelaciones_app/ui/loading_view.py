from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass
class LoadingView:
    message: str = "Cargando..."

    def render(self) -> dict[str, Any]:
        # nothing is known about connectivity until the profile lookup settles
        return {"message": self.message, "connection": "uncertain"}
