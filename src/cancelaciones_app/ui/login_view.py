from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from cancelaciones_app.app.bootstrap import AppBootstrap
from cancelaciones_app.app.state import Route

MSG_CREDENTIALS_REQUIRED = "Ingrese usuario y contraseña"


@dataclass
class LoginView:
    bootstrap: AppBootstrap
    title: str = "Pizza Río"
    subtitle: str = "Registro de Cancelaciones"
    is_loading: bool = False
    error_message: str | None = None

    def submit(self, email: str, password: str) -> bool:
        if not (email or "").strip() or not password:
            self.error_message = MSG_CREDENTIALS_REQUIRED
            return False
        self.is_loading = True
        self.error_message = None
        try:
            result = self.bootstrap.login(email, password)
        finally:
            self.is_loading = False
        if result.route is Route.LOGIN:
            self.error_message = result.error_message
            return False
        return True

    def render(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "subtitle": self.subtitle,
            "submit_label": "Ingresando..." if self.is_loading else "Iniciar Sesión",
            "error_message": self.error_message,
        }
