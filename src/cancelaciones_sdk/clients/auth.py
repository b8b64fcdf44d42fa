from __future__ import annotations

from ..models import AuthSession
from .base import BaseClient


class AuthClient(BaseClient):
    def sign_in_with_password(self, email: str, password: str) -> AuthSession:
        payload = {"email": email, "password": password}
        data = self._request(
            "POST",
            "/auth/v1/token",
            params={"grant_type": "password"},
            json_body=payload,
            module="auth",
            operation="sign_in",
        )
        return AuthSession.model_validate(data)

    def refresh_session(self, refresh_token: str) -> AuthSession:
        data = self._request(
            "POST",
            "/auth/v1/token",
            params={"grant_type": "refresh_token"},
            json_body={"refresh_token": refresh_token},
            module="auth",
            operation="refresh",
        )
        return AuthSession.model_validate(data)

    def sign_out(self) -> None:
        self._request("POST", "/auth/v1/logout", module="auth", operation="sign_out")
