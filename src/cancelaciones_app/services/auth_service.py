from __future__ import annotations

import logging

from cancelaciones_sdk import ApiSession
from cancelaciones_sdk.models import AuthSession
from cancelaciones_sdk.session import AuthListener, Subscription
from cancelaciones_sdk.ui_errors import MSG_INVALID_CREDENTIALS

from .errors import ServiceError, normalize_error

logger = logging.getLogger(__name__)

MSG_BAD_CREDENTIALS = MSG_INVALID_CREDENTIALS


class AuthServiceError(ServiceError):
    pass


class AuthService:
    def __init__(self, session: ApiSession) -> None:
        self.session = session

    def current_session(self) -> AuthSession | None:
        return self.session.get_session()

    def subscribe(self, listener: AuthListener) -> Subscription:
        return self.session.on_auth_state_change(listener)

    def login(self, email: str, password: str) -> AuthSession:
        logger.info("login_attempt", extra={"email": email})
        try:
            auth_session = self.session.sign_in_with_password(email.strip(), password)
        except Exception as exc:
            logger.warning("login_failure", extra={"email": email, "error_type": type(exc).__name__})
            raise normalize_error(exc, AuthServiceError, fallback=MSG_BAD_CREDENTIALS, code="LOGIN_FAILED") from exc
        logger.info("login_success", extra={"email": email, "user_id": auth_session.user.id})
        return auth_session

    def logout(self) -> None:
        logger.info("logout")
        self.session.sign_out()

    def check_connectivity(self) -> bool:
        try:
            self.session.health_client().health()
        except Exception as exc:
            logger.warning("connectivity_check_failed", extra={"error_type": type(exc).__name__})
            return False
        return True
