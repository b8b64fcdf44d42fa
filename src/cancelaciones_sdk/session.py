from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable

from .auth_store import AuthStore
from .clients.auth import AuthClient
from .clients.catalogs import CatalogsClient
from .clients.health import HealthClient
from .clients.pizzas import PizzasClient
from .clients.profiles import ProfilesClient
from .clients.records import RecordsClient
from .config import ClientConfig
from .exceptions import ApiError
from .http_client import HttpClient
from .models import AuthEvent, AuthSession, SessionData
from .tracing import TraceContext

logger = logging.getLogger(__name__)

AuthListener = Callable[[AuthEvent, "AuthSession | None"], None]


@dataclass
class Subscription:
    _session: "ApiSession"
    _listener: AuthListener
    active: bool = True

    def unsubscribe(self) -> None:
        if not self.active:
            return
        self.active = False
        self._session._remove_listener(self._listener)


@dataclass
class ApiSession:
    config: ClientConfig
    auth_store: AuthStore | None = None
    trace: TraceContext | None = None
    current: AuthSession | None = None
    _listeners: list[AuthListener] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.auth_store = self.auth_store or AuthStore()
        self.trace = self.trace or TraceContext()
        stored = self.auth_store.load()
        if stored and not self.current and stored.env_name == self.config.env_name:
            self.current = stored.session

    @property
    def token(self) -> str | None:
        return self.current.access_token if self.current else None

    @property
    def user_id(self) -> str | None:
        return self.current.user.id if self.current else None

    def _http(self) -> HttpClient:
        return HttpClient(config=self.config, trace=self.trace)

    def auth_client(self) -> AuthClient:
        return AuthClient(http=self._http(), access_token=self.token)

    def health_client(self) -> HealthClient:
        return HealthClient(http=self._http())

    def profiles_client(self) -> ProfilesClient:
        return ProfilesClient(http=self._http(), access_token=self.token)

    def catalogs_client(self) -> CatalogsClient:
        return CatalogsClient(http=self._http(), access_token=self.token)

    def records_client(self) -> RecordsClient:
        return RecordsClient(http=self._http(), access_token=self.token)

    def pizzas_client(self) -> PizzasClient:
        return PizzasClient(http=self._http(), access_token=self.token)

    def on_auth_state_change(self, listener: AuthListener) -> Subscription:
        """Register a listener; it immediately receives INITIAL_SESSION with the current session."""
        self._listeners.append(listener)
        listener(AuthEvent.INITIAL_SESSION, self.current)
        return Subscription(self, listener)

    def get_session(self) -> AuthSession | None:
        if self.current is None or not self.current.is_expired():
            return self.current
        refresh_token = self.current.refresh_token
        if not refresh_token:
            self.clear()
            return None
        try:
            refreshed = AuthClient(http=self._http()).refresh_session(refresh_token)
        except ApiError as exc:
            logger.warning("session_refresh_failed", extra={"code": exc.code, "trace_id": exc.trace_id})
            self.clear()
            return None
        except ValueError as exc:
            # malformed body or a session payload pydantic rejects
            logger.warning("session_refresh_invalid", extra={"error_type": type(exc).__name__})
            self.clear()
            return None
        self._store(refreshed)
        self._emit(AuthEvent.TOKEN_REFRESHED)
        return self.current

    def sign_in_with_password(self, email: str, password: str) -> AuthSession:
        session = AuthClient(http=self._http()).sign_in_with_password(email, password)
        self._store(session)
        logger.info("session_signed_in", extra={"user_id": session.user.id})
        self._emit(AuthEvent.SIGNED_IN)
        return session

    def sign_out(self) -> None:
        if self.current is not None:
            try:
                self.auth_client().sign_out()
            except ApiError as exc:
                # the local session is dropped regardless of the remote outcome
                logger.warning("session_sign_out_failed", extra={"code": exc.code, "trace_id": exc.trace_id})
        self.clear()

    def clear(self) -> None:
        was_signed_in = self.current is not None
        self.current = None
        if self.auth_store:
            self.auth_store.clear()
        if was_signed_in:
            self._emit(AuthEvent.SIGNED_OUT)

    def _store(self, session: AuthSession) -> None:
        self.current = session
        if self.auth_store:
            self.auth_store.save(SessionData(session=session, env_name=self.config.env_name))

    def _emit(self, event: AuthEvent) -> None:
        for listener in list(self._listeners):
            listener(event, self.current)

    def _remove_listener(self, listener: AuthListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)
