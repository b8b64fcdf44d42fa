from __future__ import annotations

import logging
from dataclasses import dataclass

from cancelaciones_sdk import ApiSession, ClientConfig, load_config
from cancelaciones_sdk.models import AuthEvent, AuthSession
from cancelaciones_sdk.session import Subscription

from cancelaciones_app.app.navigation import LOGIN_PATH, ROOT_PATH, Navigation, resolve
from cancelaciones_app.app.state import AppContext, AppState, Route
from cancelaciones_app.config import AppConfig, load_app_config
from cancelaciones_app.services.auth_service import AuthService, AuthServiceError
from cancelaciones_app.services.profile_service import ProfileService, ProfileServiceError

logger = logging.getLogger(__name__)

MSG_NO_ROLE = "El perfil no tiene un rol asignado"
MSG_OFFLINE = "No se pudo conectar con el servidor"


@dataclass
class BootstrapResult:
    route: Route
    error_message: str | None = None


class AppBootstrap:
    """Owns the session/profile lifecycle and hands an AppContext to the screens."""

    def __init__(
        self,
        config: ClientConfig | None = None,
        app_config: AppConfig | None = None,
        session: ApiSession | None = None,
    ) -> None:
        self.config = config or load_config()
        self.app_config = app_config or load_app_config()
        self.session = session or ApiSession(self.config)
        self.state = AppState(context=AppContext(config=self.app_config))
        self.auth_service = AuthService(self.session)
        self.profile_service = ProfileService(self.session)
        self._subscription: Subscription | None = None

    @property
    def context(self) -> AppContext:
        return self.state.context

    def start(self) -> BootstrapResult:
        self.state.route = Route.LOADING
        if not self.auth_service.check_connectivity():
            self.state.error_message = MSG_OFFLINE
        self.auth_service.current_session()
        if self._subscription is None:
            # the listener is called right away with INITIAL_SESSION
            self._subscription = self.auth_service.subscribe(self._on_auth_event)
        return self._result()

    def teardown(self) -> None:
        if self._subscription is not None:
            self._subscription.unsubscribe()
            self._subscription = None

    def login(self, email: str, password: str) -> BootstrapResult:
        self.state.error_message = None
        try:
            self.auth_service.login(email, password)
        except AuthServiceError as exc:
            self.state.error_message = exc.message
            self.state.trace_id = exc.trace_id
            self.navigate(LOGIN_PATH)
            return self._result()
        self.navigate(ROOT_PATH)
        return self._result()

    def logout(self) -> BootstrapResult:
        self.auth_service.logout()
        self.context.clear()
        self.state.error_message = None
        self.navigate(LOGIN_PATH)
        return self._result()

    def navigate(self, path: str) -> Navigation:
        navigation = resolve(path, self.context)
        self.state.route = navigation.route
        self.state.path = navigation.path
        if navigation.redirected_from:
            logger.info(
                "route_redirect",
                extra={"from_path": navigation.redirected_from, "to_path": navigation.path},
            )
        return navigation

    def _on_auth_event(self, event: AuthEvent, auth_session: AuthSession | None) -> None:
        logger.info("auth_state_change", extra={"event": event.value, "has_session": auth_session is not None})
        self._resolve(auth_session)

    def _resolve(self, auth_session: AuthSession | None) -> None:
        self.context.begin_resolution(auth_session)
        self.state.route = Route.LOADING
        profile = None
        if auth_session is not None:
            try:
                profile = self.profile_service.load_profile(auth_session.user.id)
            except ProfileServiceError as exc:
                self.state.error_message = exc.message
                self.state.trace_id = exc.trace_id
        self.context.finish_resolution(profile)
        if profile is not None and self.context.role is None:
            self.state.error_message = MSG_NO_ROLE
        self.navigate(self.state.path)

    def _result(self) -> BootstrapResult:
        return BootstrapResult(route=self.state.route, error_message=self.state.error_message)
