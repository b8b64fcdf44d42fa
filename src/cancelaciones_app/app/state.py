from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from cancelaciones_sdk.models import AuthSession, Profile, Role

from cancelaciones_app.config import AppConfig


class Route(str, Enum):
    LOADING = "loading"
    LOGIN = "login"
    CASHIER = "cashier"
    SUPERVISOR = "supervisor"


@dataclass
class AppContext:
    """Session and profile handed explicitly to every screen."""

    config: AppConfig = field(default_factory=AppConfig)
    session: AuthSession | None = None
    profile: Profile | None = None
    is_loading: bool = True

    @property
    def user_id(self) -> str | None:
        return self.session.user.id if self.session else None

    @property
    def role(self) -> Role | None:
        if self.profile is None or self.profile.role is None:
            return None
        try:
            return Role(self.profile.role)
        except ValueError:
            return None

    @property
    def branch_name(self) -> str | None:
        return self.profile.branch_name if self.profile else None

    def begin_resolution(self, session: AuthSession | None) -> None:
        self.session = session
        self.is_loading = True

    def finish_resolution(self, profile: Profile | None) -> None:
        self.profile = profile
        self.is_loading = False

    def clear(self) -> None:
        self.session = None
        self.profile = None
        self.is_loading = False


@dataclass
class AppState:
    route: Route = Route.LOADING
    path: str = "/"
    error_message: str | None = None
    status_message: str = "Cargando..."
    trace_id: str | None = None
    context: AppContext = field(default_factory=AppContext)
