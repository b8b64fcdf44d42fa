from __future__ import annotations

from dataclasses import dataclass

from cancelaciones_sdk.models import Role

from cancelaciones_app.app.state import AppContext, Route

LOGIN_PATH = "/login"
ROOT_PATH = "/"


@dataclass(frozen=True)
class Navigation:
    route: Route
    path: str
    redirected_from: str | None = None


def route_for_role(has_session: bool, role: Role | None) -> Route:
    if not has_session:
        return Route.LOGIN
    if role is Role.CASHIER:
        return Route.CASHIER
    if role is Role.SUPERVISOR:
        return Route.SUPERVISOR
    return Route.LOGIN


def resolve(path: str, context: AppContext) -> Navigation:
    if context.is_loading:
        return Navigation(Route.LOADING, path)
    if path == LOGIN_PATH:
        return Navigation(Route.LOGIN, LOGIN_PATH)
    redirected_from = None if path == ROOT_PATH else path
    route = route_for_role(context.session is not None, context.role)
    if route is Route.LOGIN:
        return Navigation(Route.LOGIN, LOGIN_PATH, redirected_from=redirected_from or ROOT_PATH)
    return Navigation(route, ROOT_PATH, redirected_from=redirected_from)
