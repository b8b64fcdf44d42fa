from __future__ import annotations

from cancelaciones_sdk.models import Profile

from cancelaciones_app.app.navigation import LOGIN_PATH, ROOT_PATH, resolve
from cancelaciones_app.app.state import AppContext, Route
from fakes import make_auth_session


def _context(role: str | None, *, signed_in: bool = True) -> AppContext:
    context = AppContext()
    context.begin_resolution(make_auth_session() if signed_in else None)
    context.finish_resolution(Profile(id="user-1", role=role) if signed_in else None)
    return context


def test_loading_context_holds_any_path() -> None:
    context = AppContext()
    nav = resolve("/anything", context)
    assert nav.route is Route.LOADING
    assert nav.path == "/anything"


def test_login_path_always_renders_login() -> None:
    assert resolve(LOGIN_PATH, _context("supervisor")).route is Route.LOGIN


def test_role_decides_root_screen() -> None:
    assert resolve(ROOT_PATH, _context("sucursal")).route is Route.CASHIER
    assert resolve(ROOT_PATH, _context("supervisor")).route is Route.SUPERVISOR


def test_unknown_path_redirects_to_root() -> None:
    nav = resolve("/reportes", _context("sucursal"))
    assert nav.route is Route.CASHIER
    assert nav.path == ROOT_PATH
    assert nav.redirected_from == "/reportes"


def test_missing_session_or_role_goes_to_login() -> None:
    anonymous = resolve(ROOT_PATH, _context(None, signed_in=False))
    assert anonymous.route is Route.LOGIN
    assert anonymous.path == LOGIN_PATH

    no_role = resolve(ROOT_PATH, _context("admin"))
    assert no_role.route is Route.LOGIN
