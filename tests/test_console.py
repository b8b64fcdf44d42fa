from __future__ import annotations

import pytest

from cancelaciones_sdk.exceptions import InvalidCredentialsError
from cancelaciones_sdk.models import Profile
from cancelaciones_sdk.ui_errors import MSG_INVALID_CREDENTIALS

from cancelaciones_app import console as console_module
from cancelaciones_app.app.bootstrap import AppBootstrap
from cancelaciones_app.console import CancelacionesConsole
from cancelaciones_app.services.errors import ServiceError
from cancelaciones_app.ui.shared.error_presenter import build_error_payload, format_error_banner
from fakes import make_auth_session, make_record


def _feed(monkeypatch: pytest.MonkeyPatch, answers: list[str]) -> None:
    pending = iter(answers)
    monkeypatch.setattr("builtins.input", lambda _prompt="": next(pending))
    monkeypatch.setattr(console_module, "getpass", lambda _prompt="": "secret")


def _console(client_config, app_config, fake_session) -> CancelacionesConsole:
    fake_session.profiles.profiles = {
        "user-1": Profile(id="user-1", full_name="Ana", role="sucursal", branch_id=1, branches={"name": "Centro"}),
        "sup-1": Profile(id="sup-1", full_name="Luis", role="supervisor"),
    }
    bootstrap = AppBootstrap(config=client_config, app_config=app_config, session=fake_session)
    return CancelacionesConsole(bootstrap)


def test_cashier_login_then_logout(monkeypatch, capsys, client_config, app_config, fake_session) -> None:
    _feed(monkeypatch, ["user-1@pizzario.bo", "9", ""])
    console = _console(client_config, app_config, fake_session)

    assert console.run() == 0

    out = capsys.readouterr().out
    assert "Sucursal: Centro" in out
    assert "Sesión cerrada" in out
    assert fake_session.sign_out_calls == 1
    assert fake_session.listeners == []


def test_supervisor_logout_requires_confirmation(monkeypatch, capsys, client_config, app_config, fake_session) -> None:
    fake_session.current = make_auth_session("sup-1")
    fake_session.records.records = [make_record(1, total_cancelled=4)]
    _feed(monkeypatch, ["0", "n", "0", "s", ""])
    console = _console(client_config, app_config, fake_session)

    assert console.run() == 0

    out = capsys.readouterr().out
    assert "Total Registros: 1 | Pizzas Canceladas: 4 | Enviadas a Central: 0" in out
    assert out.count("Pizza Río - Supervisor") == 2
    assert fake_session.sign_out_calls == 1


def test_error_banner_carries_code_and_trace() -> None:
    payload = build_error_payload(ServiceError(message="Error cargando registros", code="HTTP_ERROR", trace_id="t-9"))
    assert format_error_banner(payload) == "[ERROR] Error cargando registros (code=HTTP_ERROR trace_id=t-9)"

    fallback = build_error_payload(RuntimeError())
    assert fallback["code"] == "INTERNAL_ERROR"
    assert format_error_banner(fallback).endswith("trace_id=n/a)")


def test_failed_login_message_is_shown_once(monkeypatch, capsys, client_config, app_config, fake_session) -> None:
    fake_session.sign_in_error = InvalidCredentialsError(
        code="invalid_grant", message="Invalid login credentials", details=None, trace_id=None, status_code=400
    )
    _feed(monkeypatch, ["user-1@pizzario.bo", ""])
    console = _console(client_config, app_config, fake_session)

    assert console.run() == 0

    assert capsys.readouterr().out.count(MSG_INVALID_CREDENTIALS) == 1


def test_recent_listing_prints_empty_notice(monkeypatch, capsys, client_config, app_config, fake_session) -> None:
    _feed(monkeypatch, ["user-1@pizzario.bo", "8", "b", "9", ""])
    console = _console(client_config, app_config, fake_session)

    assert console.run() == 0

    out = capsys.readouterr().out
    assert "Mis registros recientes (Página 1)" in out
    assert "No hay registros" in out
