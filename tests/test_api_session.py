from __future__ import annotations

import time
from pathlib import Path

import pytest
import responses

from cancelaciones_sdk.auth_store import AuthStore
from cancelaciones_sdk.config import ClientConfig
from cancelaciones_sdk.models import AuthEvent, SessionData
from cancelaciones_sdk.session import ApiSession

from fakes import BASE_URL, make_auth_session

SESSION_PAYLOAD = {
    "access_token": "jwt-token",
    "refresh_token": "refresh-token",
    "expires_in": 3600,
    "expires_at": int(time.time()) + 3600,
    "user": {"id": "user-1", "email": "caja@pizzario.bo"},
}


def _session(config: ClientConfig, tmp_path: Path) -> ApiSession:
    return ApiSession(config, auth_store=AuthStore(base_dir=tmp_path))


def test_subscription_receives_initial_session_and_unsubscribes(client_config: ClientConfig, tmp_path: Path) -> None:
    session = _session(client_config, tmp_path)
    events: list[tuple[AuthEvent, object]] = []

    subscription = session.on_auth_state_change(lambda event, current: events.append((event, current)))
    subscription.unsubscribe()
    session.clear()

    assert events == [(AuthEvent.INITIAL_SESSION, None)]
    assert subscription.active is False


@responses.activate
def test_sign_in_persists_and_emits(client_config: ClientConfig, tmp_path: Path) -> None:
    responses.add(responses.POST, f"{BASE_URL}/auth/v1/token", json=SESSION_PAYLOAD, status=200)
    session = _session(client_config, tmp_path)
    events: list[AuthEvent] = []
    session.on_auth_state_change(lambda event, current: events.append(event))

    session.sign_in_with_password("caja@pizzario.bo", "secret")

    assert events == [AuthEvent.INITIAL_SESSION, AuthEvent.SIGNED_IN]
    assert session.token == "jwt-token"
    assert session.records_client().access_token == "jwt-token"
    restored = _session(client_config, tmp_path)
    assert restored.user_id == "user-1"


@responses.activate
def test_sign_out_clears_even_when_remote_fails(client_config: ClientConfig, tmp_path: Path) -> None:
    responses.add(responses.POST, f"{BASE_URL}/auth/v1/logout", json={"message": "boom"}, status=500)
    store = AuthStore(base_dir=tmp_path)
    store.save(SessionData(session=make_auth_session("user-1"), env_name="dev"))
    session = ApiSession(client_config, auth_store=store)
    events: list[AuthEvent] = []
    session.on_auth_state_change(lambda event, current: events.append(event))

    session.sign_out()

    assert session.current is None
    assert store.load() is None
    assert events[-1] is AuthEvent.SIGNED_OUT


@responses.activate
def test_expired_session_is_refreshed(client_config: ClientConfig, tmp_path: Path) -> None:
    responses.add(responses.POST, f"{BASE_URL}/auth/v1/token", json=SESSION_PAYLOAD, status=200)
    store = AuthStore(base_dir=tmp_path)
    store.save(SessionData(session=make_auth_session("user-1", expires_at=1), env_name="dev"))
    session = ApiSession(client_config, auth_store=store)
    events: list[AuthEvent] = []
    session.on_auth_state_change(lambda event, current: events.append(event))

    current = session.get_session()

    assert current is not None
    assert current.access_token == "jwt-token"
    assert "grant_type=refresh_token" in responses.calls[0].request.url
    assert events == [AuthEvent.INITIAL_SESSION, AuthEvent.TOKEN_REFRESHED]


@responses.activate
def test_failed_refresh_signs_out(client_config: ClientConfig, tmp_path: Path) -> None:
    responses.add(
        responses.POST,
        f"{BASE_URL}/auth/v1/token",
        json={"error": "invalid_grant", "error_description": "Refresh Token Not Found"},
        status=400,
    )
    store = AuthStore(base_dir=tmp_path)
    store.save(SessionData(session=make_auth_session("user-1", expires_at=1), env_name="dev"))
    session = ApiSession(client_config, auth_store=store)
    events: list[AuthEvent] = []
    session.on_auth_state_change(lambda event, current: events.append(event))

    assert session.get_session() is None
    assert events[-1] is AuthEvent.SIGNED_OUT
    assert store.load() is None


@responses.activate
@pytest.mark.parametrize("body", [{"access_token": "jwt-token"}, "not json"])
def test_unreadable_refresh_response_signs_out(client_config: ClientConfig, tmp_path: Path, body) -> None:
    if isinstance(body, dict):
        responses.add(responses.POST, f"{BASE_URL}/auth/v1/token", json=body, status=200)
    else:
        responses.add(responses.POST, f"{BASE_URL}/auth/v1/token", body=body, status=200)
    store = AuthStore(base_dir=tmp_path)
    store.save(SessionData(session=make_auth_session("user-1", expires_at=1), env_name="dev"))
    session = ApiSession(client_config, auth_store=store)
    events: list[AuthEvent] = []
    session.on_auth_state_change(lambda event, current: events.append(event))

    assert session.get_session() is None
    assert events[-1] is AuthEvent.SIGNED_OUT
    assert store.load() is None


def test_stored_session_from_other_env_is_ignored(client_config: ClientConfig, tmp_path: Path) -> None:
    store = AuthStore(base_dir=tmp_path)
    store.save(SessionData(session=make_auth_session("user-1"), env_name="prod"))

    session = ApiSession(client_config, auth_store=store)

    assert session.current is None


def test_auth_store_discards_corrupt_file(tmp_path: Path) -> None:
    store = AuthStore(base_dir=tmp_path)
    (tmp_path / "session.json").write_text("{not json")

    assert store.load() is None
    assert not (tmp_path / "session.json").exists()
