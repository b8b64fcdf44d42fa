from __future__ import annotations

from pathlib import Path

import pytest

from cancelaciones_sdk.config import ClientConfig
from cancelaciones_sdk.models import Profile

from cancelaciones_app.app.state import AppContext
from cancelaciones_app.config import AppConfig
from fakes import ANON_KEY, BASE_URL, FakeSession, make_auth_session


@pytest.fixture(autouse=True)
def _pizzario_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in (
        "PIZZARIO_ENV",
        "PIZZARIO_SUPABASE_URL_DEV",
        "PIZZARIO_CONNECT_TIMEOUT_SECONDS",
        "PIZZARIO_READ_TIMEOUT_SECONDS",
        "PIZZARIO_VERIFY_SSL",
        "PIZZARIO_MAX_CONNECTIONS",
        "PIZZARIO_TIMEZONE",
        "PIZZARIO_PAGE_SIZE",
        "PIZZARIO_EXPORT_DIR",
        "PIZZARIO_LOG_LEVEL",
    ):
        monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("PIZZARIO_SUPABASE_URL", BASE_URL)
    monkeypatch.setenv("PIZZARIO_SUPABASE_ANON_KEY", ANON_KEY)


@pytest.fixture
def client_config() -> ClientConfig:
    return ClientConfig(env_name="dev", supabase_url=BASE_URL, anon_key=ANON_KEY)


@pytest.fixture
def fake_session() -> FakeSession:
    return FakeSession()


@pytest.fixture
def app_config(tmp_path: Path) -> AppConfig:
    return AppConfig(page_size=5, export_dir=tmp_path / "exports")


@pytest.fixture
def cashier_context(app_config: AppConfig) -> AppContext:
    context = AppContext(config=app_config)
    context.begin_resolution(make_auth_session("user-1"))
    context.finish_resolution(
        Profile(id="user-1", full_name="Ana", role="sucursal", branch_id=1, branches={"name": "Centro"})
    )
    return context


@pytest.fixture
def supervisor_context(app_config: AppConfig) -> AppContext:
    context = AppContext(config=app_config)
    context.begin_resolution(make_auth_session("sup-1"))
    context.finish_resolution(Profile(id="sup-1", full_name="Luis", role="supervisor"))
    return context
