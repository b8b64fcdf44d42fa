from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Iterable

from dotenv import load_dotenv


class ConfigError(ValueError):
    pass


@dataclass(frozen=True)
class ClientConfig:
    env_name: str
    supabase_url: str
    anon_key: str
    connect_timeout_seconds: float = 5.0
    read_timeout_seconds: float = 15.0
    max_connections: int = 10
    verify_ssl: bool = True

    @property
    def normalized_env(self) -> str:
        return self.env_name.lower().strip()


def _require(values: dict[str, str | None], required: Iterable[str]) -> None:
    missing = [key for key in required if not values.get(key)]
    if missing:
        raise ConfigError(f"Missing required config values: {', '.join(missing)}")


def _coerce_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _read_float(name: str, default: str) -> float:
    raw = os.getenv(name, default)
    try:
        return float(raw)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"Invalid {name}: expected a number, got {raw!r}") from exc


def _read_int(name: str, default: str) -> int:
    raw = os.getenv(name, default)
    try:
        return int(raw)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"Invalid {name}: expected an integer, got {raw!r}") from exc


def _validate(condition: bool, message: str) -> None:
    if not condition:
        raise ConfigError(message)


def load_config(env_file: str | None = None) -> ClientConfig:
    """Load config from environment with optional .env override."""
    load_dotenv(env_file)

    env_name = (os.getenv("PIZZARIO_ENV") or "dev").strip()
    env_key = env_name.upper()

    supabase_url = (
        (os.getenv(f"PIZZARIO_SUPABASE_URL_{env_key}") or "").strip()
        or (os.getenv("PIZZARIO_SUPABASE_URL") or "").strip()
    )
    anon_key = (os.getenv("PIZZARIO_SUPABASE_ANON_KEY") or "").strip()

    connect_timeout_seconds = _read_float("PIZZARIO_CONNECT_TIMEOUT_SECONDS", "5")
    _validate(
        connect_timeout_seconds > 0,
        f"Invalid PIZZARIO_CONNECT_TIMEOUT_SECONDS: expected > 0, got {connect_timeout_seconds}",
    )

    read_timeout_seconds = _read_float("PIZZARIO_READ_TIMEOUT_SECONDS", "15")
    _validate(
        read_timeout_seconds > 0,
        f"Invalid PIZZARIO_READ_TIMEOUT_SECONDS: expected > 0, got {read_timeout_seconds}",
    )

    max_connections = _read_int("PIZZARIO_MAX_CONNECTIONS", "10")
    _validate(
        max_connections >= 1,
        f"Invalid PIZZARIO_MAX_CONNECTIONS: expected >= 1, got {max_connections}",
    )

    verify_ssl = _coerce_bool(os.getenv("PIZZARIO_VERIFY_SSL"), True)

    values = {"PIZZARIO_SUPABASE_URL": supabase_url, "PIZZARIO_SUPABASE_ANON_KEY": anon_key}
    _require(values, ["PIZZARIO_SUPABASE_URL", "PIZZARIO_SUPABASE_ANON_KEY"])

    return ClientConfig(
        env_name=env_name,
        supabase_url=supabase_url.rstrip("/"),
        anon_key=anon_key,
        connect_timeout_seconds=connect_timeout_seconds,
        read_timeout_seconds=read_timeout_seconds,
        max_connections=max_connections,
        verify_ssl=verify_ssl,
    )
