from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dotenv import load_dotenv

DEFAULT_TIMEZONE = "America/La_Paz"
DEFAULT_PAGE_SIZE = 5


class AppConfigError(ValueError):
    """Raised when application configuration is missing or invalid."""


@dataclass(frozen=True)
class AppConfig:
    timezone_name: str = DEFAULT_TIMEZONE
    page_size: int = DEFAULT_PAGE_SIZE
    export_dir: Path = Path(".")
    log_level: str = "INFO"

    @property
    def timezone(self) -> ZoneInfo:
        return ZoneInfo(self.timezone_name)


def load_app_config(env_file: str | None = None) -> AppConfig:
    load_dotenv(env_file)

    timezone_name = (os.getenv("PIZZARIO_TIMEZONE") or DEFAULT_TIMEZONE).strip()
    try:
        ZoneInfo(timezone_name)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise AppConfigError(f"Invalid PIZZARIO_TIMEZONE: unknown zone {timezone_name!r}") from exc

    raw_page_size = os.getenv("PIZZARIO_PAGE_SIZE", str(DEFAULT_PAGE_SIZE))
    try:
        page_size = int(raw_page_size)
    except ValueError as exc:
        raise AppConfigError(f"Invalid PIZZARIO_PAGE_SIZE: expected an integer, got {raw_page_size!r}") from exc
    if page_size < 1:
        raise AppConfigError(f"Invalid PIZZARIO_PAGE_SIZE: expected >= 1, got {page_size}")

    export_dir = Path(os.getenv("PIZZARIO_EXPORT_DIR") or ".").expanduser()
    log_level = (os.getenv("PIZZARIO_LOG_LEVEL") or "INFO").strip().upper()

    return AppConfig(
        timezone_name=timezone_name,
        page_size=page_size,
        export_dir=export_dir,
        log_level=log_level,
    )
