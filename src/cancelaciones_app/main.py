from __future__ import annotations

import logging

from cancelaciones_sdk import ConfigError, load_config

from cancelaciones_app.app.bootstrap import AppBootstrap
from cancelaciones_app.config import AppConfigError, load_app_config
from cancelaciones_app.console import CancelacionesConsole
from cancelaciones_app.logging_config import configure_logging

logger = logging.getLogger(__name__)


def run(env_file: str | None = None) -> int:
    try:
        config = load_config(env_file)
        app_config = load_app_config(env_file)
    except (ConfigError, AppConfigError) as exc:
        configure_logging()
        logger.error("config_invalid", extra={"error": str(exc)})
        print(f"Configuración inválida: {exc}")
        return 2
    configure_logging(app_config.log_level)
    logger.info("app_start", extra={"env": config.normalized_env})
    bootstrap = AppBootstrap(config=config, app_config=app_config)
    try:
        return CancelacionesConsole(bootstrap).run()
    except (KeyboardInterrupt, EOFError):
        print("\nHasta luego.")
        return 0


def main() -> None:
    raise SystemExit(run())


if __name__ == "__main__":
    main()
