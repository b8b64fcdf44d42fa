from __future__ import annotations

import logging
from dataclasses import dataclass, field

from cancelaciones_sdk import ApiSession
from cancelaciones_sdk.models import Branch, CancellationReason, Flavor

from .errors import ServiceError, normalize_error

logger = logging.getLogger(__name__)


class CatalogServiceError(ServiceError):
    pass


@dataclass(frozen=True)
class EntryCatalogs:
    flavors: list[Flavor] = field(default_factory=list)
    reasons: list[CancellationReason] = field(default_factory=list)


class CatalogService:
    def __init__(self, session: ApiSession) -> None:
        self.session = session

    def load_entry_catalogs(self) -> EntryCatalogs:
        client = self.session.catalogs_client()
        try:
            flavors = client.list_active_flavors()
            reasons = client.list_active_reasons()
        except Exception as exc:
            logger.warning("catalogs_fetch_failure", extra={"error_type": type(exc).__name__})
            raise normalize_error(exc, CatalogServiceError, fallback="No se pudieron cargar los catálogos") from exc
        logger.info("catalogs_fetch_success", extra={"flavors": len(flavors), "reasons": len(reasons)})
        return EntryCatalogs(flavors=flavors, reasons=reasons)

    def list_branches(self) -> list[Branch]:
        try:
            return self.session.catalogs_client().list_branches()
        except Exception as exc:
            logger.warning("branches_fetch_failure", extra={"error_type": type(exc).__name__})
            raise normalize_error(exc, CatalogServiceError, fallback="Error cargando sucursales") from exc
