from __future__ import annotations

import logging

from cancelaciones_sdk import ApiSession
from cancelaciones_sdk.models import Profile

from .errors import ServiceError, normalize_error

logger = logging.getLogger(__name__)


class ProfileServiceError(ServiceError):
    pass


class ProfileService:
    def __init__(self, session: ApiSession) -> None:
        self.session = session

    def load_profile(self, user_id: str) -> Profile:
        logger.info("profile_fetch_attempt", extra={"user_id": user_id})
        try:
            profile = self.session.profiles_client().get_profile(user_id)
        except Exception as exc:
            logger.warning("profile_fetch_failure", extra={"user_id": user_id, "error_type": type(exc).__name__})
            raise normalize_error(exc, ProfileServiceError, fallback="No se pudo cargar el perfil") from exc
        logger.info("profile_fetch_success", extra={"user_id": user_id, "role": profile.role})
        return profile
