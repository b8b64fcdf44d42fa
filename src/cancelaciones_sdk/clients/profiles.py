from __future__ import annotations

from ..exceptions import EmptyResultError
from ..models import Profile
from ..query import table
from .base import BaseClient

PROFILE_COLUMNS = "full_name, role, branch_id, branches(name)"


class ProfilesClient(BaseClient):
    def get_profile(self, user_id: str) -> Profile:
        query = table("profiles").select(PROFILE_COLUMNS).eq("id", user_id).range(0, 1)
        rows = self._select(query, operation="get_profile")
        if not rows:
            raise EmptyResultError(
                code="PROFILE_NOT_FOUND",
                message="No profile row for the signed-in user",
                details={"user_id": user_id},
                trace_id=self.http.trace.trace_id if self.http.trace else None,
                status_code=406,
            )
        return Profile.model_validate(rows[0])
