from __future__ import annotations

import time
from datetime import date
from enum import Enum
from typing import Union

from pydantic import BaseModel, ConfigDict, Field

RowId = Union[int, str]


class Role(str, Enum):
    CASHIER = "sucursal"
    SUPERVISOR = "supervisor"


class ShiftPeriod(str, Enum):
    AM = "AM"
    PM = "PM"


class AuthEvent(str, Enum):
    INITIAL_SESSION = "INITIAL_SESSION"
    SIGNED_IN = "SIGNED_IN"
    SIGNED_OUT = "SIGNED_OUT"
    TOKEN_REFRESHED = "TOKEN_REFRESHED"


class AuthUser(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: str
    email: str | None = None


class AuthSession(BaseModel):
    model_config = ConfigDict(extra="allow")

    access_token: str
    refresh_token: str | None = None
    token_type: str = "bearer"
    expires_in: int | None = None
    expires_at: int | None = None
    user: AuthUser

    def is_expired(self, now: float | None = None, leeway_seconds: int = 10) -> bool:
        if self.expires_at is None:
            return False
        current = time.time() if now is None else now
        return self.expires_at - leeway_seconds <= current


class SessionData(BaseModel):
    session: AuthSession
    env_name: str


class BranchRef(BaseModel):
    model_config = ConfigDict(extra="allow")

    name: str | None = None


class Profile(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: str | None = None
    full_name: str | None = None
    role: str | None = None
    branch_id: RowId | None = None
    branches: BranchRef | None = None

    @property
    def branch_name(self) -> str | None:
        return self.branches.name if self.branches else None


class Branch(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: RowId
    name: str


class Flavor(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: RowId
    name: str
    is_active: bool = True

    @property
    def label(self) -> str:
        return self.name


class CancellationReason(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: RowId
    reason: str
    is_active: bool = True

    @property
    def label(self) -> str:
        return self.reason


class CancellationRecord(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: RowId
    date: date
    turno: str | None = None
    total_cancelled: int = 0
    total_sent: int | None = None
    cashier_name: str | None = None
    branch_id: RowId | None = None
    created_by: str | None = None
    branches: BranchRef | None = None

    @property
    def branch_name(self) -> str | None:
        return self.branches.name if self.branches else None


class RecordCreate(BaseModel):
    branch_id: RowId | None
    cashier_name: str
    date: date
    turno: ShiftPeriod
    total_cancelled: int = Field(ge=1)
    created_by: str


class PizzaCreate(BaseModel):
    record_id: RowId
    flavor_id: RowId
    reason_id: RowId
    cantidad: int = Field(ge=1)


class FlavorRef(BaseModel):
    model_config = ConfigDict(extra="allow")

    name: str | None = None


class ReasonRef(BaseModel):
    model_config = ConfigDict(extra="allow")

    reason: str | None = None


class CancelledPizza(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: RowId | None = None
    record_id: RowId | None = None
    cantidad: int = 0
    flavors: FlavorRef | None = None
    cancellation_reasons: ReasonRef | None = None

    @property
    def flavor_name(self) -> str | None:
        return self.flavors.name if self.flavors else None

    @property
    def reason_name(self) -> str | None:
        return self.cancellation_reasons.reason if self.cancellation_reasons else None
