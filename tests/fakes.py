from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date

from cancelaciones_sdk.clients.records import RecordFilters
from cancelaciones_sdk.models import (
    AuthEvent,
    AuthSession,
    AuthUser,
    Branch,
    CancellationReason,
    CancellationRecord,
    CancelledPizza,
    Flavor,
    PizzaCreate,
    Profile,
    RecordCreate,
)

BASE_URL = "https://demo.supabase.co"
ANON_KEY = "anon-key-123"


def make_auth_session(user_id: str = "user-1", expires_at: int | None = None) -> AuthSession:
    return AuthSession(
        access_token=f"token-{user_id}",
        refresh_token=f"refresh-{user_id}",
        expires_in=3600,
        expires_at=expires_at,
        user=AuthUser(id=user_id, email=f"{user_id}@pizzario.bo"),
    )


def make_record(
    record_id: int,
    *,
    total_cancelled: int = 3,
    total_sent: int | None = None,
    record_date: date = date(2024, 5, 10),
    created_by: str = "user-1",
    branch_id: int = 1,
) -> CancellationRecord:
    return CancellationRecord(
        id=record_id,
        date=record_date,
        turno="AM",
        total_cancelled=total_cancelled,
        total_sent=total_sent,
        cashier_name="Ana",
        branch_id=branch_id,
        created_by=created_by,
        branches={"name": "Centro"},
    )


def make_pizza(pizza_id: int, record_id: int, cantidad: int = 1) -> CancelledPizza:
    return CancelledPizza(
        id=pizza_id,
        record_id=record_id,
        cantidad=cantidad,
        flavors={"name": "Napolitana"},
        cancellation_reasons={"reason": "Cliente canceló"},
    )


@dataclass
class FakeRecordsClient:
    records: list[CancellationRecord] = field(default_factory=list)
    inserted: list[RecordCreate] = field(default_factory=list)
    deleted: list[object] = field(default_factory=list)
    updates: list[tuple[object, int]] = field(default_factory=list)
    list_calls: list[dict[str, object]] = field(default_factory=list)
    insert_error: Exception | None = None
    list_error: Exception | None = None
    update_error: Exception | None = None
    update_rows: list[CancellationRecord] | None = None
    delete_error: Exception | None = None
    next_id: int = 100

    def list_recent_for_creator(self, created_by: str, *, offset: int, limit: int) -> list[CancellationRecord]:
        self.list_calls.append({"created_by": created_by, "offset": offset, "limit": limit})
        if self.list_error:
            raise self.list_error
        own = [record for record in self.records if record.created_by == created_by]
        return own[offset : offset + limit]

    def list_records(
        self,
        filters: RecordFilters | None = None,
        *,
        offset: int | None = None,
        limit: int | None = None,
    ) -> list[CancellationRecord]:
        filters = filters or RecordFilters()
        self.list_calls.append({"filters": filters, "offset": offset, "limit": limit})
        if self.list_error:
            raise self.list_error
        rows = [
            record
            for record in self.records
            if (filters.branch_id is None or record.branch_id == filters.branch_id)
            and (filters.date is None or record.date == filters.date)
        ]
        if limit is None:
            return rows
        start = offset or 0
        return rows[start : start + limit]

    def insert_record(self, payload: RecordCreate) -> CancellationRecord:
        if self.insert_error:
            raise self.insert_error
        self.inserted.append(payload)
        record = CancellationRecord.model_validate({"id": self.next_id, **payload.model_dump(mode="json")})
        self.next_id += 1
        self.records.insert(0, record)
        return record

    def set_total_sent(self, record_id: object, total_sent: int) -> list[CancellationRecord]:
        self.updates.append((record_id, total_sent))
        if self.update_error:
            raise self.update_error
        if self.update_rows is not None:
            return self.update_rows
        for index, record in enumerate(self.records):
            if record.id == record_id and not record.total_sent:
                updated = record.model_copy(update={"total_sent": total_sent})
                self.records[index] = updated
                return [updated]
        return []

    def delete_record(self, record_id: object) -> None:
        self.deleted.append(record_id)
        if self.delete_error:
            raise self.delete_error
        self.records = [record for record in self.records if record.id != record_id]


@dataclass
class FakePizzasClient:
    items_by_record: dict[object, list[CancelledPizza]] = field(default_factory=dict)
    inserted: list[list[PizzaCreate]] = field(default_factory=list)
    list_calls: list[object] = field(default_factory=list)
    insert_error: Exception | None = None
    list_error: Exception | None = None

    def insert_pizzas(self, items: list[PizzaCreate]) -> int:
        if self.insert_error:
            raise self.insert_error
        self.inserted.append(list(items))
        return len(items)

    def list_for_record(self, record_id: object) -> list[CancelledPizza]:
        self.list_calls.append(record_id)
        if self.list_error:
            raise self.list_error
        return list(self.items_by_record.get(record_id, []))


@dataclass
class FakeCatalogsClient:
    flavors: list[Flavor] = field(
        default_factory=lambda: [Flavor(id=1, name="Napolitana"), Flavor(id=2, name="Hawaiana")]
    )
    reasons: list[CancellationReason] = field(
        default_factory=lambda: [CancellationReason(id=1, reason="Cliente canceló"), CancellationReason(id=2, reason="Error de pedido")]
    )
    branches: list[Branch] = field(default_factory=lambda: [Branch(id=1, name="Centro"), Branch(id=2, name="Norte")])
    error: Exception | None = None

    def list_active_flavors(self) -> list[Flavor]:
        if self.error:
            raise self.error
        return self.flavors

    def list_active_reasons(self) -> list[CancellationReason]:
        if self.error:
            raise self.error
        return self.reasons

    def list_branches(self) -> list[Branch]:
        if self.error:
            raise self.error
        return self.branches


@dataclass
class FakeProfilesClient:
    profiles: dict[str, Profile] = field(default_factory=dict)
    error: Exception | None = None
    calls: list[str] = field(default_factory=list)

    def get_profile(self, user_id: str) -> Profile:
        self.calls.append(user_id)
        if self.error:
            raise self.error
        return self.profiles[user_id]


@dataclass
class FakeHealthClient:
    error: Exception | None = None

    def health(self) -> dict:
        if self.error:
            raise self.error
        return {"name": "GoTrue"}


class FakeSubscription:
    def __init__(self, session: "FakeSession", listener) -> None:
        self._session = session
        self._listener = listener
        self.active = True

    def unsubscribe(self) -> None:
        self.active = False
        if self._listener in self._session.listeners:
            self._session.listeners.remove(self._listener)


class FakeSession:
    def __init__(self) -> None:
        self.current: AuthSession | None = None
        self.listeners: list = []
        self.sign_in_error: Exception | None = None
        self.sign_out_calls = 0
        self.records = FakeRecordsClient()
        self.pizzas = FakePizzasClient()
        self.catalogs = FakeCatalogsClient()
        self.profiles = FakeProfilesClient()
        self.health = FakeHealthClient()

    def records_client(self) -> FakeRecordsClient:
        return self.records

    def pizzas_client(self) -> FakePizzasClient:
        return self.pizzas

    def catalogs_client(self) -> FakeCatalogsClient:
        return self.catalogs

    def profiles_client(self) -> FakeProfilesClient:
        return self.profiles

    def health_client(self) -> FakeHealthClient:
        return self.health

    def get_session(self) -> AuthSession | None:
        return self.current

    def on_auth_state_change(self, listener) -> FakeSubscription:
        self.listeners.append(listener)
        listener(AuthEvent.INITIAL_SESSION, self.current)
        return FakeSubscription(self, listener)

    def sign_in_with_password(self, email: str, password: str) -> AuthSession:
        if self.sign_in_error:
            raise self.sign_in_error
        user_id = email.split("@")[0]
        self.current = make_auth_session(user_id)
        self._emit(AuthEvent.SIGNED_IN)
        return self.current

    def sign_out(self) -> None:
        self.sign_out_calls += 1
        self.current = None
        self._emit(AuthEvent.SIGNED_OUT)

    def _emit(self, event: AuthEvent) -> None:
        for listener in list(self.listeners):
            listener(event, self.current)

