from .auth_store import AuthStore
from .clients.records import RecordFilters
from .config import ClientConfig, ConfigError, load_config
from .exceptions import (
    ApiError,
    AuthError,
    ConflictError,
    EmptyResultError,
    ForbiddenError,
    InvalidCredentialsError,
    NotFoundError,
    PermissionError,
    TransportError,
    UnauthorizedError,
    ValidationError,
)
from .http_client import HttpClient
from .models import (
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
    Role,
    SessionData,
    ShiftPeriod,
)
from .session import ApiSession, Subscription
from .tracing import TraceContext

__all__ = [
    "ApiError",
    "ApiSession",
    "AuthError",
    "AuthEvent",
    "AuthSession",
    "AuthStore",
    "AuthUser",
    "Branch",
    "CancellationReason",
    "CancellationRecord",
    "CancelledPizza",
    "ClientConfig",
    "ConfigError",
    "ConflictError",
    "EmptyResultError",
    "Flavor",
    "ForbiddenError",
    "HttpClient",
    "InvalidCredentialsError",
    "NotFoundError",
    "PermissionError",
    "PizzaCreate",
    "Profile",
    "RecordCreate",
    "RecordFilters",
    "Role",
    "SessionData",
    "ShiftPeriod",
    "Subscription",
    "TraceContext",
    "TransportError",
    "UnauthorizedError",
    "ValidationError",
    "load_config",
]
