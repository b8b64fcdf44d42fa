from .auth import AuthClient
from .catalogs import CatalogsClient
from .health import HealthClient
from .pizzas import PizzasClient
from .profiles import ProfilesClient
from .records import RecordFilters, RecordsClient

__all__ = [
    "AuthClient",
    "CatalogsClient",
    "HealthClient",
    "PizzasClient",
    "ProfilesClient",
    "RecordFilters",
    "RecordsClient",
]
