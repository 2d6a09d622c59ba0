from .config import Settings, get_settings
from .database import Base, get_db_context, init_schema, open_store
from .errors import AuthError, HospitalError, NavigationGuardError, StoreError, ValidationError

__all__ = [
    "Settings",
    "get_settings",
    "Base",
    "get_db_context",
    "init_schema",
    "open_store",
    "AuthError",
    "HospitalError",
    "NavigationGuardError",
    "StoreError",
    "ValidationError",
]
