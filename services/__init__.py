from .user_service import ensure_default_users, login, register

# Entity services are imported directly where needed
# (from services.patient_service import create_patient, ...).

__all__ = ["ensure_default_users", "login", "register"]
