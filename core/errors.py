"""Error taxonomy shared by services, screens and the navigator."""


class HospitalError(Exception):
    """Base class for every error the application reports to the user."""


class ValidationError(HospitalError):
    """Field-scoped validation failure. ``errors`` maps field name to message."""

    def __init__(self, errors: dict[str, str]):
        self.errors = dict(errors)
        super().__init__("; ".join(f"{k}: {v}" for k, v in self.errors.items()))


class AuthError(HospitalError):
    NOT_FOUND = "not_found"
    MISMATCH = "mismatch"
    DUPLICATE = "duplicate"

    MESSAGES = {
        NOT_FOUND: "Unknown username.",
        MISMATCH: "Invalid credentials. Try again.",
        DUPLICATE: "Username already exists.",
    }

    def __init__(self, kind: str, message: str | None = None):
        self.kind = kind
        super().__init__(message or self.MESSAGES.get(kind, "Authentication failed."))


class StoreError(HospitalError):
    NOT_FOUND = "not_found"
    CONSTRAINT = "constraint"
    CONNECTION = "connection"

    def __init__(self, kind: str, message: str):
        self.kind = kind
        super().__init__(message)

    @classmethod
    def not_found(cls, entity: str, entity_id) -> "StoreError":
        return cls(cls.NOT_FOUND, f"{entity} with ID {entity_id} doesn't exist.")


class NavigationGuardError(HospitalError):
    """Raised when a protected screen is reached without a session."""
