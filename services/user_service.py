import logging

from sqlalchemy.orm import Session as DbSession

from core.auth import DEFAULT_ROUNDS, hash_password, verify_password
from core.errors import AuthError
from core.session_manager import Session
from models.user import User
from services import crud
from services.validators import raise_for_errors, validate_credentials

logger = logging.getLogger(__name__)

DEFAULT_USERNAME = "root"
DEFAULT_PASSWORD = "root"


def get_user_by_username(db: DbSession, username: str) -> User | None:
    return db.query(User).filter(User.username == username).first()


def login(db: DbSession, username: str, password: str) -> Session:
    """Check credentials and return a session for the user.

    Raises AuthError(not_found) for an unknown username and
    AuthError(mismatch) for a wrong password.
    """
    username = (username or "").strip()
    user = get_user_by_username(db, username)
    if not user:
        logger.info("Login failed for %r: unknown user", username)
        raise AuthError(AuthError.NOT_FOUND)

    if not verify_password(password or "", user.password_hash or ""):
        logger.info("Login failed for %r: wrong password", username)
        raise AuthError(AuthError.MISMATCH)

    logger.info("User %r logged in", username)
    return Session(user_id=user.id, username=user.username)


def register(db: DbSession, username: str, password: str, *, rounds: int = DEFAULT_ROUNDS) -> User:
    """Create a new user; duplicate usernames are refused before hashing."""
    username = (username or "").strip()
    raise_for_errors(validate_credentials({"username": username, "password": password}))

    if get_user_by_username(db, username):
        logger.info("Registration refused for %r: duplicate", username)
        raise AuthError(AuthError.DUPLICATE)

    user = crud.create(db, User, username=username, password_hash=hash_password(password, rounds))
    logger.info("Registered user %r", username)
    return user


def ensure_default_users(db: DbSession, *, rounds: int = DEFAULT_ROUNDS) -> bool:
    """
    Creates the root/root user on a fresh database.
    Returns True if the user was created.
    """
    # If any users already exist, skip
    if db.query(User).first():
        return False

    crud.create(db, User, username=DEFAULT_USERNAME, password_hash=hash_password(DEFAULT_PASSWORD, rounds))
    logger.info("Created '%s' user with default password.", DEFAULT_USERNAME)
    return True
