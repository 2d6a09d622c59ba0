import pytest

from core.database import close_store, open_store
from core.navigator import Navigator
from services.user_service import ensure_default_users
from tests.helpers import login

# bcrypt's minimum cost keeps the suite fast
ROUNDS = 4


@pytest.fixture
def db():
    """A fresh in-memory store per test."""
    session = open_store("sqlite://")
    yield session
    close_store(session)


@pytest.fixture
def navigator(db):
    ensure_default_users(db, rounds=ROUNDS)
    nav = Navigator(db, bcrypt_rounds=ROUNDS)
    yield nav
    nav.close()


@pytest.fixture
def logged_in(navigator):
    login(navigator)
    return navigator
