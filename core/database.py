import logging
import os
from contextlib import contextmanager

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from core.errors import StoreError

logger = logging.getLogger(__name__)

# Base class for all models
Base = declarative_base()


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def create_db_engine(database_url: str) -> Engine:
    """Create the SQLite engine, making the parent directory of a file database."""
    if database_url.startswith("sqlite:///"):
        db_file = database_url[len("sqlite:///"):]
        db_dir = os.path.dirname(db_file)
        if db_dir:
            os.makedirs(db_dir, exist_ok=True)

    kwargs = {"connect_args": {"check_same_thread": False}}
    if database_url in ("sqlite://", "sqlite:///:memory:"):
        # one connection, or every checkout would see a fresh empty database
        kwargs["poolclass"] = StaticPool

    engine = create_engine(database_url, **kwargs)
    event.listen(engine, "connect", _enable_sqlite_foreign_keys)
    return engine


def init_schema(engine: Engine) -> None:
    """Create the six application tables if they are missing."""
    # models register themselves on Base at import time
    import models  # noqa: F401

    Base.metadata.create_all(bind=engine)


def open_store(database_url: str) -> Session:
    """
    Open the single shared store handle used for the whole run.

    Raises StoreError(connection) if the database cannot be created or opened.
    """
    try:
        engine = create_db_engine(database_url)
        init_schema(engine)
    except (SQLAlchemyError, OSError) as exc:
        raise StoreError(StoreError.CONNECTION, f"Cannot open database: {exc}") from exc

    SessionLocal = sessionmaker(autocommit=False, autoflush=False, expire_on_commit=False, bind=engine)
    logger.info("Opened store at %s", engine.url)
    return SessionLocal()


def close_store(db: Session) -> None:
    engine = db.get_bind()
    db.close()
    engine.dispose()
    logger.info("Closed store")


@contextmanager
def get_db_context(database_url: str):
    """
    Context manager for a store handle.
    Automatically closes the handle when done.

    Usage:
        with get_db_context(settings.db_url) as db:
            patients = list_patients(db)
    """
    db = open_store(database_url)
    try:
        yield db
    finally:
        close_store(db)
