import logging
import sys

from core.config import Settings, get_settings
from core.errors import StoreError
from core.logging_setup import configure_logging
from core.database import open_store
from core.navigator import Navigator
from services.user_service import ensure_default_users

logger = logging.getLogger(__name__)


def open_navigator(settings: Settings) -> Navigator:
    """Open the store, seed the bootstrap user and build the navigator.

    Raises StoreError if the database cannot be opened.
    """
    db = open_store(settings.db_url)
    ensure_default_users(db, rounds=settings.bcrypt_rounds)
    return Navigator(db, bcrypt_rounds=settings.bcrypt_rounds)


def main():
    settings = get_settings()
    configure_logging(settings)

    try:
        navigator = open_navigator(settings)
    except StoreError as exc:
        logger.error("Startup failed: %s", exc)
        print(f"Application Error: {exc}", file=sys.stderr)
        return 1

    # imported late so the store error path never touches the terminal
    from ui.terminal import run

    with navigator:
        run(navigator)
    return 0


if __name__ == "__main__":
    sys.exit(main())
