# core/setup_db.py

from core.config import get_settings
from core.database import get_db_context
from services.user_service import ensure_default_users

def main():
    settings = get_settings()
    print(f"Creating database tables in {settings.db_path}...")

    # open_store creates all tables
    with get_db_context(settings.db_url) as db:
        # Insert the bootstrap user
        if ensure_default_users(db, rounds=settings.bcrypt_rounds):
            print("Created 'root' user with default password.")

    print("Database initialized successfully.")

if __name__ == "__main__":
    main()
