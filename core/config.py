import os
from dataclasses import dataclass

# Path: project_root/data/
BASE_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
DATA_DIR = os.path.join(BASE_DIR, "data")


@dataclass(frozen=True)
class Settings:
    db_path: str
    db_url: str
    log_file: str
    log_level: str
    bcrypt_rounds: int

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from HOSPITAL_* environment variables."""
        db_path = os.getenv("HOSPITAL_DB_PATH", os.path.join(DATA_DIR, "hospital.db"))
        return cls(
            db_path=db_path,
            db_url=os.getenv("HOSPITAL_DB_URL", f"sqlite:///{db_path}"),
            log_file=os.getenv("HOSPITAL_LOG_FILE", os.path.join(DATA_DIR, "hospital.log")),
            log_level=os.getenv("HOSPITAL_LOG_LEVEL", "INFO").upper(),
            bcrypt_rounds=int(os.getenv("HOSPITAL_BCRYPT_ROUNDS", "12")),
        )


def get_settings() -> Settings:
    return Settings.from_env()
