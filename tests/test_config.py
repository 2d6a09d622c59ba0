import logging

import pytest

import app
from core.config import DATA_DIR, Settings
from core.errors import StoreError
from core.logging_setup import configure_logging


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    for handler in list(root.handlers):
        root.removeHandler(handler)
        if handler not in handlers:
            handler.close()
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(level)


def test_settings_defaults(monkeypatch):
    for name in ("HOSPITAL_DB_PATH", "HOSPITAL_DB_URL", "HOSPITAL_LOG_FILE",
                 "HOSPITAL_LOG_LEVEL", "HOSPITAL_BCRYPT_ROUNDS"):
        monkeypatch.delenv(name, raising=False)

    settings = Settings.from_env()
    assert settings.db_path.startswith(DATA_DIR)
    assert settings.db_url == f"sqlite:///{settings.db_path}"
    assert settings.log_level == "INFO"
    assert settings.bcrypt_rounds == 12


def test_settings_from_environment(monkeypatch, tmp_path):
    monkeypatch.setenv("HOSPITAL_DB_PATH", str(tmp_path / "h.db"))
    monkeypatch.delenv("HOSPITAL_DB_URL", raising=False)
    monkeypatch.setenv("HOSPITAL_LOG_LEVEL", "debug")
    monkeypatch.setenv("HOSPITAL_BCRYPT_ROUNDS", "5")

    settings = Settings.from_env()
    assert settings.db_url == f"sqlite:///{tmp_path / 'h.db'}"
    assert settings.log_level == "DEBUG"
    assert settings.bcrypt_rounds == 5


def test_logs_go_to_the_configured_file(tmp_path, restore_root_logger):
    log_file = tmp_path / "logs" / "hospital.log"
    settings = Settings(str(tmp_path / "h.db"), "sqlite://", str(log_file), "INFO", 4)
    configure_logging(settings)

    logging.getLogger("tests").info("hello from the test")
    for handler in logging.getLogger().handlers:
        handler.flush()
    assert "INFO tests: hello from the test" in log_file.read_text(encoding="utf-8")


def test_open_navigator_seeds_root(tmp_path):
    settings = Settings(str(tmp_path / "h.db"), f"sqlite:///{tmp_path / 'h.db'}", str(tmp_path / "h.log"), "INFO", 4)
    with app.open_navigator(settings) as nav:
        assert nav.running
        assert (tmp_path / "h.db").exists()
    assert not nav.running


def test_main_exits_on_store_failure(monkeypatch, tmp_path, capsys, restore_root_logger):
    monkeypatch.setenv("HOSPITAL_LOG_FILE", str(tmp_path / "h.log"))

    def broken(url):
        raise StoreError(StoreError.CONNECTION, "unable to open database file")

    monkeypatch.setattr(app, "open_store", broken)
    assert app.main() == 1
    assert "Application Error: unable to open database file" in capsys.readouterr().err
