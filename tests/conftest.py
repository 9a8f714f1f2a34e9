import pytest

from pharmacy.adapters.sqlite.migrator import MIGRATIONS_DIR, SQLiteMigrator
from pharmacy.adapters.sqlite.repos import SQLiteUserRepo
from pharmacy.app_shell.config import get_settings
from pharmacy.app_shell.context import AppContext
from pharmacy.rules.loader import load_rules
from pharmacy.rules.models import DEFAULT_RULES_PATH


@pytest.fixture
def migrations_dir():
    # Real migrations so the SQL itself is exercised
    return str(MIGRATIONS_DIR)


@pytest.fixture
def db_path(tmp_path, migrations_dir):
    path = str(tmp_path / "pharmacy.db")
    SQLiteMigrator(path, migrations_dir).run_migrations()
    return path


@pytest.fixture
def user_repo(db_path):
    return SQLiteUserRepo(db_path)


@pytest.fixture
def rules():
    return load_rules(DEFAULT_RULES_PATH)


@pytest.fixture
def app_ctx(db_path, rules):
    """
    Creates a full AppContext backed by a temporary SQLite DB.
    """
    return AppContext.create(db_path=db_path, rules=rules)


@pytest.fixture
def isolated_settings(tmp_path, monkeypatch):
    """Run from an empty working dir so only the packaged rules and migrations are used."""
    workdir = tmp_path / "work"
    workdir.mkdir()
    monkeypatch.chdir(workdir)
    monkeypatch.setenv("PHARMACY_DATA_DIR", str(tmp_path / "data"))
    monkeypatch.delenv("PHARMACY_RULES_PATH", raising=False)
    monkeypatch.delenv("PHARMACY_BOOTSTRAP_PASSWORD", raising=False)
    get_settings.cache_clear()
    settings = get_settings()
    yield settings
    get_settings.cache_clear()
