import pytest

from infradb.db import database


@pytest.fixture
def clean_env(monkeypatch):
    for var in (
        "INFRADB_TEST_DB", "DATABASE_URL", "POSTGRES_USER", "POSTGRES_PASSWORD",
        "POSTGRES_HOST", "POSTGRES_PORT", "POSTGRES_DB", "DB_LOCK_TIMEOUT_SECONDS",
    ):
        monkeypatch.delenv(var, raising=False)
    return monkeypatch


def test_explicit_test_db_wins(clean_env):
    clean_env.setenv("INFRADB_TEST_DB", "sqlite+pysqlite:///tmp/x.db")
    clean_env.setenv("DATABASE_URL", "postgresql://u:p@h:5432/d")
    assert database.resolve_database_url() == "sqlite+pysqlite:///tmp/x.db"


def test_pytest_falls_back_to_sqlite(clean_env):
    assert database.resolve_database_url() == database.SQLITE_MEMORY_URL


def test_database_url_used_when_set(clean_env):
    clean_env.setenv("DATABASE_URL", "postgresql://u:p@h:5432/d")
    assert database.resolve_database_url() == "postgresql://u:p@h:5432/d"


def test_url_from_components(clean_env):
    clean_env.setattr(database, "_is_pytest_runtime", lambda: False)
    for var, value in (
        ("POSTGRES_USER", "infra"), ("POSTGRES_PASSWORD", "secret"), ("POSTGRES_HOST", "db"),
        ("POSTGRES_PORT", "5433"), ("POSTGRES_DB", "infradb"),
    ):
        clean_env.setenv(var, value)
    assert database.resolve_database_url() == "postgresql://infra:secret@db:5433/infradb"


def test_missing_components_are_reported(clean_env):
    clean_env.setattr(database, "_is_pytest_runtime", lambda: False)
    clean_env.setenv("POSTGRES_USER", "infra")
    with pytest.raises(ValueError, match="POSTGRES_PASSWORD"):
        database.resolve_database_url()


def test_lock_timeout(clean_env):
    assert database.lock_timeout_seconds() == 300
    clean_env.setenv("DB_LOCK_TIMEOUT_SECONDS", "12")
    assert database.lock_timeout_seconds() == 12
    clean_env.setenv("DB_LOCK_TIMEOUT_SECONDS", "soon")
    assert database.lock_timeout_seconds() == 300


def test_sqlite_session_handle():
    db_session = database.DBSession.from_url(database.SQLITE_MEMORY_URL)
    try:
        assert db_session.dialect_name == "sqlite"
    finally:
        db_session.close()


def test_default_session_is_shared(clean_env):
    clean_env.setattr(database, "_default_session", None)
    first = database.get_db_session()
    try:
        assert database.get_db_session() is first
        assert first.dialect_name == "sqlite"
    finally:
        first.close()
