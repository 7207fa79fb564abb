"""
Database engine and session management.

Builds the SQLAlchemy engine from environment configuration with a test
fallback (SQLite in-memory) and exposes the ``DBSession`` handle every DAO is
constructed with.
"""
import logging
import os
import sys
from typing import Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from infradb.db.models.base import install_soft_delete_filter

logger = logging.getLogger(__name__)

SQLITE_MEMORY_URL = "sqlite+pysqlite:///:memory:"


def _get_database_url() -> str:
    # If DATABASE_URL is explicitly set, use it
    if os.getenv("DATABASE_URL"):
        return os.getenv("DATABASE_URL")

    # Otherwise, generate from individual components (all must be set)
    db_user = os.getenv("POSTGRES_USER")
    db_password = os.getenv("POSTGRES_PASSWORD")
    db_host = os.getenv("POSTGRES_HOST")
    db_port = os.getenv("POSTGRES_PORT")
    db_name = os.getenv("POSTGRES_DB")

    if not all([db_user, db_password, db_host, db_port, db_name]):
        missing = []
        if not db_user: missing.append("POSTGRES_USER")
        if not db_password: missing.append("POSTGRES_PASSWORD")
        if not db_host: missing.append("POSTGRES_HOST")
        if not db_port: missing.append("POSTGRES_PORT")
        if not db_name: missing.append("POSTGRES_DB")
        raise ValueError(f"Missing required database environment variables: {', '.join(missing)}")

    return f"postgresql://{db_user}:{db_password}@{db_host}:{db_port}/{db_name}"


def _is_pytest_runtime() -> bool:
    """Best-effort detection that we're executing under pytest."""
    if os.getenv("PYTEST_RUNNING") == "1":
        return True
    if "PYTEST_CURRENT_TEST" in os.environ:
        return True
    return "pytest" in sys.modules


def resolve_database_url() -> str:
    """Pick the URL to connect to.

    1. ``INFRADB_TEST_DB`` always wins.
    2. Under pytest without an explicit ``DATABASE_URL``, use in-memory SQLite.
    3. Otherwise ``DATABASE_URL`` or the ``POSTGRES_*`` components.
    """
    explicit_test_db = os.getenv("INFRADB_TEST_DB")
    if explicit_test_db:
        return explicit_test_db
    if _is_pytest_runtime() and not os.getenv("DATABASE_URL"):
        return SQLITE_MEMORY_URL
    return _get_database_url()


def lock_timeout_seconds() -> int:
    raw = os.getenv("DB_LOCK_TIMEOUT_SECONDS", "300")
    try:
        return int(raw)
    except ValueError:
        logger.warning(f"Ignoring invalid DB_LOCK_TIMEOUT_SECONDS={raw!r}; using 300")
        return 300


def create_db_engine(url: Optional[str] = None) -> Engine:
    url = url or resolve_database_url()
    kwargs = {"echo": os.getenv("DB_ECHO", "false").lower() == "true"}
    if url.startswith("sqlite"):
        kwargs["connect_args"] = {"check_same_thread": False}
        if ":memory:" in url:
            # In-memory SQLite with StaticPool so the schema persists across connections
            kwargs["poolclass"] = StaticPool
    else:
        kwargs["pool_pre_ping"] = True
    return create_engine(url, **kwargs)


class DBSession:
    """Engine plus session factory shared by all DAOs."""

    def __init__(self, engine: Engine):
        self.engine = engine
        self.session_factory = sessionmaker(
            bind=engine, autocommit=False, autoflush=False, expire_on_commit=False
        )
        install_soft_delete_filter(self.session_factory)

    @classmethod
    def from_url(cls, url: Optional[str] = None) -> "DBSession":
        engine = create_db_engine(url)
        logger.info(f"Database session created for dialect {engine.dialect.name}")
        return cls(engine)

    @property
    def dialect_name(self) -> str:
        return self.engine.dialect.name

    def close(self) -> None:
        self.engine.dispose()


_default_session: Optional[DBSession] = None


def get_db_session() -> DBSession:
    """Return the process-wide DBSession, creating it from the environment on first use."""
    global _default_session
    if _default_session is None:
        _default_session = DBSession.from_url()
    return _default_session
