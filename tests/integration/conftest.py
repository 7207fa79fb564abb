import os
from pathlib import Path

import pytest
from alembic import command
from alembic.config import Config
from testcontainers.postgres import PostgresContainer

from infradb.db import models
from infradb.db.database import DBSession

_ROOT = Path(__file__).resolve().parents[2]


def _docker_available() -> bool:
    import docker
    from docker.errors import DockerException

    try:
        docker.from_env().ping()
    except DockerException:
        return False
    return True


# Session-wide Postgres test container
@pytest.fixture(scope="session")
def _test_postgres():
    if not _docker_available():
        pytest.skip("docker is not available for the PostgreSQL test container")
    image = os.getenv("TEST_POSTGRES_IMAGE", "postgres:16-alpine")
    with PostgresContainer(image) as pg:
        url = pg.get_connection_url()
        os.environ["TEST_DATABASE_URL"] = url
        try:
            yield url
        finally:
            os.environ.pop("TEST_DATABASE_URL", None)


# Apply Alembic migrations once
@pytest.fixture(scope="session")
def _migrated_db(_test_postgres):
    cfg = Config(str(_ROOT / "alembic.ini"))
    cfg.set_main_option("script_location", str(_ROOT / "migrations"))
    cfg.set_main_option("sqlalchemy.url", _test_postgres)
    command.upgrade(cfg, "head")
    yield _test_postgres


@pytest.fixture(scope="session")
def db(_migrated_db):
    db_session = DBSession.from_url(_migrated_db)
    try:
        yield db_session
    finally:
        db_session.close()


@pytest.fixture(autouse=True)
def clean(db):
    with db.engine.begin() as connection:
        for table in reversed(models.Base.metadata.sorted_tables):
            connection.execute(table.delete())
    yield
