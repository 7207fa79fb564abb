import uuid

import pytest

from infradb.db import models, schemas
from infradb.db.database import DBSession, SQLITE_MEMORY_URL
from infradb.db.models.instance import INSTANCE_STATUS_READY
from infradb.db.models.site import SITE_STATUS_REGISTERED
from infradb.db.repositories import (
    InstanceDAO,
    NetworkSecurityGroupDAO,
    SiteDAO,
    SSHKeyDAO,
    SSHKeyGroupDAO,
    TenantDAO,
)


@pytest.fixture(scope="session")
def db():
    db_session = DBSession.from_url(SQLITE_MEMORY_URL)
    models.Base.metadata.create_all(bind=db_session.engine)
    try:
        yield db_session
    finally:
        models.Base.metadata.drop_all(bind=db_session.engine)
        db_session.close()


@pytest.fixture(autouse=True)
def clean(db):
    with db.engine.begin() as connection:
        for table in reversed(models.Base.metadata.sorted_tables):
            connection.execute(table.delete())
    yield


@pytest.fixture
def tenant_factory(db):
    dao = TenantDAO(db)

    def _create(name: str = "tenant", org: str = "test-org", **kwargs):
        return dao.create(schemas.TenantCreate(name=name, org=org, created_by=uuid.uuid4(), **kwargs))
    return _create


@pytest.fixture
def site_factory(db):
    dao = SiteDAO(db)

    def _create(name: str = "site", org: str = "provider-org", **kwargs):
        kwargs.setdefault("status", SITE_STATUS_REGISTERED)
        return dao.create(schemas.SiteCreate(
            name=name, org=org, infrastructure_provider_id=uuid.uuid4(), created_by=uuid.uuid4(), **kwargs
        ))
    return _create


@pytest.fixture
def nsg_factory(db):
    dao = NetworkSecurityGroupDAO(db)

    def _create(tenant, site, name: str = "nsg", **kwargs):
        kwargs.setdefault("status", "Ready")
        return dao.create(schemas.NetworkSecurityGroupCreate(
            name=name, site_id=site.id, tenant_id=tenant.id, tenant_org=tenant.org,
            created_by=uuid.uuid4(), **kwargs
        ))
    return _create


@pytest.fixture
def instance_factory(db):
    dao = InstanceDAO(db)

    def _create(tenant, site, name: str = "instance", **kwargs):
        kwargs.setdefault("status", INSTANCE_STATUS_READY)
        return dao.create(schemas.InstanceCreate(
            name=name, tenant_id=tenant.id, site_id=site.id, infrastructure_provider_id=uuid.uuid4(),
            vpc_id=uuid.uuid4(), created_by=uuid.uuid4(), **kwargs
        ))
    return _create


@pytest.fixture
def ssh_key_factory(db):
    dao = SSHKeyDAO(db)

    def _create(tenant, name: str = "key", **kwargs):
        return dao.create(schemas.SSHKeyCreate(
            name=name, org=tenant.org, tenant_id=tenant.id, public_key=f"ssh-ed25519 AAAA{name}",
            created_by=uuid.uuid4(), **kwargs
        ))
    return _create


@pytest.fixture
def ssh_key_group_factory(db):
    dao = SSHKeyGroupDAO(db)

    def _create(tenant, name: str = "group", **kwargs):
        kwargs.setdefault("status", "Syncing")
        return dao.create(schemas.SSHKeyGroupCreate(
            name=name, org=tenant.org, tenant_id=tenant.id, created_by=uuid.uuid4(), **kwargs
        ))
    return _create
