import uuid

import pytest
from sqlalchemy import text

from infradb.db import schemas
from infradb.db.errors import AdvisoryLockError
from infradb.db.repositories import TenantDAO
from infradb.db.tx import Tx
from infradb.db.util import get_advisory_lock_id_from_string

pytestmark = pytest.mark.integration


def test_lock_is_exclusive_until_commit(db):
    lock_id = get_advisory_lock_id_from_string(f"tenant/{uuid.uuid4()}")

    holder = Tx.begin(db)
    holder.acquire_advisory_lock(lock_id)

    contender = Tx.begin(db)
    try:
        with pytest.raises(AdvisoryLockError):
            contender.try_acquire_advisory_lock(lock_id, retries=2, delay=0.01, jitter=0.01)
    finally:
        contender.rollback()

    holder.commit()

    with Tx.begin(db) as tx:
        tx.try_acquire_advisory_lock(lock_id, retries=1)


def test_lock_timeout_is_scoped_to_transaction(db):
    with Tx.begin(db, lock_timeout=7) as tx:
        assert tx.session.execute(text("SHOW lock_timeout")).scalar() == "7s"


def test_tx_shared_across_daos(db):
    dao = TenantDAO(db)
    with Tx.begin(db) as tx:
        tx.acquire_advisory_lock(get_advisory_lock_id_from_string("tenant-create"))
        tenant = dao.create(schemas.TenantCreate(name="locked", org="org", created_by=uuid.uuid4()), tx=tx)
        dao.update(schemas.TenantUpdate(id=tenant.id, display_name="Locked"), tx=tx)
    assert dao.get_by_id(tenant.id).display_name == "Locked"
