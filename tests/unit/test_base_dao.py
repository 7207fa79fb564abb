import uuid

import pytest

from infradb.db import models, schemas
from infradb.db.errors import BatchSizeExceededError, InvalidParamsError, RecordNotFoundError
from infradb.db.paginator import TOTAL_LIMIT
from infradb.db.repositories import InstanceDAO, TenantDAO
from infradb.db.tx import Tx
from infradb.db.util import MAX_BATCH_ITEMS, MAX_BATCH_ITEMS_TO_TRACE


def _tenant(name, org="org"):
    return schemas.TenantCreate(name=name, org=org, created_by=uuid.uuid4())


def _load_including_deleted(db, model, id):
    session = db.session_factory()
    try:
        return session.query(model).execution_options(include_deleted=True).filter(model.id == id).one()
    finally:
        session.close()


def test_create_multiple_preserves_input_order(db):
    dao = TenantDAO(db)
    created = dao.create_multiple([_tenant(n) for n in ("c", "a", "b")])
    assert [t.name for t in created] == ["c", "a", "b"]
    assert all(t.created is not None and t.deleted is None for t in created)


def test_empty_batches_are_noops(db):
    dao = TenantDAO(db)
    assert dao.create_multiple([]) == []
    assert dao.update_multiple([]) == []


def test_batch_limit_checked_before_touching_database():
    # No DBSession at all: reaching the database would fail with AttributeError
    dao = TenantDAO(None)
    with pytest.raises(BatchSizeExceededError) as excinfo:
        dao.create_multiple([_tenant(f"t{i}") for i in range(MAX_BATCH_ITEMS + 1)])
    assert str(excinfo.value) == f"batch size {MAX_BATCH_ITEMS + 1} exceeds maximum allowed {MAX_BATCH_ITEMS}"

    updates = [schemas.TenantUpdate(id=uuid.uuid4(), name="x") for _ in range(MAX_BATCH_ITEMS + 1)]
    with pytest.raises(BatchSizeExceededError):
        dao.update_multiple(updates)


def test_batch_at_limit_is_accepted(db):
    dao = TenantDAO(db)
    created = dao.create_multiple([_tenant(f"t{i:03d}") for i in range(MAX_BATCH_ITEMS)])
    assert len(created) == MAX_BATCH_ITEMS
    assert dao.get_count() == MAX_BATCH_ITEMS


def test_get_by_id_missing(db):
    missing = uuid.uuid4()
    with pytest.raises(RecordNotFoundError) as excinfo:
        TenantDAO(db).get_by_id(missing)
    assert excinfo.value.identifier == missing
    assert str(missing) in str(excinfo.value)


def test_get_all_no_match_is_not_an_error(db):
    items, total = TenantDAO(db).get_all(schemas.TenantFilter(orgs=["nobody"]))
    assert items == []
    assert total == 0


def test_update_only_touches_provided_fields(db):
    dao = TenantDAO(db)
    tenant = dao.create(_tenant("before", org="acme"))
    updated = dao.update(schemas.TenantUpdate(id=tenant.id, display_name="Before Inc"))
    assert updated.name == "before"
    assert updated.display_name == "Before Inc"
    assert updated.updated >= tenant.updated


def test_update_multiple_returns_input_order(db):
    dao = TenantDAO(db)
    a, b = dao.create_multiple([_tenant("a"), _tenant("b")])
    result = dao.update_multiple([
        schemas.TenantUpdate(id=b.id, name="b2"),
        schemas.TenantUpdate(id=a.id, name="a2"),
    ])
    assert [t.name for t in result] == ["b2", "a2"]


def test_update_missing_id_raises(db):
    with pytest.raises(RecordNotFoundError):
        TenantDAO(db).update(schemas.TenantUpdate(id=uuid.uuid4(), name="ghost"))


def test_soft_delete_hides_row_and_is_idempotent(db):
    dao = TenantDAO(db)
    keep, gone = dao.create_multiple([_tenant("keep"), _tenant("gone")])

    dao.delete(gone.id)
    dao.delete(gone.id)
    dao.delete(uuid.uuid4())

    with pytest.raises(RecordNotFoundError):
        dao.get_by_id(gone.id)
    items, total = dao.get_all()
    assert [t.id for t in items] == [keep.id]
    assert total == 1

    assert _load_including_deleted(db, models.Tenant, gone.id).deleted is not None


def test_update_skips_soft_deleted_row_inside_tx(db):
    dao = TenantDAO(db)
    gone = dao.create(_tenant("a"))
    dao.delete(gone.id)

    with Tx.begin(db) as tx:
        with pytest.raises(RecordNotFoundError):
            dao.update(schemas.TenantUpdate(id=gone.id, name="renamed"), tx=tx)

    row = _load_including_deleted(db, models.Tenant, gone.id)
    assert row.name == "a"
    assert row.deleted is not None


def test_update_multiple_names_every_missing_id(db):
    dao = TenantDAO(db)
    live = dao.create(_tenant("live"))
    first, second = uuid.uuid4(), uuid.uuid4()
    with pytest.raises(RecordNotFoundError) as excinfo:
        dao.update_multiple([
            schemas.TenantUpdate(id=live.id, name="x"),
            schemas.TenantUpdate(id=first, name="y"),
            schemas.TenantUpdate(id=second, name="z"),
        ])
    assert str(excinfo.value) == f"Tenant {first}, {second} does not exist"


def test_pagination_and_ordering(db):
    dao = TenantDAO(db)
    dao.create_multiple([_tenant(f"t{i}") for i in (3, 1, 4, 0, 2)])

    page = schemas.PageInput(offset=1, limit=2, order_by=schemas.OrderBy(field="name", order="DESC"))
    items, total = dao.get_all(page=page)
    assert [t.name for t in items] == ["t3", "t2"]
    assert total == 5

    items, _ = dao.get_all(page=schemas.PageInput(limit=TOTAL_LIMIT, order_by=schemas.OrderBy(field="name")))
    assert [t.name for t in items] == ["t0", "t1", "t2", "t3", "t4"]


def test_default_order_is_creation_order(db):
    dao = TenantDAO(db)
    names = []
    for name in ("z", "m", "a"):
        dao.create(_tenant(name))
        names.append(name)
    items, _ = dao.get_all()
    assert [t.name for t in items] == names


def test_invalid_order_field_rejected(db):
    with pytest.raises(InvalidParamsError):
        TenantDAO(db).get_all(page=schemas.PageInput(order_by=schemas.OrderBy(field="config")))


def test_unknown_relation_rejected(db, tenant_factory, site_factory, instance_factory):
    instance = instance_factory(tenant_factory(), site_factory())
    with pytest.raises(InvalidParamsError, match="invalid relation"):
        InstanceDAO(db).get_by_id(instance.id, include_relations=["Bogus"])


def test_relations_are_loaded_eagerly(db, tenant_factory, site_factory, instance_factory):
    tenant = tenant_factory(name="acme")
    site = site_factory(name="dc-1")
    instance = instance_factory(tenant, site)

    fetched = InstanceDAO(db).get_by_id(instance.id, include_relations=["Tenant", "Site"])
    assert fetched.tenant.name == "acme"
    assert fetched.site.name == "dc-1"

    items, _ = InstanceDAO(db).get_all(include_relations=["Tenant"])
    assert items[0].tenant.id == tenant.id


def test_spans_are_children_of_caller(db, spans, caller_tracer):
    dao = TenantDAO(db)
    with caller_tracer.start_as_current_span("handler"):
        tenant = dao.create(_tenant("traced"))
        dao.get_by_id(tenant.id)
        dao.get_all(schemas.TenantFilter(orgs=["org"]))

    finished = {s.name: s for s in spans.get_finished_spans()}
    assert {"TenantDAO.Create", "TenantDAO.CreateMultiple", "TenantDAO.GetByID", "TenantDAO.GetAll"} <= set(finished)
    assert finished["TenantDAO.GetByID"].attributes["id"] == str(tenant.id)
    assert list(finished["TenantDAO.GetAll"].attributes["orgs"]) == ["org"]
    assert finished["TenantDAO.CreateMultiple"].attributes["batch_size"] == 1


def test_no_spans_without_caller(db, spans):
    TenantDAO(db).create(_tenant("untraced"))
    assert spans.get_finished_spans() == ()


def test_update_multiple_truncates_traced_items(db, spans, caller_tracer):
    dao = TenantDAO(db)
    tenants = dao.create_multiple([_tenant(f"t{i}") for i in range(MAX_BATCH_ITEMS_TO_TRACE + 5)])
    spans.clear()
    with caller_tracer.start_as_current_span("handler"):
        dao.update_multiple([schemas.TenantUpdate(id=t.id, name=f"{t.name}-new") for t in tenants])

    span = next(s for s in spans.get_finished_spans() if s.name == "TenantDAO.UpdateMultiple")
    assert span.attributes["items_truncated"] == "true"
    assert span.attributes["items.0.name"] == "t0-new"
    assert f"items.{MAX_BATCH_ITEMS_TO_TRACE - 1}.name" in span.attributes
    assert f"items.{MAX_BATCH_ITEMS_TO_TRACE}.name" not in span.attributes
