import pytest

from infradb.db import schemas
from infradb.db.errors import InvalidValueError
from infradb.db.repositories import NetworkSecurityGroupDAO


def test_create_generates_string_id_and_defaults(db, tenant_factory, site_factory, nsg_factory):
    tenant, site = tenant_factory(), site_factory()
    nsg = nsg_factory(tenant, site)
    assert isinstance(nsg.id, str) and len(nsg.id) == 36
    assert nsg.rules == []
    assert nsg.updated_by == nsg.created_by


def test_create_keeps_given_id_and_rules(db, tenant_factory, site_factory, nsg_factory):
    tenant, site = tenant_factory(), site_factory()
    nsg = nsg_factory(
        tenant, site, id="nsg-from-site",
        rules=[schemas.NetworkSecurityGroupRule(name="ssh", destination_port_range="22", vendor_field="x")],
    )
    assert nsg.id == "nsg-from-site"
    assert nsg.rules == [{
        "name": "ssh", "direction": "INGRESS", "protocol": "ANY", "action": "PERMIT", "priority": 0,
        "destination_port_range": "22", "vendor_field": "x",
    }]

    fetched = NetworkSecurityGroupDAO(db).get_by_id("nsg-from-site", include_relations=["Site", "Tenant"])
    assert fetched.site.id == site.id
    assert fetched.tenant.id == tenant.id


def test_empty_rule_rejected(db, tenant_factory, site_factory, nsg_factory):
    tenant, site = tenant_factory(), site_factory()
    with pytest.raises(InvalidValueError):
        nsg_factory(tenant, site, rules=[schemas.NetworkSecurityGroupRule(name="ok"), None])

    nsg = nsg_factory(tenant, site)
    with pytest.raises(InvalidValueError):
        NetworkSecurityGroupDAO(db).update(schemas.NetworkSecurityGroupUpdate(id=nsg.id, rules=[None]))


def test_update_replaces_rules(db, tenant_factory, site_factory, nsg_factory):
    tenant, site = tenant_factory(), site_factory()
    nsg = nsg_factory(tenant, site, rules=[schemas.NetworkSecurityGroupRule(name="old")])
    updated = NetworkSecurityGroupDAO(db).update(schemas.NetworkSecurityGroupUpdate(
        id=nsg.id, rules=[schemas.NetworkSecurityGroupRule(name="new", action="DENY")], version="2",
    ))
    assert [r["name"] for r in updated.rules] == ["new"]
    assert updated.rules[0]["action"] == "DENY"
    assert updated.version == "2"


def test_filters(db, tenant_factory, site_factory, nsg_factory):
    tenant, site = tenant_factory(org="t-org"), site_factory()
    web = nsg_factory(tenant, site, name="web")
    nsg_factory(tenant, site, name="db", status="Pending")
    dao = NetworkSecurityGroupDAO(db)

    items, _ = dao.get_all(schemas.NetworkSecurityGroupFilter(name="web"))
    assert [n.id for n in items] == [web.id]

    items, total = dao.get_all(schemas.NetworkSecurityGroupFilter(tenant_orgs=["t-org"], statuses=["Ready"]))
    assert [n.id for n in items] == [web.id]
    assert total == 1
