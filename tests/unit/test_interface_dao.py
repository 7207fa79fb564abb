import uuid

from infradb.db import schemas
from infradb.db.repositories import InterfaceDAO


def _interface(instance, **kwargs):
    kwargs.setdefault("status", "Ready")
    return schemas.InterfaceCreate(instance_id=instance.id, created_by=uuid.uuid4(), **kwargs)


def test_interface_crud_and_ip_list(db, tenant_factory, site_factory, instance_factory):
    instance = instance_factory(tenant_factory(), site_factory())
    dao = InterfaceDAO(db)
    iface = dao.create(_interface(instance, ip_addresses=["10.0.0.1", "10.0.0.2"], is_physical=True))
    assert iface.ip_addresses == ["10.0.0.1", "10.0.0.2"]

    updated = dao.update(schemas.InterfaceUpdate(id=iface.id, ip_addresses=["10.0.0.9"], mac_address="aa:bb"))
    assert updated.ip_addresses == ["10.0.0.9"]
    assert updated.is_physical is True

    fetched = dao.get_by_id(iface.id, include_relations=["Instance"])
    assert fetched.instance.id == instance.id


def test_ip_address_overlap_filter(db, tenant_factory, site_factory, instance_factory):
    instance = instance_factory(tenant_factory(), site_factory())
    dao = InterfaceDAO(db)
    first, second, _ = dao.create_multiple([
        _interface(instance, ip_addresses=["10.0.0.1", "10.0.0.2"]),
        _interface(instance, ip_addresses=["10.0.0.3"]),
        _interface(instance),
    ])

    items, total = dao.get_all(schemas.InterfaceFilter(ip_addresses=["10.0.0.2", "192.168.1.1"]))
    assert [i.id for i in items] == [first.id]
    assert total == 1

    items, _ = dao.get_all(schemas.InterfaceFilter(ip_addresses=["10.0.0.3", "10.0.0.1"]))
    assert {i.id for i in items} == {first.id, second.id}


def test_equality_filters(db, tenant_factory, site_factory, instance_factory):
    instance = instance_factory(tenant_factory(), site_factory())
    subnet = uuid.uuid4()
    dao = InterfaceDAO(db)
    physical, _ = dao.create_multiple([
        _interface(instance, subnet_id=subnet, is_physical=True, device="eth0", device_instance=0),
        _interface(instance, subnet_id=subnet, is_physical=False, device="eth0", device_instance=1),
    ])

    items, _ = dao.get_all(schemas.InterfaceFilter(subnet_id=subnet, is_physical=True))
    assert [i.id for i in items] == [physical.id]

    items, total = dao.get_all(schemas.InterfaceFilter(device="eth0", instance_ids=[instance.id]))
    assert total == 2
