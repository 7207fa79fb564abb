"""
Interface DAO.
"""
from __future__ import annotations

import logging

from sqlalchemy import Text, exists, func, select
from sqlalchemy.dialects import postgresql

from infradb.db import models
from infradb.db.models.instance import INSTANCE_RELATION_NAME
from infradb.db.repositories.base import BaseDAO
from infradb.utils.tracer import set_attribute

logger = logging.getLogger(__name__)


class InterfaceDAO(BaseDAO[models.Interface]):
    model = models.Interface
    dao_name = "InterfaceDAO"
    entity_label = "Interface"

    related_entities = {INSTANCE_RELATION_NAME: "instance"}
    order_by_fields = {
        "status": models.Interface.status,
        "created": models.Interface.created,
        "updated": models.Interface.updated,
    }
    in_filters = {
        "interface_ids": "id",
        "instance_ids": "instance_id",
        "statuses": "status",
    }
    eq_filters = {
        "subnet_id": "subnet_id",
        "vpc_prefix_id": "vpc_prefix_id",
        "device": "device",
        "device_instance": "device_instance",
        "is_physical": "is_physical",
    }

    def _apply_extra_filter(self, db, query, filter, span):
        ip_addresses = getattr(filter, "ip_addresses", None)
        if ip_addresses is None:
            return query
        if self._dialect(db) == "postgresql":
            condition = models.Interface.ip_addresses.op("&&")(
                postgresql.array([str(ip) for ip in ip_addresses], type_=Text)
            )
        else:
            # JSON array storage: any element in the requested set
            elements = func.json_each(models.Interface.ip_addresses).table_valued("value")
            condition = exists(select(1).select_from(elements).where(elements.c.value.in_(list(ip_addresses))))
        set_attribute(span, "ip_addresses", ip_addresses)
        return query.filter(condition)
