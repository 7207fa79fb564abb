"""
Instance DAO.

Besides the common operations: status counts, GetCount and Clear, which resets
nullable columns (the plain Update treats None as "leave unchanged").
"""
from __future__ import annotations

import logging
import uuid
from typing import Dict, Optional

from sqlalchemy import Text, cast, func

from infradb.db import models, schemas
from infradb.db.models import instance as instance_model
from infradb.db.models.network_security_group import NETWORK_SECURITY_GROUP_RELATION_NAME
from infradb.db.models.site import SITE_RELATION_NAME
from infradb.db.models.tenant import TENANT_RELATION_NAME
from infradb.db.repositories.base import BaseDAO
from infradb.db.tx import Tx
from infradb.db.util import now_utc
from infradb.utils.tracer import set_attribute

logger = logging.getLogger(__name__)

# Statuses always present in get_count_by_status, even with no rows
_COUNTED_STATUSES = (
    instance_model.INSTANCE_STATUS_PENDING,
    instance_model.INSTANCE_STATUS_PROVISIONING,
    instance_model.INSTANCE_STATUS_CONFIGURING,
    instance_model.INSTANCE_STATUS_READY,
    instance_model.INSTANCE_STATUS_UPDATING,
    instance_model.INSTANCE_STATUS_TERMINATING,
    instance_model.INSTANCE_STATUS_ERROR,
)


class InstanceDAO(BaseDAO[models.Instance]):
    model = models.Instance
    dao_name = "InstanceDAO"
    entity_label = "Instance"

    related_entities = {
        TENANT_RELATION_NAME: "tenant",
        SITE_RELATION_NAME: "site",
        NETWORK_SECURITY_GROUP_RELATION_NAME: "network_security_group",
    }
    order_by_fields = {
        "name": models.Instance.name,
        "status": models.Instance.status,
        "created": models.Instance.created,
        "updated": models.Instance.updated,
        "machine_id": models.Instance.machine_id,
        "tenant_org_display_name": models.Tenant.org_display_name,
        "network_security_group_name": models.NetworkSecurityGroup.name,
    }
    order_by_relations = {
        "tenant_org_display_name": TENANT_RELATION_NAME,
        "network_security_group_name": NETWORK_SECURITY_GROUP_RELATION_NAME,
    }
    in_filters = {
        "instance_ids": "id",
        "names": "name",
        "allocation_ids": "allocation_id",
        "allocation_constraint_ids": "allocation_constraint_id",
        "tenant_ids": "tenant_id",
        "infrastructure_provider_ids": "infrastructure_provider_id",
        "site_ids": "site_id",
        "instance_type_ids": "instance_type_id",
        "network_security_group_ids": "network_security_group_id",
        "vpc_ids": "vpc_id",
        "machine_ids": "machine_id",
        "controller_instance_ids": "controller_instance_id",
        "operating_system_ids": "operating_system_id",
        "statuses": "status",
    }
    tsvector_columns = (models.Instance.name, models.Instance.status, models.Instance.labels)
    ilike_columns = (
        models.Instance.name,
        models.Instance.status,
        models.Instance.description,
        cast(models.Instance.labels, Text),
    )

    def get_count_by_status(
        self,
        tenant_id: Optional[uuid.UUID] = None,
        site_id: Optional[uuid.UUID] = None,
        tx: Optional[Tx] = None,
    ) -> Dict[str, int]:
        """Instance counts per status plus a ``total`` key."""
        with self._span("GetCountByStatus") as span:
            with self._idb(tx) as db:
                query = db.query(models.Instance.status, func.count(models.Instance.id))
                if tenant_id is not None:
                    query = query.filter(models.Instance.tenant_id == tenant_id)
                    set_attribute(span, "tenant_id", tenant_id)
                if site_id is not None:
                    query = query.filter(models.Instance.site_id == site_id)
                    set_attribute(span, "site_id", site_id)
                rows = query.group_by(models.Instance.status).all()

        results = {"total": 0}
        results.update({status: 0 for status in _COUNTED_STATUSES})
        for status, count in rows:
            results[status] = count
            results["total"] += count
        return results

    def clear(self, item: schemas.InstanceClear, tx: Optional[Tx] = None) -> models.Instance:
        with self._span("Clear") as span:
            set_attribute(span, "id", item.id)
            columns = [name for name, flagged in item.model_dump(exclude={"id"}).items() if flagged]
            with self._idb(tx) as db:
                if columns:
                    values = {name: None for name in columns}
                    values["updated"] = now_utc()
                    self._live_rows(db).filter(models.Instance.id == item.id).update(
                        values, synchronize_session=False
                    )
                    set_attribute(span, "cleared", columns)
            return self.get_by_id(item.id, tx=tx)
