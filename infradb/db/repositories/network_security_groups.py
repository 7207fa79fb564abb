"""
NetworkSecurityGroup DAO.

Security group ids are strings so a group created on a site can keep the id
it was given there.
"""
from __future__ import annotations

import logging
import uuid
from typing import Any, Dict

from sqlalchemy import Text, cast

from infradb.db import models, schemas
from infradb.db.errors import InvalidValueError
from infradb.db.models.site import SITE_RELATION_NAME
from infradb.db.models.tenant import TENANT_RELATION_NAME
from infradb.db.repositories.base import BaseDAO

logger = logging.getLogger(__name__)


def _dump_rules(rules):
    if rules is None:
        return None
    dumped = []
    for idx, rule in enumerate(rules):
        if rule is None:
            raise InvalidValueError(f"network security group rule at index {idx} is empty")
        dumped.append(rule.model_dump(exclude_none=True))
    return dumped


class NetworkSecurityGroupDAO(BaseDAO[models.NetworkSecurityGroup]):
    model = models.NetworkSecurityGroup
    dao_name = "NetworkSecurityGroupDAO"
    entity_label = "NetworkSecurityGroup"

    related_entities = {
        SITE_RELATION_NAME: "site",
        TENANT_RELATION_NAME: "tenant",
    }
    order_by_fields = {
        "name": models.NetworkSecurityGroup.name,
        "status": models.NetworkSecurityGroup.status,
        "created": models.NetworkSecurityGroup.created,
        "updated": models.NetworkSecurityGroup.updated,
    }
    in_filters = {
        "network_security_group_ids": "id",
        "site_ids": "site_id",
        "tenant_ids": "tenant_id",
        "tenant_orgs": "tenant_org",
        "statuses": "status",
    }
    eq_filters = {"name": "name"}
    tsvector_columns = (models.NetworkSecurityGroup.name, models.NetworkSecurityGroup.status)
    ilike_columns = (
        models.NetworkSecurityGroup.name,
        models.NetworkSecurityGroup.description,
        models.NetworkSecurityGroup.status,
        cast(models.NetworkSecurityGroup.labels, Text),
    )

    def _create_values(self, item: schemas.NetworkSecurityGroupCreate) -> Dict[str, Any]:
        values = item.model_dump(exclude_none=True, exclude={"rules"})
        values["id"] = item.id or str(uuid.uuid4())
        values["rules"] = _dump_rules(item.rules) or []
        values["updated_by"] = item.created_by
        return values

    def _update_values(self, item: schemas.NetworkSecurityGroupUpdate) -> Dict[str, Any]:
        values = item.model_dump(exclude={"id", "rules"}, exclude_none=True)
        if item.rules is not None:
            values["rules"] = _dump_rules(item.rules)
        return values
