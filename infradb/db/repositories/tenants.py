"""
Tenant DAO.

Tenants are keyed by id but usually looked up by org.
"""
from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from infradb.db import models
from infradb.db.repositories.base import BaseDAO
from infradb.db.tx import Tx
from infradb.utils.tracer import set_attribute

logger = logging.getLogger(__name__)


class TenantDAO(BaseDAO[models.Tenant]):
    model = models.Tenant
    dao_name = "TenantDAO"
    entity_label = "Tenant"

    order_by_fields = {
        "name": models.Tenant.name,
        "org": models.Tenant.org,
        "org_display_name": models.Tenant.org_display_name,
        "created": models.Tenant.created,
        "updated": models.Tenant.updated,
    }
    in_filters = {
        "tenant_ids": "id",
        "names": "name",
        "orgs": "org",
    }
    tsvector_columns = (
        models.Tenant.name,
        models.Tenant.org,
        models.Tenant.display_name,
        models.Tenant.org_display_name,
    )
    ilike_columns = (
        models.Tenant.name,
        models.Tenant.display_name,
        models.Tenant.org,
        models.Tenant.org_display_name,
    )

    def get_all_by_org(
        self, org: str, tx: Optional[Tx] = None, include_relations: Optional[Sequence[str]] = None
    ) -> List[models.Tenant]:
        with self._span("GetAllByOrg") as span:
            set_attribute(span, "org", org)
            with self._idb(tx) as db:
                return (
                    self._base_query(db, include_relations)
                    .filter(models.Tenant.org == org)
                    .order_by(models.Tenant.created.asc(), models.Tenant.id.asc())
                    .all()
                )
