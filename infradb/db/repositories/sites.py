"""
Site DAO.

Site config flags live in a JSON document; the flag filters compare the
extracted boolean.
"""
from __future__ import annotations

import logging

from sqlalchemy import false, or_

from infradb.db import models
from infradb.db.repositories.base import BaseDAO
from infradb.utils.tracer import set_attribute

logger = logging.getLogger(__name__)

_CONFIG_FLAGS = ("native_networking", "network_security_group", "nvlink_partition")


class SiteDAO(BaseDAO[models.Site]):
    model = models.Site
    dao_name = "SiteDAO"
    entity_label = "Site"

    order_by_fields = {
        "name": models.Site.name,
        "status": models.Site.status,
        "created": models.Site.created,
        "updated": models.Site.updated,
    }
    in_filters = {
        "site_ids": "id",
        "names": "name",
        "orgs": "org",
        "infrastructure_provider_ids": "infrastructure_provider_id",
        "statuses": "status",
    }
    tsvector_columns = (models.Site.name, models.Site.display_name, models.Site.description, models.Site.status)
    ilike_columns = (
        models.Site.name,
        models.Site.display_name,
        models.Site.description,
        models.Site.status,
    )

    def _apply_extra_filter(self, db, query, filter, span):
        for flag in _CONFIG_FLAGS:
            wanted = getattr(filter, flag, None)
            if wanted is None:
                continue
            value = models.Site.config[flag].as_boolean()
            if wanted:
                query = query.filter(value.is_(True))
            else:
                # a missing key counts as false
                query = query.filter(or_(value.is_(None), value == false()))
            set_attribute(span, f"config.{flag}", wanted)
        return query
