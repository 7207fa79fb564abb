"""
SSHKey and SSHKeyAssociation DAOs.
"""
from __future__ import annotations

import logging

from infradb.db import models
from infradb.db.models.ssh_key import SSH_KEY_RELATION_NAME
from infradb.db.models.ssh_key_group import SSH_KEY_GROUP_RELATION_NAME
from infradb.db.models.tenant import TENANT_RELATION_NAME
from infradb.db.repositories.base import BaseDAO
from infradb.utils.tracer import set_attribute

logger = logging.getLogger(__name__)


class SSHKeyDAO(BaseDAO[models.SSHKey]):
    model = models.SSHKey
    dao_name = "SSHKeyDAO"
    entity_label = "SSHKey"

    related_entities = {TENANT_RELATION_NAME: "tenant"}
    order_by_fields = {
        "name": models.SSHKey.name,
        "org": models.SSHKey.org,
        "tenant_id": models.SSHKey.tenant_id,
        "created": models.SSHKey.created,
        "updated": models.SSHKey.updated,
    }
    in_filters = {
        "ssh_key_ids": "id",
        "names": "name",
        "tenant_orgs": "org",
        "tenant_ids": "tenant_id",
        "fingerprints": "fingerprint",
    }
    eq_filters = {"expires": "expires"}
    tsvector_columns = (models.SSHKey.name, models.SSHKey.fingerprint)
    ilike_columns = (models.SSHKey.name, models.SSHKey.fingerprint)

    def _apply_extra_filter(self, db, query, filter, span):
        group_ids = getattr(filter, "ssh_key_group_ids", None)
        if group_ids is None:
            return query
        # Soft-deleted associations are excluded by the session-wide criteria
        query = (
            query.join(models.SSHKeyAssociation, models.SSHKeyAssociation.ssh_key_id == models.SSHKey.id)
            .filter(models.SSHKeyAssociation.sshkey_group_id.in_(list(group_ids)))
            .distinct()
        )
        set_attribute(span, "ssh_key_group_ids", group_ids)
        return query


class SSHKeyAssociationDAO(BaseDAO[models.SSHKeyAssociation]):
    model = models.SSHKeyAssociation
    dao_name = "SSHKeyAssociationDAO"
    entity_label = "SSHKeyAssociation"

    related_entities = {
        SSH_KEY_RELATION_NAME: "ssh_key",
        SSH_KEY_GROUP_RELATION_NAME: "ssh_key_group",
    }
    order_by_fields = {
        "created": models.SSHKeyAssociation.created,
        "updated": models.SSHKeyAssociation.updated,
    }
    in_filters = {
        "ssh_key_ids": "ssh_key_id",
        "ssh_key_group_ids": "sshkey_group_id",
    }
