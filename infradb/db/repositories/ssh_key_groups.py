"""
SSHKeyGroup DAO and its site/instance association DAOs.

A group's version is a SHA1 over its member sites and keys, so sites can tell
whether their copy of the group is current.
"""
from __future__ import annotations

import hashlib
import logging
import uuid
from typing import List, Optional, Sequence

from sqlalchemy.orm import Session

from infradb.db import models
from infradb.db.errors import RecordNotFoundError
from infradb.db.models.instance import INSTANCE_RELATION_NAME
from infradb.db.models.site import SITE_RELATION_NAME
from infradb.db.models.ssh_key_group import (
    SSH_KEY_GROUP_RELATION_NAME,
    SSH_KEY_GROUP_SITE_ASSOCIATION_STATUS_DELETING,
)
from infradb.db.models.tenant import TENANT_RELATION_NAME
from infradb.db.repositories.base import BaseDAO
from infradb.db.tx import Tx
from infradb.db.util import now_utc
from infradb.utils.tracer import set_attribute

logger = logging.getLogger(__name__)


def _member_key_ids(db: Session, group_id: uuid.UUID) -> List[uuid.UUID]:
    rows = (
        db.query(models.SSHKeyAssociation.ssh_key_id)
        .filter(models.SSHKeyAssociation.sshkey_group_id == group_id)
        .order_by(models.SSHKeyAssociation.created.asc(), models.SSHKeyAssociation.id.asc())
        .all()
    )
    return [row[0] for row in rows]


def _key_set_digest(key_ids: Sequence[uuid.UUID], group_id: Optional[uuid.UUID] = None) -> str:
    digest = hashlib.sha1()
    if group_id is not None:
        digest.update(str(group_id).encode())
    for key_id in key_ids:
        digest.update(str(key_id).encode())
    return digest.hexdigest()


class SSHKeyGroupDAO(BaseDAO[models.SSHKeyGroup]):
    model = models.SSHKeyGroup
    dao_name = "SSHKeyGroupDAO"
    entity_label = "SSHKeyGroup"

    related_entities = {TENANT_RELATION_NAME: "tenant"}
    order_by_fields = {
        "name": models.SSHKeyGroup.name,
        "status": models.SSHKeyGroup.status,
        "created": models.SSHKeyGroup.created,
        "updated": models.SSHKeyGroup.updated,
    }
    in_filters = {
        "ssh_key_group_ids": "id",
        "names": "name",
        "tenant_orgs": "org",
        "tenant_ids": "tenant_id",
        "versions": "version",
        "statuses": "status",
    }
    tsvector_columns = (models.SSHKeyGroup.name,)
    ilike_columns = (models.SSHKeyGroup.name,)

    def generate_and_update_version(self, id: uuid.UUID, tx: Optional[Tx] = None) -> models.SSHKeyGroup:
        """Recompute the group version and push the key-set version to its site associations.

        The group digest covers: group id, live site ids (created order,
        Deleting associations skipped), group id again, key ids (created
        order). Site associations get sha1(key ids), without the group id.
        """
        with self._span("GenerateAndUpdateVersion") as span:
            set_attribute(span, "id", id)
            with self._idb(tx) as db:
                if db.query(models.SSHKeyGroup.id).filter(models.SSHKeyGroup.id == id).first() is None:
                    raise RecordNotFoundError(self.entity_label, id)

                group_digest = hashlib.sha1(str(id).encode())

                site_ids = (
                    db.query(models.SSHKeyGroupSiteAssociation.site_id)
                    .filter(
                        models.SSHKeyGroupSiteAssociation.sshkey_group_id == id,
                        models.SSHKeyGroupSiteAssociation.status != SSH_KEY_GROUP_SITE_ASSOCIATION_STATUS_DELETING,
                    )
                    .order_by(
                        models.SSHKeyGroupSiteAssociation.created.asc(),
                        models.SSHKeyGroupSiteAssociation.id.asc(),
                    )
                    .all()
                )
                for (site_id,) in site_ids:
                    group_digest.update(str(site_id).encode())

                group_digest.update(str(id).encode())
                key_ids = _member_key_ids(db, id)
                for key_id in key_ids:
                    group_digest.update(str(key_id).encode())

                version = group_digest.hexdigest()
                key_set_version = _key_set_digest(key_ids)

                db.query(models.SSHKeyGroup).filter(models.SSHKeyGroup.id == id).update(
                    {"version": version, "updated": now_utc()}, synchronize_session=False
                )
                db.query(models.SSHKeyGroupSiteAssociation).filter(
                    models.SSHKeyGroupSiteAssociation.sshkey_group_id == id,
                    models.SSHKeyGroupSiteAssociation.deleted.is_(None),
                ).update({"version": key_set_version, "updated": now_utc()}, synchronize_session=False)

                set_attribute(span, "version", version)
                logger.info(f"SSHKeyGroup {id} version set to {version} ({len(site_ids)} sites, {len(key_ids)} keys)")
                return self._fetch_ordered(db, [id])[0]


class SSHKeyGroupSiteAssociationDAO(BaseDAO[models.SSHKeyGroupSiteAssociation]):
    model = models.SSHKeyGroupSiteAssociation
    dao_name = "SSHKeyGroupSiteAssociationDAO"
    entity_label = "SSHKeyGroupSiteAssociation"

    related_entities = {
        SSH_KEY_GROUP_RELATION_NAME: "ssh_key_group",
        SITE_RELATION_NAME: "site",
    }
    order_by_fields = {
        "status": models.SSHKeyGroupSiteAssociation.status,
        "created": models.SSHKeyGroupSiteAssociation.created,
        "updated": models.SSHKeyGroupSiteAssociation.updated,
    }
    in_filters = {
        "ssh_key_group_ids": "sshkey_group_id",
        "site_ids": "site_id",
        "versions": "version",
        "statuses": "status",
    }

    def get_by_ssh_key_group_id_and_site_id(
        self,
        ssh_key_group_id: uuid.UUID,
        site_id: uuid.UUID,
        tx: Optional[Tx] = None,
        include_relations: Optional[Sequence[str]] = None,
    ) -> models.SSHKeyGroupSiteAssociation:
        with self._span("GetBySSHKeyGroupIDAndSiteID") as span:
            set_attribute(span, "ssh_key_group_id", ssh_key_group_id)
            set_attribute(span, "site_id", site_id)
            with self._idb(tx) as db:
                obj = (
                    self._base_query(db, include_relations)
                    .filter(
                        models.SSHKeyGroupSiteAssociation.sshkey_group_id == ssh_key_group_id,
                        models.SSHKeyGroupSiteAssociation.site_id == site_id,
                    )
                    .first()
                )
            if obj is None:
                raise RecordNotFoundError(self.entity_label, f"{ssh_key_group_id}/{site_id}")
            return obj

    def generate_and_update_version(
        self, id: uuid.UUID, tx: Optional[Tx] = None
    ) -> models.SSHKeyGroupSiteAssociation:
        """Set this association's version to sha1(group id + member key ids)."""
        with self._span("GenerateAndUpdateVersion") as span:
            set_attribute(span, "id", id)
            with self._idb(tx) as db:
                association = self._base_query(db).filter(models.SSHKeyGroupSiteAssociation.id == id).first()
                if association is None:
                    raise RecordNotFoundError(self.entity_label, id)
                key_ids = _member_key_ids(db, association.sshkey_group_id)
                version = _key_set_digest(key_ids, group_id=association.sshkey_group_id)
                db.query(models.SSHKeyGroupSiteAssociation).filter(
                    models.SSHKeyGroupSiteAssociation.id == id
                ).update({"version": version, "updated": now_utc()}, synchronize_session=False)
                set_attribute(span, "version", version)
                return self._fetch_ordered(db, [id])[0]


class SSHKeyGroupInstanceAssociationDAO(BaseDAO[models.SSHKeyGroupInstanceAssociation]):
    model = models.SSHKeyGroupInstanceAssociation
    dao_name = "SSHKeyGroupInstanceAssociationDAO"
    entity_label = "SSHKeyGroupInstanceAssociation"

    related_entities = {
        SSH_KEY_GROUP_RELATION_NAME: "ssh_key_group",
        SITE_RELATION_NAME: "site",
        INSTANCE_RELATION_NAME: "instance",
    }
    order_by_fields = {
        "created": models.SSHKeyGroupInstanceAssociation.created,
        "updated": models.SSHKeyGroupInstanceAssociation.updated,
    }
    in_filters = {
        "ssh_key_group_ids": "ssh_key_group_id",
        "site_ids": "site_id",
        "instance_ids": "instance_id",
    }
