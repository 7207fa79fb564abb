"""
DpuExtensionService and DpuExtensionServiceDeployment DAOs.
"""
from __future__ import annotations

import logging
from typing import List, Optional, Sequence, Tuple

from sqlalchemy import Text, cast

from infradb.db import models
from infradb.db.models.dpu_extension_service import DPU_EXTENSION_SERVICE_RELATION_NAME
from infradb.db.models.instance import INSTANCE_RELATION_NAME
from infradb.db.models.site import SITE_RELATION_NAME
from infradb.db.models.tenant import TENANT_RELATION_NAME
from infradb.db.paginator import PageInput
from infradb.db.repositories.base import BaseDAO
from infradb.db.tx import Tx

logger = logging.getLogger(__name__)


class DpuExtensionServiceDAO(BaseDAO[models.DpuExtensionService]):
    model = models.DpuExtensionService
    dao_name = "DpuExtensionServiceDAO"
    entity_label = "DpuExtensionService"

    related_entities = {
        SITE_RELATION_NAME: "site",
        TENANT_RELATION_NAME: "tenant",
    }
    order_by_fields = {
        "name": models.DpuExtensionService.name,
        "service_type": models.DpuExtensionService.service_type,
        "status": models.DpuExtensionService.status,
        "created": models.DpuExtensionService.created,
        "updated": models.DpuExtensionService.updated,
    }
    in_filters = {
        "dpu_extension_service_ids": "id",
        "site_ids": "site_id",
        "tenant_ids": "tenant_id",
        "service_types": "service_type",
        "statuses": "status",
    }
    tsvector_columns = (models.DpuExtensionService.name, models.DpuExtensionService.description)
    ilike_columns = (models.DpuExtensionService.name, models.DpuExtensionService.description)


class DpuExtensionServiceDeploymentDAO(BaseDAO[models.DpuExtensionServiceDeployment]):
    model = models.DpuExtensionServiceDeployment
    dao_name = "DpuExtensionServiceDeploymentDAO"
    entity_label = "DpuExtensionServiceDeployment"

    related_entities = {
        SITE_RELATION_NAME: "site",
        TENANT_RELATION_NAME: "tenant",
        INSTANCE_RELATION_NAME: "instance",
        DPU_EXTENSION_SERVICE_RELATION_NAME: "dpu_extension_service",
    }
    order_by_fields = {
        "id": models.DpuExtensionServiceDeployment.id,
        "status": models.DpuExtensionServiceDeployment.status,
        "created": models.DpuExtensionServiceDeployment.created,
        "updated": models.DpuExtensionServiceDeployment.updated,
    }
    in_filters = {
        "dpu_extension_service_deployment_ids": "id",
        "site_ids": "site_id",
        "tenant_ids": "tenant_id",
        "instance_ids": "instance_id",
        "dpu_extension_service_ids": "dpu_extension_service_id",
        "versions": "version",
        "statuses": "status",
    }
    tsvector_columns = (models.DpuExtensionServiceDeployment.status,)
    ilike_columns = (
        models.DpuExtensionServiceDeployment.status,
        cast(models.DpuExtensionServiceDeployment.id, Text),
    )

    def get_all(
        self,
        filter=None,
        page: Optional[PageInput] = None,
        include_relations: Optional[Sequence[str]] = None,
        tx: Optional[Tx] = None,
    ) -> Tuple[List[models.DpuExtensionServiceDeployment], int]:
        ids = getattr(filter, "dpu_extension_service_deployment_ids", None)
        if ids is not None and len(ids) == 0:
            # an explicit empty id list matches nothing; skip the round trip
            return [], 0
        return super().get_all(filter=filter, page=page, include_relations=include_relations, tx=tx)
