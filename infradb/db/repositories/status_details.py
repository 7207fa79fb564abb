"""
StatusDetail DAO.

Status details are an append-mostly history of status changes per entity.
Updating one with an unchanged status and message is a no-op; otherwise its
``count`` is bumped.
"""
from __future__ import annotations

import logging
from typing import List, Optional, Sequence, Tuple

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError

from infradb.db import models, schemas
from infradb.db.errors import InvalidValueError, RecordNotFoundError
from infradb.db.paginator import ORDER_DESCENDING, OrderBy, PageInput
from infradb.db.repositories.base import BaseDAO
from infradb.db.tx import Tx
from infradb.db.util import now_utc
from infradb.utils.tracer import set_attribute

logger = logging.getLogger(__name__)


class StatusDetailDAO(BaseDAO[models.StatusDetail]):
    model = models.StatusDetail
    dao_name = "StatusDetailDAO"
    entity_label = "StatusDetail"

    order_by_fields = {
        "status": models.StatusDetail.status,
        "created": models.StatusDetail.created,
        "updated": models.StatusDetail.updated,
    }
    in_filters = {
        "entity_ids": "entity_id",
        "statuses": "status",
    }

    def _create_values(self, item):
        values = super()._create_values(item)
        values["count"] = 1
        return values

    def update_multiple(self, items: Sequence[schemas.StatusDetailUpdate], tx: Optional[Tx] = None):
        self._check_batch_size(items)
        with self._span("UpdateMultiple") as span:
            set_attribute(span, "batch_size", len(items))
            if not items:
                return []
            for item in items:
                if not item.status:
                    raise InvalidValueError("status detail status must not be empty")
            try:
                with self._idb(tx) as db:
                    current = {row.id: row for row in self._base_query(db).filter(
                        models.StatusDetail.id.in_([item.id for item in items])
                    ).all()}
                    for item in items:
                        row = current.get(item.id)
                        if row is None:
                            raise RecordNotFoundError(self.entity_label, item.id)
                        if row.status == item.status and row.message == item.message:
                            continue
                        db.query(models.StatusDetail).filter(models.StatusDetail.id == item.id).update(
                            {
                                "status": item.status,
                                "message": item.message,
                                "count": models.StatusDetail.count + 1,
                                "updated": now_utc(),
                            },
                            synchronize_session=False,
                        )
                    return self._fetch_ordered(db, [item.id for item in items])
            except SQLAlchemyError as e:
                logger.error(f"{self.dao_name}: failed to update {len(items)} status details: {e}")
                raise

    def get_all_by_entity_id(
        self, entity_id: str, page: Optional[PageInput] = None, tx: Optional[Tx] = None
    ) -> Tuple[List[models.StatusDetail], int]:
        with self._span("GetAllByEntityID") as span:
            set_attribute(span, "entity_id", entity_id)
            return self.get_all_by_entity_ids([entity_id], page=page, tx=tx)

    def get_all_by_entity_ids(
        self, entity_ids: Sequence[str], page: Optional[PageInput] = None, tx: Optional[Tx] = None
    ) -> Tuple[List[models.StatusDetail], int]:
        """Newest first unless the page asks for another order."""
        if not entity_ids:
            return [], 0
        page = page or PageInput()
        if page.order_by is None:
            page = page.model_copy(update={"order_by": OrderBy(field="created", order=ORDER_DESCENDING)})
        return self.get_all(schemas.StatusDetailFilter(entity_ids=list(entity_ids)), page=page, tx=tx)

    def get_recent_by_entity_ids(
        self, entity_ids: Sequence[str], recent_count: int, tx: Optional[Tx] = None
    ) -> List[models.StatusDetail]:
        """At most ``recent_count`` newest details for each entity."""
        with self._span("GetRecentByEntityIDs") as span:
            set_attribute(span, "entity_ids", entity_ids)
            set_attribute(span, "recent_count", recent_count)
            if not entity_ids:
                return []
            with self._idb(tx) as db:
                rank = func.row_number().over(
                    partition_by=models.StatusDetail.entity_id,
                    order_by=(models.StatusDetail.created.desc(), models.StatusDetail.id.desc()),
                ).label("rn")
                ranked = (
                    db.query(models.StatusDetail.id.label("id"), rank)
                    .filter(models.StatusDetail.entity_id.in_(list(entity_ids)))
                    .subquery()
                )
                return (
                    db.query(models.StatusDetail)
                    .join(ranked, ranked.c.id == models.StatusDetail.id)
                    .filter(ranked.c.rn <= recent_count)
                    .order_by(models.StatusDetail.entity_id.asc(), models.StatusDetail.created.desc())
                    .all()
                )
