"""
Generic DAO over one SQLAlchemy model.

Implements Create / CreateMultiple / GetByID / GetAll / GetCount / Update /
UpdateMultiple / Delete once. Entity DAOs declare their filters, order-by
columns, relations and search columns, and override the value hooks where a
table needs special handling.
"""
from __future__ import annotations

import logging
import uuid
from contextlib import contextmanager
from typing import Any, Dict, Generic, Iterator, List, Mapping, Optional, Sequence, Tuple, TypeVar

from pydantic import BaseModel
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Query, Session, joinedload

from infradb.db.database import DBSession
from infradb.db.errors import BatchSizeExceededError, InvalidParamsError, RecordNotFoundError
from infradb.db.models import SoftDeleteMixin
from infradb.db.paginator import OrderBy, PageInput, new_default_order_by, new_paginator_multi_order_by
from infradb.db.search import build_search_condition
from infradb.db.tx import Tx, get_idb
from infradb.db.util import MAX_BATCH_ITEMS, MAX_BATCH_ITEMS_TO_TRACE, now_utc
from infradb.utils.tracer import child_span, set_attribute

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT")


class BaseDAO(Generic[ModelT]):
    model: type
    # Used for span names ("InstanceDAO.GetAll") and error messages
    dao_name: str = ""
    entity_label: str = ""

    # relation name accepted in include_relations -> relationship attribute
    related_entities: Mapping[str, str] = {}
    # external order-by field -> column expression
    order_by_fields: Mapping[str, Any] = {}
    # order-by fields that need a relation joined in
    order_by_relations: Mapping[str, str] = {}
    default_order_by: str = "created"

    # filter attribute -> model column name, applied as IN (...)
    in_filters: Mapping[str, str] = {}
    # filter attribute -> model column name, applied as equality
    eq_filters: Mapping[str, str] = {}

    tsvector_columns: Sequence[Any] = ()
    ilike_columns: Sequence[Any] = ()

    def __init__(self, db_session: DBSession):
        self.db_session = db_session

    # -- helpers -----------------------------------------------------------

    def _idb(self, tx: Optional[Tx]):
        return get_idb(tx, self.db_session)

    @contextmanager
    def _span(self, operation: str) -> Iterator[Any]:
        with child_span(f"{self.dao_name}.{operation}") as span:
            yield span

    @staticmethod
    def _dialect(db: Session) -> str:
        return db.get_bind().dialect.name

    def _relation_options(self, include_relations: Optional[Sequence[str]]) -> list:
        options = []
        for name in include_relations or ():
            attr = self.related_entities.get(name)
            if attr is None:
                raise InvalidParamsError(
                    f"invalid relation {name!r} for {self.entity_label}, allowed: {sorted(self.related_entities)}"
                )
            options.append(joinedload(getattr(self.model, attr)))
        return options

    def _base_query(self, db: Session, include_relations: Optional[Sequence[str]] = None) -> Query:
        # populate_existing: rows updated in bulk inside a shared Tx must not come back stale
        return (
            db.query(self.model)
            .options(*self._relation_options(include_relations))
            .populate_existing()
        )

    def _live_rows(self, db: Session) -> Query:
        # Bulk UPDATEs bypass the soft-delete loader criteria, which only covers SELECTs
        query = db.query(self.model)
        if issubclass(self.model, SoftDeleteMixin):
            query = query.filter(self.model.deleted.is_(None))
        return query

    def _check_batch_size(self, inputs: Sequence[Any]) -> None:
        if len(inputs) > MAX_BATCH_ITEMS:
            logger.warning(f"{self.dao_name}: rejected batch of {len(inputs)} items (max {MAX_BATCH_ITEMS})")
            raise BatchSizeExceededError(len(inputs), MAX_BATCH_ITEMS)

    def _fetch_ordered(self, db: Session, ids: Sequence[Any], include_relations=None) -> List[ModelT]:
        """Load rows by id, returned in the order of ``ids``."""
        rows = self._base_query(db, include_relations).filter(self.model.id.in_(list(ids))).all()
        by_id = {row.id: row for row in rows}
        missing = [i for i in ids if i not in by_id]
        if missing:
            identifier = missing[0] if len(missing) == 1 else ", ".join(str(i) for i in missing)
            raise RecordNotFoundError(self.entity_label, identifier)
        return [by_id[i] for i in ids]

    def _order_bys(self, order_by: Optional[OrderBy]) -> List[OrderBy]:
        order_bys = []
        if order_by is not None:
            order_bys.append(order_by.model_copy())
        if order_by is None or order_by.field != self.default_order_by:
            order_bys.append(new_default_order_by(self.default_order_by))
        return order_bys

    # -- value hooks -------------------------------------------------------

    def _create_values(self, item: BaseModel) -> Dict[str, Any]:
        values = item.model_dump(exclude_none=True)
        values["id"] = uuid.uuid4()
        return values

    def _update_values(self, item: BaseModel) -> Dict[str, Any]:
        return item.model_dump(exclude={"id"}, exclude_none=True)

    # -- filtering ---------------------------------------------------------

    def _apply_filter(self, db: Session, query: Query, filter: Optional[BaseModel], span) -> Query:
        if filter is None:
            return query
        for field, column in self.in_filters.items():
            value = getattr(filter, field, None)
            if value is not None:
                query = query.filter(getattr(self.model, column).in_(list(value)))
                set_attribute(span, field, value)
        for field, column in self.eq_filters.items():
            value = getattr(filter, field, None)
            if value is not None:
                query = query.filter(getattr(self.model, column) == value)
                set_attribute(span, field, value)
        search_query = getattr(filter, "search_query", None)
        if search_query is not None:
            query = query.filter(
                build_search_condition(self._dialect(db), search_query, self.tsvector_columns, self.ilike_columns)
            )
            set_attribute(span, "search_query", search_query)
        return self._apply_extra_filter(db, query, filter, span)

    def _apply_extra_filter(self, db: Session, query: Query, filter: BaseModel, span) -> Query:
        return query

    # -- operations --------------------------------------------------------

    def create(self, item: BaseModel, tx: Optional[Tx] = None) -> ModelT:
        with self._span("Create"):
            return self.create_multiple([item], tx=tx)[0]

    def create_multiple(self, items: Sequence[BaseModel], tx: Optional[Tx] = None) -> List[ModelT]:
        """Insert all items in one flush and return them in input order."""
        self._check_batch_size(items)
        with self._span("CreateMultiple") as span:
            set_attribute(span, "batch_size", len(items))
            if not items:
                return []
            rows = [self.model(**self._create_values(item)) for item in items]
            try:
                with self._idb(tx) as db:
                    db.add_all(rows)
                    db.flush()
                    results = self._fetch_ordered(db, [row.id for row in rows])
            except SQLAlchemyError as e:
                logger.error(f"{self.dao_name}: failed to create {len(items)} {self.entity_label} rows: {e}")
                raise
            logger.info(f"Created {len(results)} {self.entity_label} row(s)")
            return results

    def get_by_id(self, id: Any, tx: Optional[Tx] = None, include_relations: Optional[Sequence[str]] = None) -> ModelT:
        with self._span("GetByID") as span:
            set_attribute(span, "id", id)
            with self._idb(tx) as db:
                obj = self._base_query(db, include_relations).filter(self.model.id == id).first()
            if obj is None:
                raise RecordNotFoundError(self.entity_label, id)
            return obj

    def get_all(
        self,
        filter: Optional[BaseModel] = None,
        page: Optional[PageInput] = None,
        include_relations: Optional[Sequence[str]] = None,
        tx: Optional[Tx] = None,
    ) -> Tuple[List[ModelT], int]:
        """Return one page of matching rows and the total match count."""
        page = page or PageInput()
        with self._span("GetAll") as span:
            relations = list(include_relations or [])
            order_bys = self._order_bys(page.order_by)
            with self._idb(tx) as db:
                query = self._apply_filter(db, db.query(self.model).populate_existing(), filter, span)
                for order_by in order_bys:
                    relation = self.order_by_relations.get(order_by.field)
                    if relation is None:
                        continue
                    query = query.outerjoin(getattr(self.model, self.related_entities[relation]))
                    if relation not in relations:
                        relations.append(relation)
                query = query.options(*self._relation_options(relations))
                paginator = new_paginator_multi_order_by(
                    query, page.offset, page.limit, order_bys, self.order_by_fields, tiebreaker=self.model.id
                )
                items = paginator.all()
            logger.debug(f"{self.dao_name}.GetAll returned {len(items)} of {paginator.total}")
            return items, paginator.total

    def get_count(self, filter: Optional[BaseModel] = None, tx: Optional[Tx] = None) -> int:
        with self._span("GetCount") as span:
            with self._idb(tx) as db:
                return self._apply_filter(db, db.query(self.model), filter, span).count()

    def update(self, item: BaseModel, tx: Optional[Tx] = None) -> ModelT:
        with self._span("Update"):
            return self.update_multiple([item], tx=tx)[0]

    def update_multiple(self, items: Sequence[BaseModel], tx: Optional[Tx] = None) -> List[ModelT]:
        """Apply each item's non-None fields and return the rows in input order."""
        self._check_batch_size(items)
        with self._span("UpdateMultiple") as span:
            set_attribute(span, "batch_size", len(items))
            if not items:
                return []
            trace_items = len(items)
            if trace_items > MAX_BATCH_ITEMS_TO_TRACE:
                trace_items = MAX_BATCH_ITEMS_TO_TRACE
                set_attribute(span, "items_truncated", "true")
            try:
                with self._idb(tx) as db:
                    for idx, item in enumerate(items):
                        values = self._update_values(item)
                        if idx < trace_items:
                            for key, value in values.items():
                                set_attribute(span, f"items.{idx}.{key}", value)
                        if not values:
                            continue
                        values["updated"] = now_utc()
                        self._live_rows(db).filter(self.model.id == item.id).update(
                            values, synchronize_session=False
                        )
                    results = self._fetch_ordered(db, [item.id for item in items])
            except SQLAlchemyError as e:
                logger.error(f"{self.dao_name}: failed to update {len(items)} {self.entity_label} rows: {e}")
                raise
            return results

    def delete(self, id: Any, tx: Optional[Tx] = None) -> None:
        """Delete by id. Missing or already-deleted rows are not an error."""
        with self._span("Delete") as span:
            set_attribute(span, "id", id)
            with self._idb(tx) as db:
                query = db.query(self.model).filter(self.model.id == id)
                if issubclass(self.model, SoftDeleteMixin):
                    affected = query.filter(self.model.deleted.is_(None)).update(
                        {"deleted": now_utc()}, synchronize_session=False
                    )
                else:
                    affected = query.delete(synchronize_session=False)
            if affected:
                logger.info(f"Deleted {self.entity_label} {id}")
            else:
                logger.debug(f"{self.entity_label} {id} already absent, nothing to delete")
