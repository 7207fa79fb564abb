"""
Offset/limit pagination with validated ordering.

Callers pass the order-by columns an entity allows; anything else is rejected
with ``InvalidParamsError``. The primary key is always the final sort key so
pages stay stable when the requested column has ties.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, List, Mapping, Optional, Sequence

from pydantic import BaseModel, field_validator
from sqlalchemy.orm import Query

from infradb.db.errors import InvalidParamsError

logger = logging.getLogger(__name__)

ORDER_ASCENDING = "ASC"
ORDER_DESCENDING = "DESC"

DEFAULT_LIMIT = 20
# Pass as limit to fetch every matching row
TOTAL_LIMIT = -1


class OrderBy(BaseModel):
    field: str
    order: str = ORDER_ASCENDING

    @field_validator("order")
    @classmethod
    def _normalize_order(cls, value: str) -> str:
        normalized = (value or "").upper()
        if normalized not in (ORDER_ASCENDING, ORDER_DESCENDING):
            raise ValueError(f"order must be {ORDER_ASCENDING} or {ORDER_DESCENDING}, got {value!r}")
        return normalized


class PageInput(BaseModel):
    offset: Optional[int] = None
    limit: Optional[int] = None
    order_by: Optional[OrderBy] = None


def new_default_order_by(field: str) -> OrderBy:
    return OrderBy(field=field, order=ORDER_ASCENDING)


@dataclass
class Paginator:
    query: Query
    offset: int
    limit: Optional[int]
    total: int

    def all(self) -> List[Any]:
        query = self.query.offset(self.offset)
        if self.limit is not None:
            query = query.limit(self.limit)
        return query.all()


def _normalize_window(offset: Optional[int], limit: Optional[int]) -> tuple[int, Optional[int]]:
    if offset is None:
        offset = 0
    elif offset < 0:
        raise InvalidParamsError(f"offset must be non-negative, got {offset}")

    if limit is None:
        limit = DEFAULT_LIMIT
    elif limit == TOTAL_LIMIT:
        return offset, None
    elif limit < 0:
        raise InvalidParamsError(f"limit must be non-negative or {TOTAL_LIMIT}, got {limit}")
    return offset, limit


def new_paginator_multi_order_by(
    query: Query,
    offset: Optional[int],
    limit: Optional[int],
    order_bys: Sequence[OrderBy],
    order_by_columns: Mapping[str, Any],
    tiebreaker: Any = None,
) -> Paginator:
    """Validate ordering, count the matches and return the ordered query."""
    offset, limit = _normalize_window(offset, limit)

    clauses = []
    for order_by in order_bys:
        column = order_by_columns.get(order_by.field)
        if column is None:
            raise InvalidParamsError(
                f"invalid order by field {order_by.field!r}, allowed: {sorted(order_by_columns)}"
            )
        clauses.append(column.desc() if order_by.order == ORDER_DESCENDING else column.asc())
    if tiebreaker is not None:
        clauses.append(tiebreaker.asc())

    total = query.order_by(None).count()
    logger.debug(f"Paginating {total} rows offset={offset} limit={limit}")
    return Paginator(query=query.order_by(*clauses), offset=offset, limit=limit, total=total)


def new_paginator(
    query: Query,
    offset: Optional[int],
    limit: Optional[int],
    order_by: Optional[OrderBy],
    order_by_columns: Mapping[str, Any],
    tiebreaker: Any = None,
) -> Paginator:
    order_bys = [order_by] if order_by is not None else []
    return new_paginator_multi_order_by(query, offset, limit, order_bys, order_by_columns, tiebreaker)
