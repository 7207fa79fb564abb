"""Custom SQLAlchemy types used by the persistence layer."""
from __future__ import annotations

import json
from typing import List, Optional

from sqlalchemy import Text
from sqlalchemy.dialects import postgresql
from sqlalchemy.types import JSON, TypeDecorator


class JSONDocument(TypeDecorator):
    """JSONB on PostgreSQL, plain JSON elsewhere (SQLite during unit tests)."""

    cache_ok = True
    impl = JSON

    def load_dialect_impl(self, dialect):  # type: ignore[override]
        if dialect.name == "postgresql":
            return dialect.type_descriptor(postgresql.JSONB(none_as_null=True))
        return dialect.type_descriptor(JSON(none_as_null=True))


class StringArray(TypeDecorator[List[str]]):
    """Store a list of strings as ``text[]`` on PostgreSQL.

    Other dialects get a JSON array so that array-overlap filters can be
    emulated with ``json_each``.
    """

    cache_ok = True
    impl = JSON

    def load_dialect_impl(self, dialect):  # type: ignore[override]
        if dialect.name == "postgresql":
            return dialect.type_descriptor(postgresql.ARRAY(Text))
        return dialect.type_descriptor(JSON(none_as_null=True))

    def process_bind_param(self, value, dialect):  # type: ignore[override]
        if value is None:
            return None
        return [str(v) for v in value]

    def process_result_value(self, value, dialect) -> Optional[List[str]]:  # type: ignore[override]
        if value is None:
            return None
        if isinstance(value, str):
            # Some drivers hand back the serialized form
            try:
                parsed = json.loads(value)
            except json.JSONDecodeError:
                stripped = value.strip("{}")
                return [part for part in stripped.split(",") if part] if stripped else []
            return [str(v) for v in parsed]
        return [str(v) for v in value]
