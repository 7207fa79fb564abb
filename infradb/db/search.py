"""
Free-text search conditions.

PostgreSQL gets ``to_tsvector(...) @@ to_tsquery(...)`` OR'ed with ILIKE
substring matches; other dialects (SQLite in unit tests) only get the ILIKE
branch since they have no text-search functions.
"""
from __future__ import annotations

from typing import Sequence

from sqlalchemy import Text, cast, func, literal, or_

from infradb.db.util import get_string_to_tsquery


def _document(columns: Sequence):
    """``coalesce(a, ' ') || ' ' || coalesce(b, ' ') ...`` as text."""
    parts = [func.coalesce(cast(col, Text), literal(" ")) for col in columns]
    doc = parts[0]
    for part in parts[1:]:
        doc = doc.op("||")(literal(" ")).op("||")(part)
    return doc


def build_search_condition(dialect_name: str, query_text: str, tsvector_columns: Sequence, ilike_columns: Sequence):
    pattern = f"%{query_text}%"
    clauses = [col.ilike(pattern) for col in ilike_columns]
    if dialect_name == "postgresql" and tsvector_columns:
        tokens = get_string_to_tsquery(query_text)
        if tokens:
            clauses.insert(
                0,
                func.to_tsvector("english", _document(tsvector_columns)).op("@@")(
                    func.to_tsquery("english", tokens)
                ),
            )
    return or_(*clauses)
