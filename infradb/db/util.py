"""Shared constants and small helpers for the data access layer."""
from __future__ import annotations

import re
from collections import Counter
from datetime import datetime, UTC
from typing import Iterable, Optional

# Upper bound for CreateMultiple / UpdateMultiple inputs
MAX_BATCH_ITEMS = 100
# Only the first N items of a batch get per-item span attributes
MAX_BATCH_ITEMS_TO_TRACE = 20

_FNV64_OFFSET = 0xCBF29CE484222325
_FNV64_PRIME = 0x100000001B3
_UINT64_MASK = 0xFFFFFFFFFFFFFFFF
_INT63_MASK = 0x7FFFFFFFFFFFFFFF

_TSQUERY_SPLIT = re.compile(r"[^0-9A-Za-z]+")


def now_utc() -> datetime:
    """Return an aware UTC datetime for created/updated/deleted timestamps."""
    return datetime.now(UTC)


def get_string_to_tsquery(text: str) -> str:
    """Turn free text into a prefix-matching tsquery expression.

    ``"web server-01"`` becomes ``"web:* | server:* | 01:*"``. Characters that
    have meaning to ``to_tsquery`` never reach it.
    """
    tokens = [t for t in _TSQUERY_SPLIT.split(text or "") if t]
    return " | ".join(f"{t}:*" for t in tokens)


def get_string_to_uint64_hash(value: str) -> int:
    """Stable 64-bit FNV-1a hash of a string."""
    h = _FNV64_OFFSET
    for byte in value.encode("utf-8"):
        h ^= byte
        h = (h * _FNV64_PRIME) & _UINT64_MASK
    return h


def get_advisory_lock_id_from_string(value: str) -> int:
    # pg advisory locks take a signed bigint
    return get_string_to_uint64_hash(value) & _INT63_MASK


def is_str_in_list(value: str, values: Optional[Iterable[str]]) -> bool:
    return values is not None and value in values


def compare_string_lists_ignore_order(a: Optional[Iterable[str]], b: Optional[Iterable[str]]) -> bool:
    """Multiset equality; None compares equal to an empty list."""
    return Counter(a or ()) == Counter(b or ())
