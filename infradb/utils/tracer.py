"""OpenTelemetry helpers for annotating DAO calls.

DAO spans are only ever children: when the caller has no active span nothing
is recorded, so the data layer never starts traces on its own.
"""
from __future__ import annotations

import json
import uuid
from contextlib import contextmanager
from datetime import datetime
from typing import Any, Iterator, Optional

from opentelemetry import trace
from opentelemetry.trace import Span

_tracer = trace.get_tracer("infradb")


@contextmanager
def child_span(name: str) -> Iterator[Optional[Span]]:
    """Start a child of the current span, or yield None when there is no parent."""
    parent = trace.get_current_span()
    if not name or not parent.get_span_context().is_valid:
        yield None
        return
    with _tracer.start_as_current_span(name) as span:
        yield span


def _to_attribute(value: Any):
    if isinstance(value, (str, bool, int, float)):
        return value
    if isinstance(value, uuid.UUID):
        return str(value)
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, (list, tuple, set)):
        items = [_to_attribute(v) for v in value]
        if all(isinstance(v, str) for v in items):
            return items
        return [str(v) for v in items]
    if isinstance(value, dict):
        return json.dumps(value, default=str, sort_keys=True)
    return str(value)


def set_attribute(span: Optional[Span], key: str, value: Any) -> Optional[Span]:
    """Set ``key`` on ``span`` if there is one; None values are skipped."""
    if span is None:
        return None
    if value is None:
        return span
    span.set_attribute(key, _to_attribute(value))
    return span


def load_from_context() -> tuple[Span, bool]:
    """Return the current span and whether it is a real (recording) one."""
    span = trace.get_current_span()
    return span, span.get_span_context().is_valid
