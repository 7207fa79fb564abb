import uuid
from datetime import datetime, timezone

from infradb.utils.tracer import child_span, load_from_context, set_attribute


def test_no_span_without_parent(spans):
    with child_span("TenantDAO.GetAll") as span:
        assert span is None
        assert set_attribute(span, "key", "value") is None
    assert spans.get_finished_spans() == ()


def test_child_span_under_parent(spans, caller_tracer):
    ident = uuid.uuid4()
    with caller_tracer.start_as_current_span("caller"):
        current, valid = load_from_context()
        assert valid
        with child_span("InstanceDAO.GetByID") as span:
            assert span is not None
            set_attribute(span, "id", ident)
            set_attribute(span, "ids", [ident, "x"])
            set_attribute(span, "when", datetime(2025, 1, 2, tzinfo=timezone.utc))
            set_attribute(span, "labels", {"b": 1, "a": "x"})
            set_attribute(span, "skipped", None)

    finished = {s.name: s for s in spans.get_finished_spans()}
    child = finished["InstanceDAO.GetByID"]
    assert child.parent.span_id == finished["caller"].context.span_id
    assert child.attributes["id"] == str(ident)
    assert list(child.attributes["ids"]) == [str(ident), "x"]
    assert child.attributes["when"] == "2025-01-02T00:00:00+00:00"
    assert child.attributes["labels"] == '{"a": "x", "b": 1}'
    assert "skipped" not in child.attributes


def test_empty_name_yields_none(caller_tracer):
    with caller_tracer.start_as_current_span("caller"):
        with child_span("") as span:
            assert span is None
