"""Tests for core utilities: JSON, hashing, IDs, validation, tracing and metrics."""

import pytest
import structlog
from hypothesis import given, strategies as st
from prometheus_client import CollectorRegistry
from ulid import ULID

from manifest_compiler.core import (
    Algorithm,
    JSONParseError,
    LogContext,
    ValidationError,
    extract_json,
    hash_string,
    new_generation_id,
    safe_json_dumps,
    validate_json_depth,
    validate_json_size,
)
from manifest_compiler.core.hash import hash_json
from manifest_compiler.core.id import new_batch_id
from manifest_compiler.core import tracing
from manifest_compiler.monitoring import MetricsCollector


# ============================================================================
# JSON Tests
# ============================================================================

@pytest.mark.unit
def test_extract_json_object():
    assert extract_json('  {"a": 1}  ') == {"a": 1}
    assert extract_json(b'\xef\xbb\xbf{"a": [true, null]}') == {"a": [True, None]}


@pytest.mark.unit
@pytest.mark.parametrize("text", ["", "   ", "{bad", "[1]", b"\xff\xfe"])
def test_extract_json_errors(text):
    with pytest.raises(JSONParseError):
        extract_json(text)


@pytest.mark.unit
def test_extract_json_repair():
    assert extract_json("{'a': 1,}", repair=True) == {"a": 1}


@pytest.mark.unit
def test_safe_json_dumps_is_compact():
    assert safe_json_dumps({"a": [1, "x"], "b": None}) == '{"a":[1,"x"],"b":null}'
    assert safe_json_dumps("héllo") == '"héllo"'


@pytest.mark.unit
@given(st.dictionaries(st.text(), st.integers(min_value=-(2**53), max_value=2**53) | st.text() | st.booleans()))
def test_safe_json_dumps_round_trip(data):
    assert extract_json(safe_json_dumps(data)) == data


# ============================================================================
# Validation Tests
# ============================================================================

@pytest.mark.unit
def test_validate_json_size_counts_bytes():
    validate_json_size("abc", 3)
    with pytest.raises(ValidationError):
        validate_json_size("é" * 2, 3)


@pytest.mark.unit
def test_validate_json_depth():
    validate_json_depth({"a": {"b": [1]}}, max_depth=3)
    with pytest.raises(ValidationError, match=r"at \$\.a\.b\.c"):
        validate_json_depth({"a": {"b": {"c": {}}}}, max_depth=2)


@pytest.mark.unit
def test_validate_json_depth_deep_list_does_not_recurse():
    nested: list = []
    for _ in range(5000):
        nested = [nested]

    with pytest.raises(ValidationError, match="exceeds maximum 32"):
        validate_json_depth(nested)


# ============================================================================
# Hash and ID Tests
# ============================================================================

@pytest.mark.unit
def test_hash_string_algorithms():
    assert len(hash_string("test")) == 16
    assert len(hash_string("test", Algorithm.SHA256)) == 64
    assert hash_string("test", Algorithm.SHA256, truncate=8) == hash_string("test", Algorithm.SHA256)[:8]


@pytest.mark.unit
def test_hash_json_ignores_key_order():
    assert hash_json({"a": 1, "b": {"y": 2, "x": [3]}}) == hash_json({"b": {"x": [3], "y": 2}, "a": 1})
    assert hash_json({"a": [1, 2]}) != hash_json({"a": [2, 1]})


@pytest.mark.unit
def test_generation_ids():
    generation_id = new_generation_id()

    assert generation_id.startswith("gen_")
    ulid_part = generation_id.removeprefix("gen_")
    assert str(ULID.from_str(ulid_part)) == ulid_part
    assert new_batch_id().startswith("batch_")


@pytest.mark.unit
def test_generation_ids_unique():
    ids = [new_generation_id() for _ in range(5)]

    assert len(set(ids)) == 5


# ============================================================================
# Logging and Tracing Tests
# ============================================================================

@pytest.mark.unit
def test_log_context_binds_and_unbinds():
    with LogContext(component_id="btn-1"):
        assert structlog.contextvars.get_contextvars()["component_id"] == "btn-1"

    assert "component_id" not in structlog.contextvars.get_contextvars()


@pytest.mark.unit
def test_trace_operation_without_tracer(monkeypatch):
    monkeypatch.setattr(tracing, "_tracer", None)

    with tracing.trace_operation("noop") as span:
        assert span is None


@pytest.mark.unit
def test_trace_operation_nests_spans(monkeypatch):
    submitted = []
    tracer = tracing.Tracer("test")
    monkeypatch.setattr(tracer, "submit", submitted.append)
    monkeypatch.setattr(tracing, "_tracer", tracer)

    with tracing.trace_operation("outer", component_id="a") as outer:
        with tracing.trace_operation("inner") as inner:
            assert tracing.get_trace_id() == outer.trace_id

    assert [s.name for s in submitted] == ["inner", "outer"]
    assert inner.parent_id == outer.span_id
    assert outer.tags == {"component_id": "a"}
    assert tracing.get_trace_id() == ""


@pytest.mark.unit
def test_trace_operation_records_error(monkeypatch):
    submitted = []
    tracer = tracing.Tracer("test")
    monkeypatch.setattr(tracer, "submit", submitted.append)
    monkeypatch.setattr(tracing, "_tracer", tracer)

    with pytest.raises(RuntimeError):
        with tracing.trace_operation("failing"):
            raise RuntimeError("boom")

    assert str(submitted[0].error) == "boom"


# ============================================================================
# Metrics Tests
# ============================================================================

@pytest.mark.unit
def test_metrics_collector_records():
    collector = MetricsCollector(CollectorRegistry())

    collector.record_component("success", 0.01)
    collector.record_component("error", 0.02)
    collector.record_flow_handler("success")
    collector.record_diagnostic("child_not_found")
    collector.record_format_failure()

    registry = collector.registry
    assert registry.get_sample_value("codegen_components_total", {"status": "success"}) == 1
    assert registry.get_sample_value("codegen_components_total", {"status": "error"}) == 1
    assert registry.get_sample_value("codegen_flow_handlers_total", {"status": "success"}) == 1
    assert registry.get_sample_value("codegen_diagnostics_total", {"code": "child_not_found"}) == 1
    assert registry.get_sample_value("codegen_format_failures_total") == 1
    assert b"codegen_component_duration_seconds" in collector.get_metrics()

