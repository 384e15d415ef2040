from __future__ import annotations

import logging

import pytest

from reporter_proxy import (
    InMemoryReporterSink,
    LoggingReporterSink,
    NoOpReporterSink,
    ReporterSink,
)


@pytest.mark.parametrize("sink_cls", [NoOpReporterSink, InMemoryReporterSink, LoggingReporterSink])
def test_builtin_sinks_satisfy_protocol(sink_cls: type) -> None:
    assert isinstance(sink_cls(), ReporterSink)


def test_noop_sink_accepts_everything() -> None:
    sink = NoOpReporterSink()
    assert sink.add_custom_event("commits", {"a": 1}) is None
    assert sink.add_timing("load", 1.5, {}) is None
    assert sink.increment_counter("push") is None
    assert sink.set_identity("annthurium") is None


def test_in_memory_sink_records_calls_in_order() -> None:
    sink = InMemoryReporterSink()
    sink.add_custom_event("commits", {"a": 1})
    sink.add_custom_event("pushes", {"b": 2})
    sink.add_timing("load", 42, {"v": "1"})
    sink.increment_counter("push")
    sink.increment_counter("pull")
    sink.increment_counter("push")
    sink.set_identity("annthurium")

    assert [e.event_type for e in sink.events] == ["commits", "pushes"]
    assert sink.timings[0].duration_ms == 42
    assert sink.counters == ["push", "pull", "push"]
    assert sink.counter_totals() == {"push": 2, "pull": 1}
    assert sink.identities == ["annthurium"]


def test_in_memory_sink_copies_payloads() -> None:
    sink = InMemoryReporterSink()
    payload = {"a": 1}
    sink.add_custom_event("commits", payload)
    payload["a"] = 2
    assert sink.events[0].event == {"a": 1}


def test_logging_sink_tags_records_with_identity(caplog: pytest.LogCaptureFixture) -> None:
    sink = LoggingReporterSink("test.signals")
    with caplog.at_level(logging.INFO, logger="test.signals"):
        sink.add_custom_event("commits", {"a": 1})
        sink.set_identity("annthurium")
        sink.add_timing("load", 42, {"v": "1"})
        sink.increment_counter("push")

    kinds = [r.signal_kind for r in caplog.records]
    assert kinds == ["event", "identity", "timing", "counter"]
    assert caplog.records[0].user_id is None
    assert caplog.records[0].signal_payload == {"a": 1}
    assert caplog.records[2].user_id == "annthurium"
    assert "timing load 42.000ms" in caplog.text
