"""Reporter sinks (telemetry backends the proxy forwards to)."""

from __future__ import annotations

import logging
import threading
from collections.abc import Mapping, Sequence
from typing import Any, Protocol, runtime_checkable

from .models import EventRecord, TimingRecord


@runtime_checkable
class ReporterSink(Protocol):
    """The capability set a concrete telemetry backend exposes.

    The proxy never inspects return values; a sink that raises propagates the
    error to whoever triggered the forward.
    """

    def add_custom_event(self, event_type: str, event: Mapping[str, Any]) -> None:
        """Record a discrete event."""

    def add_timing(self, event_type: str, duration_ms: float, metadata: Mapping[str, Any]) -> None:
        """Record a timing measurement."""

    def increment_counter(self, counter_name: str) -> None:
        """Bump a monotonic counter."""

    def set_identity(self, user_id: str) -> None:
        """Tag subsequent signals with a user identifier."""


class NoOpReporterSink:
    """Sink that records nothing. Installed when no real sink shows up in time."""

    def add_custom_event(self, event_type: str, event: Mapping[str, Any]) -> None:
        _ = event_type, event

    def add_timing(self, event_type: str, duration_ms: float, metadata: Mapping[str, Any]) -> None:
        _ = event_type, duration_ms, metadata

    def increment_counter(self, counter_name: str) -> None:
        _ = counter_name

    def set_identity(self, user_id: str) -> None:
        _ = user_id


class InMemoryReporterSink:
    """In-memory sink for tests and local debugging."""

    def __init__(self) -> None:
        """Create an empty in-memory sink."""
        self._lock = threading.Lock()
        self._events: list[EventRecord] = []
        self._timings: list[TimingRecord] = []
        self._counters: list[str] = []
        self._identities: list[str] = []

    def add_custom_event(self, event_type: str, event: Mapping[str, Any]) -> None:
        """Append an event (thread-safe)."""
        with self._lock:
            self._events.append(EventRecord(event_type=event_type, event=dict(event)))

    def add_timing(self, event_type: str, duration_ms: float, metadata: Mapping[str, Any]) -> None:
        """Append a timing (thread-safe)."""
        with self._lock:
            self._timings.append(
                TimingRecord(event_type=event_type, duration_ms=duration_ms, metadata=dict(metadata))
            )

    def increment_counter(self, counter_name: str) -> None:
        """Append a counter increment (thread-safe)."""
        with self._lock:
            self._counters.append(counter_name)

    def set_identity(self, user_id: str) -> None:
        """Append an identity update (thread-safe)."""
        with self._lock:
            self._identities.append(user_id)

    @property
    def events(self) -> Sequence[EventRecord]:
        """Point-in-time copy of recorded events."""
        with self._lock:
            return list(self._events)

    @property
    def timings(self) -> Sequence[TimingRecord]:
        """Point-in-time copy of recorded timings."""
        with self._lock:
            return list(self._timings)

    @property
    def counters(self) -> Sequence[str]:
        """Point-in-time copy of counter increments, in call order."""
        with self._lock:
            return list(self._counters)

    @property
    def identities(self) -> Sequence[str]:
        """Point-in-time copy of every identity pushed to this sink."""
        with self._lock:
            return list(self._identities)

    def counter_totals(self) -> dict[str, int]:
        """Return how many times each counter was incremented."""
        totals: dict[str, int] = {}
        for name in self.counters:
            totals[name] = totals.get(name, 0) + 1
        return totals


class LoggingReporterSink:
    """Sink that emits every signal through Python logging."""

    def __init__(self, logger_name: str = "reporter_proxy.signals", *, level: int = logging.INFO) -> None:
        self.logger = logging.getLogger(logger_name)
        self.level = level
        self._identity: str | None = None

    def add_custom_event(self, event_type: str, event: Mapping[str, Any]) -> None:
        self.logger.log(
            self.level,
            "event %s",
            event_type,
            extra={"signal_kind": "event", "signal_payload": dict(event), "user_id": self._identity},
        )

    def add_timing(self, event_type: str, duration_ms: float, metadata: Mapping[str, Any]) -> None:
        self.logger.log(
            self.level,
            "timing %s %.3fms",
            event_type,
            duration_ms,
            extra={"signal_kind": "timing", "signal_payload": dict(metadata), "user_id": self._identity},
        )

    def increment_counter(self, counter_name: str) -> None:
        self.logger.log(
            self.level,
            "counter %s",
            counter_name,
            extra={"signal_kind": "counter", "user_id": self._identity},
        )

    def set_identity(self, user_id: str) -> None:
        self._identity = user_id
        self.logger.log(self.level, "identity %s", user_id, extra={"signal_kind": "identity", "user_id": user_id})
