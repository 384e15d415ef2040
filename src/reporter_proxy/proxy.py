"""Buffering proxy in front of a lazily attached reporter sink.

Callers emit events, timings and counters from process start. Until the host
attaches a sink (for example after user consent), signals are queued. Attaching
drains the queues in FIFO order and makes the proxy a pass-through. If nothing
is attached before the deadline, the proxy attaches a no-op sink so queued
signals stop accumulating.

The proxy is not thread-safe; all calls are expected on the event loop thread.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from .models import CounterName, EventRecord, ProxyState, TimingRecord
from .sinks import NoOpReporterSink, ReporterSink
from .version import resolve_package_version

if TYPE_CHECKING:
    from config import ReporterConfig

logger = logging.getLogger(__name__)

FIVE_MINUTES_S = 5 * 60.0


class ReporterProxy:
    """Queues signals until a sink is attached, then forwards them.

    Members:
    - Queues: `events`, `timings`, `counters` (empty forever once attached)
    - Attached sink: `reporter` (`None` while buffering)
    - Identity tag: `identity` (pushed to the sink once, at attach time)
    - Deadline: a one-shot `asyncio.TimerHandle` that installs `NoOpReporterSink`
    """

    def __init__(
        self,
        *,
        package_version: str,
        version_key: str = "package_version",
        timeout_s: float = FIVE_MINUTES_S,
        loop: asyncio.AbstractEventLoop | None = None,
    ) -> None:
        """Create a buffering proxy.

        The deadline is armed immediately when `loop` is given or when called
        from inside a running event loop. Otherwise call `arm_deadline()` once a
        loop is running.
        """
        if timeout_s <= 0:
            raise ValueError(f"timeout_s must be > 0. Got: {timeout_s}")

        self._package_version = package_version
        self._version_key = version_key
        self._timeout_s = timeout_s

        self._state = ProxyState.BUFFERING
        self._reporter: ReporterSink | None = None
        self._identity: str | None = None

        self.events: list[EventRecord] = []
        self.timings: list[TimingRecord] = []
        self.counters: list[CounterName] = []

        self._deadline: asyncio.TimerHandle | None = None
        self._deadline_armed = False

        if loop is None:
            try:
                loop = asyncio.get_running_loop()
            except RuntimeError:
                logger.debug("No running event loop; reporter deadline not armed yet")
        if loop is not None:
            self.arm_deadline(loop)

    @classmethod
    def from_config(
        cls, config: ReporterConfig, *, loop: asyncio.AbstractEventLoop | None = None
    ) -> ReporterProxy:
        """Build a proxy from `ReporterConfig`, resolving the package version once."""
        version = resolve_package_version(config.package_name, override=config.package_version)
        return cls(
            package_version=version,
            version_key=config.version_key,
            timeout_s=config.timeout_s,
            loop=loop,
        )

    @property
    def state(self) -> ProxyState:
        return self._state

    @property
    def is_attached(self) -> bool:
        return self._state is ProxyState.ATTACHED

    @property
    def reporter(self) -> ReporterSink | None:
        """The attached sink, or `None` while buffering."""
        return self._reporter

    @property
    def identity(self) -> str | None:
        return self._identity

    @property
    def package_version(self) -> str:
        return self._package_version

    @property
    def version_key(self) -> str:
        return self._version_key

    @property
    def timeout_s(self) -> float:
        return self._timeout_s

    @property
    def deadline_pending(self) -> bool:
        """True while the no-op fallback is scheduled and has not fired."""
        return self._deadline is not None

    def _augment(self, fields: Mapping[str, Any] | None = None) -> dict[str, Any]:
        """Merge the version field into a copy of `fields` (version wins)."""
        augmented = dict(fields or {})
        augmented[self._version_key] = self._package_version
        return augmented

    def add_event(self, event_type: str, event: Mapping[str, Any] | None = None) -> None:
        """Record a custom event, or queue it until a sink is attached."""
        augmented = self._augment(event)
        if self._reporter is None:
            self.events.append(EventRecord(event_type=event_type, event=augmented))
            return
        self._reporter.add_custom_event(event_type, augmented)

    def add_timing(self, event_type: str, duration_ms: float) -> None:
        """Record a timing measurement, or queue it until a sink is attached."""
        metadata = self._augment()
        if self._reporter is None:
            self.timings.append(TimingRecord(event_type=event_type, duration_ms=duration_ms, metadata=metadata))
            return
        self._reporter.add_timing(event_type, duration_ms, metadata)

    def increment_counter(self, counter_name: str) -> None:
        """Increment a counter, or queue the increment until a sink is attached."""
        if self._reporter is None:
            self.counters.append(counter_name)
            return
        self._reporter.increment_counter(counter_name)

    def set_identity(self, user_id: str) -> None:
        """Remember the user identifier.

        Only an identity known at attach time reaches the sink. Later changes are
        stored but not forwarded; call `reporter.set_identity` directly for that.
        """
        self._identity = user_id

    def set_reporter(self, reporter: ReporterSink) -> None:
        """Attach a sink and drain queued signals into it.

        Only the first call has any effect. Sink errors propagate to the caller;
        signals already taken off the queues are not re-queued.
        """
        if self._state is ProxyState.ATTACHED:
            logger.debug("Reporter already attached; ignoring %s", type(reporter).__name__)
            return

        self._cancel_deadline()

        events, self.events = self.events, []
        timings, self.timings = self.timings, []
        counters, self.counters = self.counters, []

        self._reporter = reporter
        self._state = ProxyState.ATTACHED
        logger.info(
            "Attached %s; draining %d events, %d timings, %d counters",
            type(reporter).__name__,
            len(events),
            len(timings),
            len(counters),
        )

        for record in events:
            reporter.add_custom_event(record.event_type, record.event)
        for timing in timings:
            reporter.add_timing(timing.event_type, timing.duration_ms, timing.metadata)
        for counter_name in counters:
            reporter.increment_counter(counter_name)

        if self._identity is not None:
            reporter.set_identity(self._identity)

    def arm_deadline(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        """Schedule the no-op fallback `timeout_s` seconds from now.

        Arming is one-shot: later calls, and calls after attachment, do nothing.
        Raises `RuntimeError` when no loop is given and none is running.
        """
        if self._deadline_armed or self._state is ProxyState.ATTACHED:
            return
        loop = loop or asyncio.get_running_loop()
        self._deadline = loop.call_later(self._timeout_s, self._on_deadline)
        self._deadline_armed = True
        logger.debug("Reporter deadline armed for %.1fs", self._timeout_s)

    def _on_deadline(self) -> None:
        """Fall back to a no-op sink if nothing was attached in time."""
        self._deadline = None
        if self._state is ProxyState.ATTACHED:
            return
        logger.warning(
            "No reporter attached after %.1fs; discarding %d events, %d timings, %d counters",
            self._timeout_s,
            len(self.events),
            len(self.timings),
            len(self.counters),
        )
        self.set_reporter(NoOpReporterSink())

    def _cancel_deadline(self) -> None:
        if self._deadline is not None:
            self._deadline.cancel()
            self._deadline = None

    def close(self) -> None:
        """Cancel a pending deadline without attaching anything.

        The proxy keeps buffering; `arm_deadline()` may schedule a new one.
        Safe to call multiple times.
        """
        self._cancel_deadline()
        self._deadline_armed = False
