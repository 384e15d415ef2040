"""Reporter proxy.

Lets application code record telemetry before any backend exists:

- Signals (events, timings, counters) are queued until a sink is attached.
- Attaching drains the queues in order and switches to direct forwarding.
- A deadline falls back to a no-op sink when no backend ever arrives.
"""

from .context import (
    add_event,
    add_timing,
    get_current_proxy,
    increment_counter,
    reset_current_proxy,
    set_current_proxy,
    set_identity,
    use_proxy,
)
from .models import EventRecord, ProxyState, TimingRecord
from .proxy import FIVE_MINUTES_S, ReporterProxy
from .sinks import InMemoryReporterSink, LoggingReporterSink, NoOpReporterSink, ReporterSink
from .version import resolve_package_version

__all__ = [
    "FIVE_MINUTES_S",
    "EventRecord",
    "InMemoryReporterSink",
    "LoggingReporterSink",
    "NoOpReporterSink",
    "ProxyState",
    "ReporterProxy",
    "ReporterSink",
    "TimingRecord",
    "add_event",
    "add_timing",
    "get_current_proxy",
    "increment_counter",
    "reset_current_proxy",
    "resolve_package_version",
    "set_current_proxy",
    "set_identity",
    "use_proxy",
]
