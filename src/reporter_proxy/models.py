"""Queued signal records.

Records hold signals emitted before a sink is attached. Payloads are stored
already augmented with the package version, so draining forwards them as-is.
Fields are kept exactly as the caller passed them (no coercion).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, TypeAlias

CounterName: TypeAlias = str


class ProxyState(str, Enum):
    BUFFERING = "buffering"
    ATTACHED = "attached"


@dataclass(frozen=True)
class EventRecord:
    """A custom event waiting for a sink."""

    event_type: str
    event: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class TimingRecord:
    """A timing measurement waiting for a sink."""

    event_type: str
    duration_ms: float
    metadata: dict[str, Any] = field(default_factory=dict)
