"""Context-scoped access to the process reporter proxy.

The host constructs one `ReporterProxy` at startup and installs it with
`use_proxy(...)` (or `set_current_proxy`). Tasks created afterwards inherit it,
so call sites can use the module-level helpers without holding a reference.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from contextvars import ContextVar, Token
from typing import Any

from .proxy import ReporterProxy

_current_proxy: ContextVar[ReporterProxy | None] = ContextVar("reporter_proxy", default=None)


def get_current_proxy() -> ReporterProxy | None:
    return _current_proxy.get()


def set_current_proxy(proxy: ReporterProxy | None) -> Token[ReporterProxy | None]:
    return _current_proxy.set(proxy)


def reset_current_proxy(token: Token[ReporterProxy | None]) -> None:
    _current_proxy.reset(token)


@contextmanager
def use_proxy(proxy: ReporterProxy) -> Iterator[ReporterProxy]:
    """Install `proxy` as the current proxy for the duration of the block."""
    token = set_current_proxy(proxy)
    try:
        yield proxy
    finally:
        reset_current_proxy(token)


def _require_proxy() -> ReporterProxy:
    proxy = _current_proxy.get()
    if proxy is None:
        raise LookupError("No reporter proxy is installed in this context")
    return proxy


def add_event(event_type: str, event: Mapping[str, Any] | None = None) -> None:
    _require_proxy().add_event(event_type, event)


def add_timing(event_type: str, duration_ms: float) -> None:
    _require_proxy().add_timing(event_type, duration_ms)


def increment_counter(counter_name: str) -> None:
    _require_proxy().increment_counter(counter_name)


def set_identity(user_id: str) -> None:
    _require_proxy().set_identity(user_id)
