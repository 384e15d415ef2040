"""Demo entrypoint wiring a reporter proxy to a sink.

This module contains a small end-to-end "smoke test" that:

- Loads configuration from environment.
- Builds the reporter proxy and installs it for the current context.
- Emits signals while no sink exists yet (they are queued).
- Attaches a logging sink after a short delay and emits a few more.

It is **not** production wiring; hosts decide when and which sink to attach.
"""

from __future__ import annotations

import asyncio
import logging
import os
import time

from config import load_config
from reporter_proxy import (
    LoggingReporterSink,
    ReporterProxy,
    add_event,
    add_timing,
    increment_counter,
    set_identity,
    use_proxy,
)


async def _startup_work() -> None:
    """Simulate application startup emitting telemetry before any backend exists."""
    started = time.monotonic()
    increment_counter("app_start")
    await asyncio.sleep(0.05)
    add_event("commits", {"co_author_count": 2})
    add_timing("load", (time.monotonic() - started) * 1000)


async def run_demo() -> None:
    """Queue a few signals, then attach a logging sink and keep emitting."""
    cfg = load_config()
    logging.basicConfig(level=cfg.reporter.log_level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    proxy = ReporterProxy.from_config(cfg.reporter)
    try:
        with use_proxy(proxy):
            set_identity(os.getenv("DEMO_USER_ID", "demo-user"))
            await asyncio.create_task(_startup_work(), name="startup-work")

            print(f"[proxy] queued {len(proxy.events)} events, {len(proxy.timings)} timings, {len(proxy.counters)} counters")

            # Stand-in for consent/network setup finishing.
            await asyncio.sleep(float(os.getenv("DEMO_ATTACH_DELAY_S", "0.1")))
            proxy.set_reporter(LoggingReporterSink())

            add_event("push", {"branch": "main"})
            increment_counter("push")
    finally:
        proxy.close()


def main() -> None:
    """CLI entrypoint for running the demo with `python src/main.py`."""
    asyncio.run(run_demo())

if __name__ == "__main__":
    main()
