from __future__ import annotations

from collections.abc import Iterator
from typing import TYPE_CHECKING

import pytest

if TYPE_CHECKING:
    from reporter_proxy import ReporterProxy

VERSION = "1.2.3"


@pytest.fixture(autouse=True)
def _isolated_proxy_context():
    """Start every test without an installed proxy so state never leaks between tests."""
    from reporter_proxy import reset_current_proxy, set_current_proxy

    token = set_current_proxy(None)
    yield
    reset_current_proxy(token)


@pytest.fixture
def proxy() -> Iterator[ReporterProxy]:
    """A fresh buffering proxy with no deadline armed (no running loop)."""
    from reporter_proxy import ReporterProxy

    p = ReporterProxy(package_version=VERSION, version_key="gitHubPackageVersion")
    yield p
    p.close()
