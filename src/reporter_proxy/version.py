"""Package-version lookup for signal augmentation."""

from __future__ import annotations

import logging
from importlib import metadata

logger = logging.getLogger(__name__)

DEFAULT_FALLBACK_VERSION = "0.0.0"


def resolve_package_version(
    distribution: str,
    *,
    override: str | None = None,
    fallback: str = DEFAULT_FALLBACK_VERSION,
) -> str:
    """Return the version string to embed in every event and timing.

    Prefers an explicit `override`, then the installed distribution metadata.
    Falls back to `fallback` when the distribution is not installed.
    """
    if override:
        return override
    try:
        return metadata.version(distribution)
    except metadata.PackageNotFoundError:
        logger.warning("Distribution %r not installed; using version %s", distribution, fallback)
        return fallback
