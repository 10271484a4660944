"""Expose the SDK version."""

from __future__ import annotations

from importlib import metadata


def _resolve_version() -> str:
    """Return the installed package version or fall back to the project default."""

    try:
        return metadata.version("convertkit-api")
    except metadata.PackageNotFoundError:
        # Source checkouts run without an installed distribution.
        return "1.0.0"


__version__ = _resolve_version()
