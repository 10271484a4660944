"""
ConvertKit API - Argument Validation

Local checks run by resource methods before a request is built. Every failure raises
``InvalidArgumentError`` and no request is sent.
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from datetime import date, datetime
from typing import Any
from urllib.parse import urlparse

from .exceptions import InvalidArgumentError

# local-part@domain.tld; the API performs the full check
EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def validate_email(email: Any, argument: str = "email_address") -> str:
    """Return ``email`` stripped, or raise if it is not an email address."""
    if not isinstance(email, str) or not EMAIL_PATTERN.match(email.strip()):
        raise InvalidArgumentError(f"Invalid email address for {argument}", argument=argument)
    return email.strip()


def validate_url(url: Any, argument: str = "url") -> str:
    """Require an absolute http(s) URL."""
    if not isinstance(url, str):
        raise InvalidArgumentError(f"{argument} must be a string", argument=argument)
    parsed = urlparse(url)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise InvalidArgumentError(f"Invalid URL for {argument}: {url}", argument=argument)
    return url


def validate_choice(value: Any, choices: Sequence[str], argument: str) -> str:
    """Require ``value`` to be one of ``choices``."""
    if value not in choices:
        allowed = ", ".join(choices)
        raise InvalidArgumentError(
            f"Invalid {argument} {value!r}; expected one of: {allowed}",
            argument=argument,
            context={"allowed": list(choices)},
        )
    return value


def validate_id(value: Any, argument: str = "id") -> int:
    """Require a positive integer identifier."""
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise InvalidArgumentError(f"{argument} must be a positive integer", argument=argument)
    return value


def validate_non_empty(value: Any, argument: str) -> Any:
    """Reject ``None``, empty strings and empty collections."""
    if value is None or (isinstance(value, (str, list, tuple, dict)) and not value):
        raise InvalidArgumentError(f"{argument} must not be empty", argument=argument)
    return value


def format_timestamp(value: datetime | date | None) -> str | None:
    """Render a date filter the way the API expects (``YYYY-MM-DD`` or ISO 8601)."""
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.isoformat()
    return value.strftime("%Y-%m-%d")


__all__ = [
    "EMAIL_PATTERN",
    "validate_email",
    "validate_url",
    "validate_choice",
    "validate_id",
    "validate_non_empty",
    "format_timestamp",
]
