"""
ConvertKit API Response Parser

This module implements the state-free half of the request/response engine: it maps
HTTP status codes and decoded bodies to the exception taxonomy in ``exceptions.py``,
decodes JSON bodies, and validates the ``pagination`` envelope that every list
endpoint returns.

Status classification:

- 200-399: success (3xx is treated as success; the transport follows redirects)
- 400-499: ``ClientError``
- 500-599: ``ServerError``
- anything else: ``APIError``
"""

from __future__ import annotations

import json
from typing import Any

from pydantic import BaseModel, ValidationError

from .exceptions import APIError, ClientError, MalformedResponseError, ServerError
from .models import ListPage, PaginationCursor


def safe_serialize(obj: Any) -> str:
    """
    Serializes objects to compact JSON for debug logging, never raising.

    Pydantic models are dumped, datetimes use ``isoformat`` and anything else that
    JSON cannot represent falls back to ``str()``.

    Args:
        obj (Any): Object to serialize

    Returns:
        str: JSON text, or a ``<serialization-failed: Type>`` marker
    """

    def json_serializer(value: Any) -> Any:
        if isinstance(value, BaseModel):
            return value.model_dump()
        if hasattr(value, "isoformat"):
            return value.isoformat()
        return str(value)

    try:
        return json.dumps(obj, default=json_serializer, ensure_ascii=False, separators=(",", ":"))
    except (TypeError, ValueError):
        return f"<serialization-failed: {type(obj).__name__}>"


def is_success(status_code: int) -> bool:
    """Return True for the 200-399 range."""
    return 200 <= status_code < 400


def error_message(status_code: int, body: Any) -> str:
    """
    Extracts a human-readable message from an error body.

    The API reports validation failures as ``{"errors": ["Form does not exist"]}``;
    the OAuth endpoint uses ``error`` / ``error_description``. Falls back to
    ``HTTP <status>``.
    """
    if isinstance(body, dict):
        errors = body.get("errors")
        if isinstance(errors, list) and errors:
            return "; ".join(str(item) for item in errors)
        if isinstance(errors, str) and errors:
            return errors
        for key in ("message", "error_description", "error"):
            value = body.get(key)
            if isinstance(value, str) and value:
                return value
    elif isinstance(body, str) and body.strip():
        return body.strip()[:200]
    return f"HTTP {status_code}"


def classify_error(status_code: int, body: Any = None) -> APIError | None:
    """
    Maps a status code and decoded body to an exception instance.

    Args:
        status_code (int): HTTP status code
        body (Any): Decoded JSON body, raw text, or None

    Returns:
        APIError | None: None for success statuses, otherwise the exception to raise
    """
    if is_success(status_code):
        return None

    message = error_message(status_code, body)
    context = {"status_code": status_code}
    if 400 <= status_code < 500:
        return ClientError(message, status_code, body, context)
    if 500 <= status_code < 600:
        return ServerError(message, status_code, body, context)
    return APIError(message, status_code, body, context)


def decode_json_body(text: str, status_code: int) -> Any:
    """
    Decodes a JSON response body.

    An empty body decodes to None. Anything else that is not valid JSON raises
    ``MalformedResponseError``.
    """
    if not text or not text.strip():
        return None
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise MalformedResponseError(
            f"Failed to decode JSON response: {exc.msg}",
            status_code,
            text[:500],
            {"status_code": status_code, "position": exc.pos},
        ) from exc


def parse_pagination(body: Any) -> PaginationCursor:
    """
    Validates the ``pagination`` object of a list response.

    Raises:
        MalformedResponseError: If the object is missing or invalid, or a page flag is
            set without a usable cursor.
    """
    raw = body.get("pagination") if isinstance(body, dict) else None
    if not isinstance(raw, dict):
        raise MalformedResponseError(
            "List response is missing the pagination object",
            None,
            body,
        )

    try:
        cursor = PaginationCursor.model_validate(raw)
    except ValidationError as exc:
        raise MalformedResponseError(
            f"Invalid pagination object: {exc.error_count()} validation error(s)",
            None,
            raw,
            {"errors": exc.errors(include_url=False)},
        ) from exc

    if cursor.has_next_page and not cursor.end_cursor:
        raise MalformedResponseError("has_next_page is true but end_cursor is empty", None, raw)
    if cursor.has_previous_page and not cursor.start_cursor:
        raise MalformedResponseError(
            "has_previous_page is true but start_cursor is empty", None, raw
        )
    return cursor


def parse_list_page(body: Any, key: str) -> ListPage:
    """
    Parses a list response into a ``ListPage``.

    Args:
        body (Any): Decoded response body
        key (str): Name of the domain array, e.g. ``"subscribers"``

    Raises:
        MalformedResponseError: If the domain array or the pagination object is missing.
    """
    if not isinstance(body, dict) or not isinstance(body.get(key), list):
        raise MalformedResponseError(
            f"List response is missing the '{key}' array",
            None,
            body,
            {"key": key},
        )
    pagination = parse_pagination(body)
    return ListPage(key=key, items=body[key], pagination=pagination, raw=body)


__all__ = [
    "safe_serialize",
    "is_success",
    "error_message",
    "classify_error",
    "decode_json_body",
    "parse_pagination",
    "parse_list_page",
]
