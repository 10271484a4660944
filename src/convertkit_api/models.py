"""
ConvertKit API Data Models

This module defines the Pydantic models exchanged with the request/response engine:
the request description handed to the executor, the envelope it returns, the OAuth
token set, the pagination cursor and list page parsed from list endpoints, and the
log entry written by the debug logger.

Resource items inside list pages (subscribers, tags, forms, ...) are kept as plain
JSON mappings; their shape is owned by the remote API.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Literal

import httpx
from pydantic import BaseModel, ConfigDict, Field

from .constants import DEFAULT_CONTENT_TYPE

HTTPMethod = Literal["GET", "POST", "PUT", "PATCH", "DELETE"]


class RequestSpec(BaseModel):
    """
    Describes a single API call.

    Attributes:
        method: HTTP verb
        path: Path relative to ``<base_url>/<api_version>/``, e.g. ``subscribers/12``
        query: Ordered query parameters, sent on GET requests
        body: JSON body parameters, sent on write requests
        auth_required: Whether the credential header is attached
        content_type: Value for the Accept / Content-Type headers
        url: Absolute URL overriding ``path`` (OAuth token endpoint, markup fetches)
        timeout: Per-request timeout in seconds, overriding the client default
    """

    model_config = ConfigDict(frozen=True)

    method: HTTPMethod = "GET"
    path: str = ""
    query: dict[str, Any] = Field(default_factory=dict)
    body: dict[str, Any] = Field(default_factory=dict)
    auth_required: bool = True
    content_type: str = DEFAULT_CONTENT_TYPE
    url: str | None = None
    timeout: float | None = Field(default=None, gt=0)


class ResponseEnvelope(BaseModel):
    """Result of one executed request.

    ``raw`` is the transport response and stays available for status and header
    inspection. ``body`` is the decoded JSON value, ``None`` for an empty body or
    for non-JSON content types, in which case ``text`` holds the payload.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    status_code: int
    raw: httpx.Response
    body: Any = None
    text: str = ""

    @property
    def headers(self) -> httpx.Headers:
        return self.raw.headers


class TokenSet(BaseModel):
    """Tokens issued by the OAuth token endpoint."""

    access_token: str = Field(min_length=1, examples=["example-access-token"])
    refresh_token: str | None = Field(default=None, examples=["example-refresh-token"])
    token_type: str = Field(default="Bearer")
    created_at: int | None = Field(default=None, description="Issue time, seconds since epoch")
    expires_in: int | None = Field(default=None, description="Lifetime in seconds")
    scope: str | None = Field(default=None, examples=["public"])


class PaginationCursor(BaseModel):
    """
    The ``pagination`` object of a list response.

    Cursors are opaque: they are only meaningful when passed back as
    ``after_cursor`` (``end_cursor``) or ``before_cursor`` (``start_cursor``).
    When a flag is false the matching cursor must not be used.
    """

    has_previous_page: bool
    has_next_page: bool
    start_cursor: str | None = None
    end_cursor: str | None = None
    per_page: int
    total_count: int | None = None


class ListPage(BaseModel):
    """One page of a list endpoint: the domain array and its pagination cursor."""

    key: str = Field(description="Name of the domain array, e.g. 'subscribers'")
    items: list[dict[str, Any]] = Field(default_factory=list)
    pagination: PaginationCursor
    raw: dict[str, Any] = Field(default_factory=dict, repr=False)


class LogEntry(BaseModel):
    """A debug log line. Built only from a message that has already been masked."""

    model_config = ConfigDict(frozen=True)

    timestamp: datetime
    level: str
    message: str


__all__ = [
    "HTTPMethod",
    "RequestSpec",
    "ResponseEnvelope",
    "TokenSet",
    "PaginationCursor",
    "ListPage",
    "LogEntry",
]
