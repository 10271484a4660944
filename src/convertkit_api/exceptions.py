"""
ConvertKit API Exception Hierarchy

This module defines the centralized exception hierarchy for the ConvertKit API client.
Every failure the engine can produce is surfaced as one of these types; nothing is
converted into a ``False`` or ``None`` return value.

The taxonomy separates failures detected locally before any network call
(``InvalidArgumentError``, ``ConfigurationError``) from failures reported by, or on
the way to, the remote API (``APIError`` and its subclasses):

- ``ClientError``: HTTP 4xx, caller-correctable (bad ID, bad filter value)
- ``ServerError``: HTTP 5xx, provider-side; never retried automatically
- ``TransportError``: DNS, TLS, connection and timeout failures
- ``MalformedResponseError``: success status but an undecodable or incomplete body
"""

from __future__ import annotations

from typing import Any


class ConvertKitError(Exception):
    """
    Base exception for all custom errors raised by the ConvertKit API client.

    The exception carries three components used by callers and by the debug log:

    - message: Human-readable error description
    - code: Optional numeric error code (the HTTP status for API errors)
    - context: Optional mapping with additional diagnostic information

    Example:
        raise ConvertKitError(
            message="Client is not configured for OAuth",
            code=None,
            context={"operation": "refresh"},
        )
    """

    def __init__(self, message: str, code: int | None = None, context: dict[str, Any] | None = None):
        self.message = message
        self.code = code
        self.context = context or {}
        super().__init__(message)

    def __str__(self) -> str:
        """Return the message, followed by the code when one is present."""
        if self.code is not None:
            return f"{self.message} (Code: {self.code})"
        return self.message


class ConfigurationError(ConvertKitError):
    """Raised when the client or a request is configured in an unusable way."""


class InvalidArgumentError(ConvertKitError, ValueError):
    """
    Raised when a call argument fails local validation.

    No request is sent when this is raised. Typical causes are a malformed email
    address, an unknown enum value for a sort field or webhook event, a malformed
    URL, or conflicting pagination cursors.
    """

    def __init__(self, message: str, argument: str | None = None, context: dict[str, Any] | None = None):
        context = dict(context or {})
        if argument is not None:
            context.setdefault("argument", argument)
        super().__init__(message, None, context)
        self.argument = argument


class APIError(ConvertKitError):
    """Base exception for failures reported by, or on the way to, the ConvertKit API."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        body: Any = None,
        context: dict[str, Any] | None = None,
    ):
        super().__init__(message, status_code, context)
        self.status_code = status_code
        self.body = body


class ClientError(APIError):
    """HTTP 4xx response. The body usually explains which input was rejected."""


class ServerError(APIError):
    """HTTP 5xx response, surfaced as-is."""


class TransportError(APIError):
    """The request never produced an HTTP response (DNS, TLS, connection, timeout)."""

    def __init__(self, message: str, cause: BaseException | None = None, context: dict[str, Any] | None = None):
        super().__init__(message, None, None, context)
        self.cause = cause


class MalformedResponseError(APIError):
    """A success status arrived with a body that could not be decoded or lacks required fields."""


__all__ = [
    "ConvertKitError",
    "ConfigurationError",
    "InvalidArgumentError",
    "APIError",
    "ClientError",
    "ServerError",
    "TransportError",
    "MalformedResponseError",
]
