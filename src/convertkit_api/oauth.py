"""OAuth authorization-code flow and token refresh."""

from __future__ import annotations

import threading
from collections.abc import Callable
from concurrent.futures import Future
from typing import Any, Generic, TypeVar
from urllib.parse import urlencode

from loguru import logger
from pydantic import ValidationError

from .constants import OAUTH_AUTHORIZE_URL, OAUTH_TOKEN_URL
from .exceptions import InvalidArgumentError, MalformedResponseError
from .models import RequestSpec, ResponseEnvelope, TokenSet

T = TypeVar("T")


def build_authorize_url(
    client_id: str,
    redirect_uri: str,
    state: str | None = None,
    authorize_url: str = OAUTH_AUTHORIZE_URL,
) -> str:
    """Return the URL a user visits to authorize the application.

    Query parameters are ``client_id``, ``redirect_uri`` and ``response_type=code``
    in that order, followed by ``state`` when given.
    """
    if not client_id:
        raise InvalidArgumentError("client_id is required", argument="client_id")
    if not redirect_uri:
        raise InvalidArgumentError("redirect_uri is required", argument="redirect_uri")

    params = {
        "client_id": client_id,
        "redirect_uri": redirect_uri,
        "response_type": "code",
    }
    if state:
        params["state"] = state
    return f"{authorize_url}?{urlencode(params)}"


def code_exchange_request(
    client_id: str,
    client_secret: str,
    code: str,
    redirect_uri: str,
    token_url: str = OAUTH_TOKEN_URL,
) -> RequestSpec:
    """RequestSpec exchanging an authorization code for tokens."""
    if not code:
        raise InvalidArgumentError("authorization code is required", argument="code")
    return RequestSpec(
        method="POST",
        url=token_url,
        auth_required=False,
        body={
            "code": code,
            "client_id": client_id,
            "client_secret": client_secret,
            "grant_type": "authorization_code",
            "redirect_uri": redirect_uri,
        },
    )


def refresh_request(
    client_id: str,
    client_secret: str,
    refresh_token: str,
    redirect_uri: str,
    token_url: str = OAUTH_TOKEN_URL,
) -> RequestSpec:
    """RequestSpec exchanging a refresh token for a new token set."""
    if not refresh_token:
        raise InvalidArgumentError("refresh token is required", argument="refresh_token")
    return RequestSpec(
        method="POST",
        url=token_url,
        auth_required=False,
        body={
            "refresh_token": refresh_token,
            "client_id": client_id,
            "client_secret": client_secret,
            "grant_type": "refresh_token",
            "redirect_uri": redirect_uri,
        },
    )


def parse_token_set(envelope: ResponseEnvelope) -> TokenSet:
    """Validate the token endpoint's response body."""
    body: Any = envelope.body
    if not isinstance(body, dict):
        raise MalformedResponseError(
            "Token response is not a JSON object", envelope.status_code, body
        )
    try:
        return TokenSet.model_validate(body)
    except ValidationError as exc:
        raise MalformedResponseError(
            f"Invalid token response: {exc.error_count()} validation error(s)",
            envelope.status_code,
            None,
            {"fields": sorted(body)},
        ) from exc


class SingleFlight(Generic[T]):
    """Collapse concurrent calls sharing a key into one execution.

    The first caller for a key runs the function; callers arriving while it is
    in flight block and receive the same result or exception. Once the call
    finishes the key is released, so a later call runs again.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._calls: dict[str, Future[T]] = {}
        self._waiters: dict[str, int] = {}

    def in_flight(self, key: str) -> bool:
        with self._lock:
            return key in self._calls

    def waiting(self, key: str) -> int:
        """Number of callers currently blocked on ``key``."""
        with self._lock:
            return self._waiters.get(key, 0)

    def do(self, key: str, fn: Callable[[], T]) -> T:
        with self._lock:
            future = self._calls.get(key)
            leader = future is None
            if leader:
                future = Future()
                self._calls[key] = future
            else:
                self._waiters[key] = self._waiters.get(key, 0) + 1

        if not leader:
            try:
                return future.result()
            finally:
                with self._lock:
                    self._waiters[key] -= 1
                    if not self._waiters[key]:
                        del self._waiters[key]

        try:
            result = fn()
        except BaseException as exc:
            future.set_exception(exc)
            raise
        else:
            future.set_result(result)
            return result
        finally:
            with self._lock:
                del self._calls[key]
            logger.debug("single-flight call released")


__all__ = [
    "build_authorize_url",
    "code_exchange_request",
    "refresh_request",
    "parse_token_set",
    "SingleFlight",
]
