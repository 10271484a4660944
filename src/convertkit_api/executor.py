"""
ConvertKit API Request Executor

This module sends ``RequestSpec`` instances through an ``httpx.Client`` and turns the
result into a ``ResponseEnvelope`` or one of the typed exceptions in ``exceptions.py``.

- GET parameters are URL-encoded into the query string; ``None``, empty strings and
  empty lists are omitted rather than sent empty.
- Write verbs send a compact JSON body with an explicit ``Content-Length``.
- The transport is injectable: pass any ``httpx.BaseTransport`` (``httpx.MockTransport``
  in tests) or a fully configured ``httpx.Client``. The executor never opens sockets
  itself.
- Status codes 200-399 are success; anything else is classified by
  ``response_parser.classify_error`` and raised. Transport failures, including
  timeouts, raise ``TransportError``.
- The envelope of the most recent response is kept for ``last_response()``; the slot
  is guarded by a lock and each ``execute()`` call also returns its own envelope.
"""

from __future__ import annotations

import json
import threading
from collections.abc import Mapping
from typing import Any
from urllib.parse import urlsplit

import httpx
from loguru import logger

from .constants import DEFAULT_API_BASE_URL, DEFAULT_API_VERSION, DEFAULT_TIMEOUT_SECONDS
from .credentials import Credential
from .exceptions import ConfigurationError, MalformedResponseError, TransportError
from .headers import build_headers
from .logging_setup import DebugLogger
from .models import RequestSpec, ResponseEnvelope
from .response_parser import classify_error, decode_json_body, is_success, safe_serialize

_WRITE_METHODS = {"POST", "PUT", "PATCH", "DELETE"}


def _is_empty(value: Any) -> bool:
    return value is None or value == "" or (isinstance(value, (list, tuple)) and not value)


def _query_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def encode_query(params: Mapping[str, Any]) -> list[tuple[str, str]]:
    """
    Flattens query parameters into ordered ``(key, value)`` pairs.

    Empty values are dropped, booleans become ``true``/``false`` and list values are
    sent as repeated keys.
    """
    pairs: list[tuple[str, str]] = []
    for key, value in params.items():
        if _is_empty(value):
            continue
        if isinstance(value, (list, tuple)):
            pairs.extend((key, _query_value(item)) for item in value if not _is_empty(item))
        else:
            pairs.append((key, _query_value(value)))
    return pairs


def encode_body(params: Mapping[str, Any]) -> bytes:
    """Serialises body parameters as compact UTF-8 JSON."""
    return json.dumps(dict(params), ensure_ascii=False, separators=(",", ":")).encode("utf-8")


def _is_json(content_type: str) -> bool:
    return content_type.split(";", 1)[0].strip().lower().endswith("json")


def _without_query(url: httpx.URL) -> httpx.URL:
    # Query values are percent-encoded here and would slip past email masking
    return url.copy_with(query=None)


class RequestExecutor:
    """
    Executes requests against the ConvertKit API.

    Args:
        base_url: API root, e.g. ``https://api.convertkit.com``
        api_version: Version path segment, e.g. ``v4``
        timeout: Default timeout in seconds for every request
        transport: Optional ``httpx.BaseTransport`` for the executor-owned client
        http_client: Optional pre-built ``httpx.Client``; takes precedence over
            ``transport`` and is not closed by ``close()``
        debug_logger: Optional debug logger receiving request lifecycle events
    """

    def __init__(
        self,
        base_url: str = DEFAULT_API_BASE_URL,
        api_version: str = DEFAULT_API_VERSION,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        transport: httpx.BaseTransport | None = None,
        http_client: httpx.Client | None = None,
        debug_logger: DebugLogger | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.api_version = api_version.strip("/")
        self.timeout = timeout
        self.debug_logger = debug_logger

        if http_client is not None:
            self._client = http_client
            self._owns_client = False
        else:
            self._client = httpx.Client(transport=transport, timeout=timeout, follow_redirects=True)
            self._owns_client = True

        self._last_response: ResponseEnvelope | None = None
        self._last_response_lock = threading.Lock()

    # ------------------------------------------------------------------ helpers

    def _log(self, level: str, message: str) -> None:
        if self.debug_logger is not None:
            self.debug_logger.log(level, message)

    def set_http_client(self, http_client: httpx.Client) -> None:
        """Replace the HTTP client, closing the previous one if the executor owned it."""
        if self._owns_client:
            self._client.close()
        self._client = http_client
        self._owns_client = False

    def build_url(self, spec: RequestSpec) -> str:
        """Return the absolute URL for ``spec``."""
        if spec.url:
            parts = urlsplit(spec.url)
            if parts.scheme not in ("http", "https") or not parts.netloc:
                raise ConfigurationError(f"Request URL must be absolute: {spec.url}")
            return spec.url
        path = spec.path.strip("/")
        return f"{self.base_url}/{self.api_version}/{path}" if path else f"{self.base_url}/{self.api_version}"

    def build_request(self, spec: RequestSpec, credential: Credential) -> httpx.Request:
        """Encode ``spec`` as an ``httpx.Request`` without sending it."""
        url = self.build_url(spec)
        headers = build_headers(credential, spec.content_type, spec.auth_required)
        timeout = spec.timeout if spec.timeout is not None else self.timeout

        if spec.method in _WRITE_METHODS:
            content = encode_body(spec.body)
            headers["Content-Length"] = str(len(content))
            return self._client.build_request(
                spec.method, url, content=content, headers=headers, timeout=timeout
            )

        return self._client.build_request(
            spec.method, url, params=encode_query(spec.query), headers=headers, timeout=timeout
        )

    def _store(self, envelope: ResponseEnvelope) -> None:
        with self._last_response_lock:
            self._last_response = envelope

    # ------------------------------------------------------------------ public

    def last_response(self) -> ResponseEnvelope | None:
        """Return the envelope of the most recent response, or None before the first call."""
        with self._last_response_lock:
            return self._last_response

    def execute(self, spec: RequestSpec, credential: Credential) -> ResponseEnvelope:
        """
        Sends ``spec`` and returns the decoded response.

        Raises:
            ClientError: 4xx status
            ServerError: 5xx status
            TransportError: No response (DNS, TLS, connection, timeout)
            MalformedResponseError: Success status with an undecodable JSON body
            ConfigurationError: Unusable content type, URL or credential
        """
        request = self.build_request(spec, credential)

        self._log("INFO", f"Making request on {_without_query(request.url)}.")
        if spec.method in _WRITE_METHODS:
            self._log("INFO", f"{spec.method}, Request body: {safe_serialize(spec.body)}")
        else:
            self._log("INFO", f"{spec.method}, Request query: {safe_serialize(spec.query)}")

        try:
            response = self._client.send(request)
        except httpx.TimeoutException as exc:
            self._log("ERROR", f"Request timed out: {spec.method} {_without_query(request.url)}")
            raise TransportError(
                f"Request timed out: {spec.method} {request.url.host}{request.url.path}",
                cause=exc,
                context={"method": spec.method, "timeout": spec.timeout or self.timeout},
            ) from exc
        except httpx.RequestError as exc:
            self._log("ERROR", f"Transport error: {spec.method} {_without_query(request.url)}: {type(exc).__name__}")
            raise TransportError(
                f"Transport error: {type(exc).__name__}: {exc}",
                cause=exc,
                context={"method": spec.method},
            ) from exc

        try:
            text = response.text
        finally:
            response.close()

        status_code = response.status_code
        if not is_success(status_code):
            body: Any = text
            if _is_json(response.headers.get("content-type", spec.content_type)):
                try:
                    body = json.loads(text) if text.strip() else None
                except json.JSONDecodeError:
                    body = text
            self._store(ResponseEnvelope(status_code=status_code, raw=response, body=body, text=text))
            self._log("ERROR", f"Response code is {status_code}.")
            error = classify_error(status_code, body)
            logger.debug("{} {} failed with status {}", spec.method, spec.path or "<url>", status_code)
            raise error

        if _is_json(spec.content_type):
            try:
                decoded = decode_json_body(text, status_code)
            except MalformedResponseError:
                self._store(ResponseEnvelope(status_code=status_code, raw=response, text=text))
                self._log("ERROR", "Failed to finish request.")
                raise
        else:
            decoded = None

        envelope = ResponseEnvelope(status_code=status_code, raw=response, body=decoded, text=text)
        self._store(envelope)
        self._log("INFO", "Finish request successfully.")
        return envelope

    def close(self) -> None:
        """Close the HTTP client if the executor created it."""
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> RequestExecutor:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()


__all__ = ["RequestExecutor", "encode_query", "encode_body"]
