"""
ConvertKit API Client

This module implements ``ConvertKitClient``, the facade over the request/response
engine. A client owns exactly one credential, a ``RequestExecutor``, an optional
``DebugLogger`` and a ``ResourceCache``; the resource methods (subscribers, tags,
forms, ...) are mixed in from ``convertkit_api.resources``.

Every call goes through ``execute()``. The credential slot is guarded by a lock: the
only change it ever sees is the OAuth token pair being replaced after a code exchange
or a refresh. Refreshes are single-flight per refresh token, so concurrent callers
holding the same expired token share one network round trip.
"""

from __future__ import annotations

import threading
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import httpx
from loguru import logger

from .cache import ResourceCache
from .constants import DEFAULT_API_BASE_URL, DEFAULT_API_VERSION, DEFAULT_CONTENT_TYPE, DEFAULT_TIMEOUT_SECONDS
from .credentials import Credential, LegacyKeyCredential, OAuthCredential
from .exceptions import ConfigurationError
from .executor import RequestExecutor
from .headers import build_headers
from .logging_setup import DebugLogger
from .models import HTTPMethod, LogEntry, RequestSpec, ResponseEnvelope, TokenSet
from .oauth import SingleFlight, build_authorize_url, code_exchange_request, parse_token_set, refresh_request
from .resources import (
    AccountMixin,
    BroadcastsMixin,
    CustomFieldsMixin,
    EmailTemplatesMixin,
    FormsMixin,
    LookupsMixin,
    PurchasesMixin,
    SegmentsMixin,
    SequencesMixin,
    SubscribersMixin,
    TagsMixin,
    WebhooksMixin,
)


class ConvertKitClient(
    AccountMixin,
    BroadcastsMixin,
    CustomFieldsMixin,
    EmailTemplatesMixin,
    FormsMixin,
    PurchasesMixin,
    SegmentsMixin,
    SequencesMixin,
    SubscribersMixin,
    TagsMixin,
    WebhooksMixin,
    LookupsMixin,
):
    """
    Client for the ConvertKit v4 API.

    Args:
        credential: ``LegacyKeyCredential`` or ``OAuthCredential``
        redirect_uri: OAuth redirect URI, used by the authorize URL, code exchange and refresh
        debug: Write a masked debug log
        debug_log_file: Debug log location; defaults to ``logs/debug.log`` in the working directory
        base_url: API root
        api_version: Version path segment
        timeout: Default request timeout in seconds
        transport: ``httpx.BaseTransport`` for the client-owned ``httpx.Client``
        http_client: Pre-built ``httpx.Client``; takes precedence over ``transport``
        cache: Cache for ``get_resources``/``get_resource``; a fresh one by default

    Example:
        >>> client = ConvertKitClient(LegacyKeyCredential(api_key="..."))
        >>> client.get_account()["account"]["name"]
    """

    def __init__(
        self,
        credential: Credential,
        *,
        redirect_uri: str | None = None,
        debug: bool = False,
        debug_log_file: str | Path | None = None,
        base_url: str = DEFAULT_API_BASE_URL,
        api_version: str = DEFAULT_API_VERSION,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        transport: httpx.BaseTransport | None = None,
        http_client: httpx.Client | None = None,
        cache: ResourceCache | None = None,
    ) -> None:
        if not isinstance(credential, (LegacyKeyCredential, OAuthCredential)):
            raise ConfigurationError(
                f"Unsupported credential type: {type(credential).__name__}",
                context={"operation": "init"},
            )

        self._credential: Credential = credential
        self._credential_lock = threading.Lock()
        self.redirect_uri = redirect_uri
        self.cache = cache if cache is not None else ResourceCache()
        self.refresh_flight: SingleFlight[TokenSet] = SingleFlight()
        self._last_refresh: tuple[str, TokenSet] | None = None

        self.debug_logger: DebugLogger | None = None
        if debug:
            self.debug_logger = DebugLogger(debug_log_file, secrets=self._secrets)

        self._executor = RequestExecutor(
            base_url=base_url,
            api_version=api_version,
            timeout=timeout,
            transport=transport,
            http_client=http_client,
            debug_logger=self.debug_logger,
        )
        logger.debug("ConvertKit client created ({} credential, debug={})", credential.kind, debug)

    # ------------------------------------------------------------------ credential

    @property
    def credential(self) -> Credential:
        with self._credential_lock:
            return self._credential

    def _secrets(self) -> list[str]:
        return self.credential.secrets()

    def _require_oauth(self, operation: str) -> OAuthCredential:
        credential = self.credential
        if not isinstance(credential, OAuthCredential):
            raise ConfigurationError(
                f"{operation} requires an OAuth credential",
                context={"operation": operation, "credential": credential.kind},
            )
        return credential

    def _require_redirect_uri(self, redirect_uri: str | None, operation: str) -> str:
        redirect_uri = redirect_uri or self.redirect_uri
        if not redirect_uri:
            raise ConfigurationError(
                f"{operation} requires a redirect_uri",
                context={"operation": operation},
            )
        return redirect_uri

    def _store_tokens(self, tokens: TokenSet, consumed: str | None = None) -> None:
        with self._credential_lock:
            current = self._credential
            if isinstance(current, OAuthCredential):
                self._credential = current.with_tokens(tokens.access_token, tokens.refresh_token)
            if consumed is not None:
                self._last_refresh = (consumed, tokens)

    def _settled_refresh(self, token: str) -> TokenSet | None:
        """Token set from a completed refresh that already rotated the stored ``token`` away."""
        with self._credential_lock:
            if self._last_refresh is None or self._last_refresh[0] != token:
                return None
            current = self._credential
            if isinstance(current, OAuthCredential) and current.refresh_token == token:
                return None
            return self._last_refresh[1]

    # ------------------------------------------------------------------ engine

    def execute(self, spec: RequestSpec) -> ResponseEnvelope:
        """Send ``spec`` with the current credential. See ``RequestExecutor.execute``."""
        return self._executor.execute(spec, self.credential)

    def request(self, method: HTTPMethod, path: str, params: Mapping[str, Any] | None = None) -> Any:
        """Send ``params`` as the query (GET) or JSON body (other verbs); return the decoded body."""
        params = dict(params or {})
        if method == "GET":
            spec = RequestSpec(method=method, path=path, query=params)
        else:
            spec = RequestSpec(method=method, path=path, body=params)
        return self.execute(spec).body

    def get(self, path: str, params: Mapping[str, Any] | None = None) -> Any:
        return self.request("GET", path, params)

    def post(self, path: str, params: Mapping[str, Any] | None = None) -> Any:
        return self.request("POST", path, params)

    def put(self, path: str, params: Mapping[str, Any] | None = None) -> Any:
        return self.request("PUT", path, params)

    def patch(self, path: str, params: Mapping[str, Any] | None = None) -> Any:
        return self.request("PATCH", path, params)

    def delete(self, path: str, params: Mapping[str, Any] | None = None) -> Any:
        return self.request("DELETE", path, params)

    def last_response(self) -> ResponseEnvelope | None:
        """Envelope of the most recent response; None before the first request."""
        return self._executor.last_response()

    def get_request_headers(self, content_type: str = DEFAULT_CONTENT_TYPE, auth: bool = True) -> dict[str, str]:
        return build_headers(self.credential, content_type, auth)

    def log(self, level: str, message: str) -> LogEntry | None:
        """Write ``message`` to the debug log. Returns None when debugging is disabled."""
        if self.debug_logger is None:
            return None
        return self.debug_logger.log(level, message)

    # ------------------------------------------------------------------ OAuth

    def build_authorize_url(self, redirect_uri: str | None = None, state: str | None = None) -> str:
        credential = self._require_oauth("build_authorize_url")
        redirect_uri = self._require_redirect_uri(redirect_uri, "build_authorize_url")
        return build_authorize_url(credential.client_id, redirect_uri, state)

    def exchange_code(self, code: str, redirect_uri: str | None = None) -> TokenSet:
        """
        Exchange an authorization code for tokens and start using them.

        Raises:
            ConfigurationError: Client is not using an OAuth credential
            ClientError: The code was rejected
        """
        credential = self._require_oauth("exchange_code")
        redirect_uri = self._require_redirect_uri(redirect_uri, "exchange_code")
        spec = code_exchange_request(credential.client_id, credential.client_secret, code, redirect_uri)

        tokens = parse_token_set(self.execute(spec))
        self._store_tokens(tokens)
        logger.debug("OAuth authorization code exchanged")
        return tokens

    def refresh(self, refresh_token: str | None = None, redirect_uri: str | None = None) -> TokenSet:
        """
        Exchange a refresh token for a new token set and start using it.

        Defaults to the credential's stored refresh token. Concurrent calls for the
        same refresh token share a single request and its outcome. A caller that read
        the stored token just before another refresh rotated it gets that refresh's
        token set instead of replaying the spent token.
        """
        credential = self._require_oauth("refresh")
        redirect_uri = self._require_redirect_uri(redirect_uri, "refresh")
        token = refresh_token or credential.refresh_token
        spec = refresh_request(credential.client_id, credential.client_secret, token or "", redirect_uri)

        def run() -> TokenSet:
            if refresh_token is None:
                settled = self._settled_refresh(spec.body["refresh_token"])
                if settled is not None:
                    logger.debug("OAuth token already refreshed by a concurrent caller")
                    return settled
            tokens = parse_token_set(self.execute(spec))
            self._store_tokens(tokens, consumed=spec.body["refresh_token"])
            logger.debug("OAuth token refreshed")
            return tokens

        return self.refresh_flight.do(spec.body["refresh_token"], run)

    # ------------------------------------------------------------------ lifecycle

    def set_http_client(self, http_client: httpx.Client) -> None:
        """Route further requests through ``http_client``."""
        self._executor.set_http_client(http_client)

    def close(self) -> None:
        self._executor.close()
        if self.debug_logger is not None:
            self.debug_logger.close()

    def __enter__(self) -> ConvertKitClient:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()


__all__ = ["ConvertKitClient"]
