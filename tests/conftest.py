"""Pytest configuration for test discovery and shared fixtures.

This file ensures that:
- `src/` is importable
- Tests build clients over `httpx.MockTransport`, so no request leaves the process
"""

from __future__ import annotations

import json
import sys
from collections.abc import Callable, Iterator
from pathlib import Path
from typing import Any

import httpx
import pytest

# Ensure src directory is in path for imports
repo_root = Path(__file__).parent.parent
src_path = repo_root / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

from convertkit_api import ConvertKitClient, LegacyKeyCredential, OAuthCredential  # noqa: E402

Handler = Callable[[httpx.Request], httpx.Response]

API_KEY = "abcd1234wxyz"
API_SECRET = "secret-5678-efgh"
CLIENT_ID = "client123"
CLIENT_SECRET = "client-secret-9876"
ACCESS_TOKEN = "access-token-0001"
REFRESH_TOKEN = "refresh-token-0001"
REDIRECT_URI = "https://app/cb"


class RecordingTransport:
    """Callable for `httpx.MockTransport` that records every request it answers."""

    def __init__(self, handler: Handler) -> None:
        self._handler = handler
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self._handler(request)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    def last_json(self) -> Any:
        return json.loads(self.last.content)


def json_response(status_code: int = 200, body: Any = None) -> Handler:
    """Handler answering every request with ``body`` as JSON."""

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(status_code, json=body if body is not None else {}, request=request)

    return handler


def list_body(key: str, items: list[dict[str, Any]], **pagination: Any) -> dict[str, Any]:
    cursor = {
        "has_previous_page": False,
        "has_next_page": False,
        "start_cursor": None,
        "end_cursor": None,
        "per_page": 500,
    }
    cursor.update(pagination)
    return {key: items, "pagination": cursor}


@pytest.fixture
def legacy_credential() -> LegacyKeyCredential:
    return LegacyKeyCredential(api_key=API_KEY, api_secret=API_SECRET)


@pytest.fixture
def oauth_credential() -> OAuthCredential:
    return OAuthCredential(
        client_id=CLIENT_ID,
        client_secret=CLIENT_SECRET,
        access_token=ACCESS_TOKEN,
        refresh_token=REFRESH_TOKEN,
    )


@pytest.fixture
def make_client(
    legacy_credential: LegacyKeyCredential,
) -> Iterator[Callable[..., tuple[ConvertKitClient, RecordingTransport]]]:
    """Factory building a client whose transport answers through ``handler``."""
    clients: list[ConvertKitClient] = []

    def factory(
        handler: Handler | None = None,
        credential: LegacyKeyCredential | OAuthCredential | None = None,
        **kwargs: Any,
    ) -> tuple[ConvertKitClient, RecordingTransport]:
        recorder = RecordingTransport(handler or json_response())
        kwargs.setdefault("redirect_uri", REDIRECT_URI)
        client = ConvertKitClient(
            credential or legacy_credential,
            transport=httpx.MockTransport(recorder),
            **kwargs,
        )
        clients.append(client)
        return client, recorder

    yield factory

    for client in clients:
        client.close()


@pytest.fixture
def list_response() -> Callable[..., dict[str, Any]]:
    return list_body


@pytest.fixture
def respond() -> Callable[..., Handler]:
    return json_response
