"""Tests for the OAuth authorization, code exchange and refresh flows."""

from __future__ import annotations

import json
import threading
import time
from collections.abc import Callable
from pathlib import Path
from typing import Any

import httpx
import pytest

from convertkit_api import (
    ClientError,
    ConfigurationError,
    InvalidArgumentError,
    LegacyKeyCredential,
    MalformedResponseError,
    OAuthCredential,
    ServerError,
    TokenSet,
    build_authorize_url,
)
from convertkit_api.oauth import SingleFlight

FIXTURES = Path(__file__).parent / "fixtures"

NEW_TOKENS = {
    "access_token": "access-token-0002",
    "refresh_token": "refresh-token-0002",
    "token_type": "Bearer",
    "created_at": 1_700_000_000,
    "expires_in": 172800,
    "scope": "public",
}


def token_handler(body: dict[str, Any] | None = None) -> Callable[[httpx.Request], httpx.Response]:
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path == "/oauth/token":
            return httpx.Response(200, json=body or NEW_TOKENS, request=request)
        return httpx.Response(200, json={"account": {}}, request=request)

    return handler


def test_authorize_url_exact() -> None:
    url = build_authorize_url("client123", "https://app/cb")

    assert url == (
        "https://app.convertkit.com/oauth/authorize"
        "?client_id=client123&redirect_uri=https%3A%2F%2Fapp%2Fcb&response_type=code"
    )


def test_authorize_url_appends_state(oauth_credential: OAuthCredential, make_client: Callable) -> None:
    client, recorder = make_client(credential=oauth_credential)

    url = client.build_authorize_url(state="xyz")

    assert url.endswith("&response_type=code&state=xyz")
    assert not recorder.requests


def test_authorize_url_requires_arguments() -> None:
    with pytest.raises(InvalidArgumentError):
        build_authorize_url("", "https://app/cb")
    with pytest.raises(InvalidArgumentError):
        build_authorize_url("client123", "")


def test_exchange_code_posts_grant_and_swaps_tokens(make_client: Callable) -> None:
    """Given an OAuth client without tokens, when a code is exchanged, then the
    grant is posted without auth and later requests use the issued token."""
    credential = OAuthCredential(client_id="client123", client_secret="client-secret-9876")
    client, recorder = make_client(token_handler(), credential=credential)

    tokens = client.exchange_code("auth-code-1")

    token_request = recorder.requests[0]
    assert str(token_request.url) == "https://api.convertkit.com/oauth/token"
    assert token_request.method == "POST"
    assert "Authorization" not in token_request.headers
    assert json.loads(token_request.content) == {
        "code": "auth-code-1",
        "client_id": "client123",
        "client_secret": "client-secret-9876",
        "grant_type": "authorization_code",
        "redirect_uri": "https://app/cb",
    }
    assert tokens == TokenSet(**NEW_TOKENS)
    assert client.credential.access_token == "access-token-0002"
    assert client.credential.client_id == "client123"

    client.get_account()
    assert recorder.last.headers["Authorization"] == "Bearer access-token-0002"


def test_exchange_code_rejected_raises_client_error(make_client: Callable, respond: Callable) -> None:
    credential = OAuthCredential(client_id="client123", client_secret="client-secret-9876")
    client, _ = make_client(respond(401, {"error": "invalid_grant"}), credential=credential)

    with pytest.raises(ClientError, match="invalid_grant"):
        client.exchange_code("bad-code")

    assert client.credential.access_token is None


def test_refresh_defaults_to_stored_refresh_token(oauth_credential: OAuthCredential, make_client: Callable) -> None:
    client, recorder = make_client(token_handler(), credential=oauth_credential)

    tokens = client.refresh()

    assert json.loads(recorder.last.content) == {
        "refresh_token": "refresh-token-0001",
        "client_id": "client123",
        "client_secret": "client-secret-9876",
        "grant_type": "refresh_token",
        "redirect_uri": "https://app/cb",
    }
    assert tokens.access_token == "access-token-0002"
    assert client.credential.refresh_token == "refresh-token-0002"


def test_refresh_keeps_refresh_token_when_not_rotated(oauth_credential: OAuthCredential, make_client: Callable) -> None:
    client, _ = make_client(token_handler({"access_token": "access-token-0003"}), credential=oauth_credential)

    client.refresh("refresh-token-0001")

    assert client.credential.access_token == "access-token-0003"
    assert client.credential.refresh_token == "refresh-token-0001"


def test_invalid_refresh_token_surfaces_server_error(oauth_credential: OAuthCredential, make_client: Callable) -> None:
    """Given the provider's recorded response to an invalid refresh token, when
    refreshing, then a `ServerError` is raised and the credential is unchanged."""
    fixture = json.loads((FIXTURES / "oauth_refresh_invalid_token.json").read_text())
    recorded = fixture["response"]

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            recorded["status_code"],
            headers=recorded["headers"],
            content=json.dumps(recorded["body"]).encode(),
            request=request,
        )

    client, _ = make_client(handler, credential=oauth_credential)

    with pytest.raises(ServerError) as excinfo:
        client.refresh("not-a-real-token")

    assert excinfo.value.status_code == 500
    assert client.credential == oauth_credential


def test_malformed_token_response(oauth_credential: OAuthCredential, make_client: Callable) -> None:
    client, _ = make_client(token_handler({"token_type": "Bearer"}), credential=oauth_credential)

    with pytest.raises(MalformedResponseError):
        client.refresh()


def test_oauth_operations_require_oauth_credential(legacy_credential: LegacyKeyCredential, make_client: Callable) -> None:
    client, recorder = make_client(credential=legacy_credential)

    with pytest.raises(ConfigurationError):
        client.build_authorize_url()
    with pytest.raises(ConfigurationError):
        client.exchange_code("code")
    with pytest.raises(ConfigurationError):
        client.refresh("token")
    assert not recorder.requests


def test_missing_redirect_uri_is_configuration_error(oauth_credential: OAuthCredential, make_client: Callable) -> None:
    client, _ = make_client(credential=oauth_credential, redirect_uri=None)

    with pytest.raises(ConfigurationError, match="redirect_uri"):
        client.refresh()


def test_refresh_without_token_is_invalid_argument(make_client: Callable) -> None:
    credential = OAuthCredential(client_id="client123", client_secret="client-secret-9876", access_token="a-token")
    client, recorder = make_client(credential=credential)

    with pytest.raises(InvalidArgumentError):
        client.refresh()
    assert not recorder.requests


def _wait_for_waiters(flight: SingleFlight, key: str, count: int) -> None:
    deadline = time.monotonic() + 5
    while flight.waiting(key) < count:
        assert time.monotonic() < deadline, "follower never started waiting"
        time.sleep(0.01)


def test_concurrent_refresh_makes_one_request(oauth_credential: OAuthCredential, make_client: Callable) -> None:
    """Given a refresh in flight, when a second caller refreshes the same token,
    then it waits and receives the same token set without another request."""
    started = threading.Event()
    release = threading.Event()

    def handler(request: httpx.Request) -> httpx.Response:
        started.set()
        release.wait(5)
        return httpx.Response(200, json=NEW_TOKENS, request=request)

    client, recorder = make_client(handler, credential=oauth_credential)
    results: dict[str, TokenSet] = {}

    def run(name: str) -> None:
        results[name] = client.refresh("refresh-token-0001")

    leader = threading.Thread(target=run, args=("leader",))
    leader.start()
    assert started.wait(5)

    follower = threading.Thread(target=run, args=("follower",))
    follower.start()
    _wait_for_waiters(client.refresh_flight, "refresh-token-0001", 1)

    release.set()
    leader.join(5)
    follower.join(5)

    assert len(recorder.requests) == 1
    assert results["leader"] is results["follower"]
    assert not client.refresh_flight.in_flight("refresh-token-0001")


def test_concurrent_refresh_shares_failure(oauth_credential: OAuthCredential, make_client: Callable) -> None:
    started = threading.Event()
    release = threading.Event()

    def handler(request: httpx.Request) -> httpx.Response:
        started.set()
        release.wait(5)
        return httpx.Response(503, json={"errors": ["Unavailable"]}, request=request)

    client, recorder = make_client(handler, credential=oauth_credential)
    errors: dict[str, BaseException] = {}

    def run(name: str) -> None:
        try:
            client.refresh()
        except ServerError as exc:
            errors[name] = exc

    leader = threading.Thread(target=run, args=("leader",))
    leader.start()
    assert started.wait(5)
    follower = threading.Thread(target=run, args=("follower",))
    follower.start()
    _wait_for_waiters(client.refresh_flight, "refresh-token-0001", 1)

    release.set()
    leader.join(5)
    follower.join(5)

    assert len(recorder.requests) == 1
    assert errors["leader"] is errors["follower"]


def test_sequential_refreshes_each_send_a_request(oauth_credential: OAuthCredential, make_client: Callable) -> None:
    client, recorder = make_client(token_handler(), credential=oauth_credential)

    client.refresh("refresh-token-0001")
    client.refresh("refresh-token-0001")

    assert len(recorder.requests) == 2


def test_refresh_racing_a_completed_rotation_reuses_its_tokens(
    oauth_credential: OAuthCredential, make_client: Callable, monkeypatch: pytest.MonkeyPatch
) -> None:
    """Given a caller that read the stored refresh token, when another refresh
    rotates it before the caller enters the single-flight, then the caller gets
    the rotated token set and the spent token is never sent again."""
    client, recorder = make_client(token_handler(), credential=oauth_credential)
    flight_do = client.refresh_flight.do
    raced: list[TokenSet] = []

    def racing_do(key: str, fn: Callable[[], TokenSet]) -> TokenSet:
        if not raced:
            raced.append(flight_do(key, fn))
        return flight_do(key, fn)

    monkeypatch.setattr(client.refresh_flight, "do", racing_do)

    tokens = client.refresh()

    assert len(recorder.requests) == 1
    assert tokens is raced[0]
    assert client.credential.refresh_token == "refresh-token-0002"


def test_refresh_with_unrotated_token_sends_again(
    oauth_credential: OAuthCredential, make_client: Callable
) -> None:
    client, recorder = make_client(token_handler({"access_token": "access-token-0002"}), credential=oauth_credential)

    client.refresh()
    client.refresh()

    assert len(recorder.requests) == 2
    assert client.credential.refresh_token == "refresh-token-0001"
