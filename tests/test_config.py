"""Tests for loading client settings from YAML files and the environment."""

from __future__ import annotations

from pathlib import Path

import httpx
import pytest
import yaml

from convertkit_api import ClientSettings, ConfigurationError, LegacyKeyCredential, OAuthCredential


def test_from_file_missing_file(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        ClientSettings.from_file(tmp_path / "conf" / "convertkit.yml")


def test_from_file_accepts_prefixed_and_mixed_case_keys(tmp_path: Path) -> None:
    """Given a YAML file using `CONVERTKIT_` keys and plain lower-case keys, when
    loaded, then both map onto the same settings."""
    settings_file = tmp_path / "convertkit.yml"
    settings_file.write_text(
        yaml.safe_dump(
            {
                "CONVERTKIT_API_KEY": "abcd1234wxyz",
                "Api_Secret": "secret-5678-efgh",
                "timeout": 5,
                "debug": True,
                "unrelated": "ignored",
            }
        )
    )

    settings = ClientSettings.from_file(settings_file)

    assert settings.api_key == "abcd1234wxyz"
    assert settings.api_secret == "secret-5678-efgh"
    assert settings.timeout == 5.0
    assert settings.debug is True
    assert settings.credential() == LegacyKeyCredential(api_key="abcd1234wxyz", api_secret="secret-5678-efgh")


def test_from_file_rejects_non_mapping(tmp_path: Path) -> None:
    settings_file = tmp_path / "convertkit.yml"
    settings_file.write_text("- just\n- a list\n")

    with pytest.raises(ConfigurationError, match="mapping"):
        ClientSettings.from_file(settings_file)


def test_from_env_reads_prefixed_variables() -> None:
    environ = {
        "CONVERTKIT_CLIENT_ID": "client123",
        "CONVERTKIT_CLIENT_SECRET": "client-secret-9876",
        "CONVERTKIT_ACCESS_TOKEN": "access-token-0001",
        "CONVERTKIT_REDIRECT_URI": "https://app/cb",
        "CONVERTKIT_DEBUG": "false",
        "CONVERTKIT_API_VERSION": "",
        "API_KEY": "not-read",
    }

    settings = ClientSettings.from_env(environ)

    assert settings.api_key is None
    assert settings.api_version == "v4"
    assert settings.debug is False
    assert settings.credential() == OAuthCredential(
        client_id="client123",
        client_secret="client-secret-9876",
        access_token="access-token-0001",
    )


def test_from_env_defaults_to_process_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CONVERTKIT_API_KEY", "abcd1234wxyz")

    assert ClientSettings.from_env().api_key == "abcd1234wxyz"


@pytest.mark.parametrize(
    ("values", "match"),
    [
        ({}, "No credentials"),
        ({"api_key": "abcd1234wxyz", "client_id": "client123", "client_secret": "s"}, "not both"),
        ({"client_id": "client123"}, "client_secret"),
    ],
)
def test_credential_requires_exactly_one_mode(values: dict[str, str], match: str) -> None:
    with pytest.raises(ConfigurationError, match=match):
        ClientSettings(**values).credential()


def test_create_client_applies_settings_and_overrides(tmp_path: Path) -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={}, request=request)

    settings = ClientSettings(
        api_key="abcd1234wxyz",
        base_url="https://kit.test",
        debug=True,
        debug_log_file=tmp_path / "debug.log",
    )

    with settings.create_client(transport=httpx.MockTransport(handler)) as client:
        client.get("account")
        assert client.debug_logger is not None
        assert client.debug_logger.log_file == tmp_path / "debug.log"

    assert str(seen[0].url) == "https://kit.test/v4/account"
    assert seen[0].headers["X-Api-Key"] == "abcd1234wxyz"
