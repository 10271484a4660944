"""Client settings loaded from a YAML file or ``CONVERTKIT_*`` environment variables."""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path
from typing import TYPE_CHECKING, Any

from omegaconf import OmegaConf
from pydantic import BaseModel, Field

from .constants import DEFAULT_API_BASE_URL, DEFAULT_API_VERSION, DEFAULT_TIMEOUT_SECONDS, ENV_PREFIX
from .credentials import Credential, LegacyKeyCredential, OAuthCredential
from .exceptions import ConfigurationError

if TYPE_CHECKING:
    from .client import ConvertKitClient


def _normalize_key(key: Any) -> str:
    name = str(key).upper()
    if name.startswith(ENV_PREFIX):
        name = name[len(ENV_PREFIX) :]
    return name.lower()


def _normalized(values: Mapping[Any, Any]) -> dict[str, Any]:
    fields = ClientSettings.model_fields
    normalized: dict[str, Any] = {}
    for key, value in values.items():
        name = _normalize_key(key)
        if name in fields and value not in (None, ""):
            normalized[name] = value
    return normalized


class ClientSettings(BaseModel):
    """Connection and credential settings for a ``ConvertKitClient``.

    Populate either the legacy pair (``api_key``/``api_secret``) or the OAuth
    fields (``client_id``/``client_secret`` plus tokens), not both.
    """

    api_key: str | None = Field(default=None, description="Legacy API key")
    api_secret: str | None = Field(default=None, description="Legacy API secret")
    client_id: str | None = Field(default=None, description="OAuth application client ID")
    client_secret: str | None = Field(default=None, description="OAuth application client secret")
    access_token: str | None = Field(default=None, description="OAuth access token")
    refresh_token: str | None = Field(default=None, description="OAuth refresh token")
    redirect_uri: str | None = Field(
        default=None,
        description="Redirect URI registered for the OAuth application",
        examples=["https://example.com/oauth/callback"],
    )
    base_url: str = Field(default=DEFAULT_API_BASE_URL)
    api_version: str = Field(default=DEFAULT_API_VERSION)
    timeout: float = Field(default=DEFAULT_TIMEOUT_SECONDS, gt=0)
    debug: bool = False
    debug_log_file: Path | None = Field(
        default=None,
        description="Debug log location; logs/debug.log under the working directory if unset",
    )

    @classmethod
    def from_file(cls, path: Path | str) -> ClientSettings:
        """Load settings from a YAML file.

        Keys are case-insensitive and may carry the ``CONVERTKIT_`` prefix, so a
        file shared with shell tooling (``CONVERTKIT_API_KEY: ...``) loads as-is.
        """
        location = Path(path).expanduser()
        if not location.exists():
            raise FileNotFoundError(f"Settings file not found: {location}")

        raw_config = OmegaConf.load(location)
        config = OmegaConf.to_container(raw_config, resolve=True)
        if not isinstance(config, dict):
            raise ConfigurationError(
                "Settings file must contain a mapping of setting keys.",
                context={"path": str(location)},
            )
        return cls(**_normalized(config))

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> ClientSettings:
        """Load settings from ``CONVERTKIT_*`` variables."""
        environ = os.environ if environ is None else environ
        prefixed = {key: value for key, value in environ.items() if key.upper().startswith(ENV_PREFIX)}
        return cls(**_normalized(prefixed))

    def credential(self) -> Credential:
        """Build the credential for the configured mode.

        Raises:
            ConfigurationError: If neither or both modes are configured, or the OAuth
                client secret is missing.
        """
        if self.client_id and self.api_key:
            raise ConfigurationError(
                "Configure either api_key or client_id, not both",
                context={"settings": ["api_key", "client_id"]},
            )
        if self.client_id:
            if not self.client_secret:
                raise ConfigurationError(
                    "client_secret is required with client_id",
                    context={"settings": ["client_secret"]},
                )
            return OAuthCredential(
                client_id=self.client_id,
                client_secret=self.client_secret,
                access_token=self.access_token,
                refresh_token=self.refresh_token,
            )
        if self.api_key:
            return LegacyKeyCredential(api_key=self.api_key, api_secret=self.api_secret)
        raise ConfigurationError(
            "No credentials configured; set api_key or client_id/client_secret",
            context={"settings": ["api_key", "client_id"]},
        )

    def create_client(self, **overrides: Any) -> ConvertKitClient:
        """Build a client from these settings. Keyword arguments override them."""
        from .client import ConvertKitClient

        options: dict[str, Any] = {
            "debug": self.debug,
            "debug_log_file": self.debug_log_file,
            "base_url": self.base_url,
            "api_version": self.api_version,
            "timeout": self.timeout,
            "redirect_uri": self.redirect_uri,
        }
        options.update(overrides)
        credential = options.pop("credential", None) or self.credential()
        return ConvertKitClient(credential, **options)


__all__ = ["ClientSettings"]
