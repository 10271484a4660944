"""Credential types for the two supported authentication modes."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class LegacyKeyCredential(BaseModel):
    """API key, with an optional secret for calls that expose subscriber data.

    The key is sent as a header; call sites that need the secret pass it as a
    query or body parameter themselves.
    """

    model_config = ConfigDict(frozen=True)

    kind: Literal["legacy"] = "legacy"
    api_key: str = Field(min_length=1, description="ConvertKit API key", examples=["abcd1234wxyz"])
    api_secret: str | None = Field(
        default=None,
        description="ConvertKit API secret, required for secret-scoped reads",
    )

    def secrets(self) -> list[str]:
        """Return the values that must never reach a log unmasked."""
        return [value for value in (self.api_key, self.api_secret) if value]


class OAuthCredential(BaseModel):
    """OAuth application credentials plus the current token pair.

    Instances are immutable. After an exchange or refresh the client swaps its
    credential for the copy returned by :meth:`with_tokens`.
    """

    model_config = ConfigDict(frozen=True)

    kind: Literal["oauth"] = "oauth"
    client_id: str = Field(min_length=1, description="OAuth application client ID")
    client_secret: str = Field(min_length=1, description="OAuth application client secret")
    access_token: str | None = Field(default=None, description="Bearer access token")
    refresh_token: str | None = Field(default=None, description="Refresh token, if issued")

    def with_tokens(self, access_token: str, refresh_token: str | None = None) -> OAuthCredential:
        """Return a copy carrying a new access token and, if rotated, a new refresh token."""
        return self.model_copy(
            update={
                "access_token": access_token,
                "refresh_token": refresh_token if refresh_token else self.refresh_token,
            }
        )

    def secrets(self) -> list[str]:
        """Return the values that must never reach a log unmasked."""
        values = (self.client_id, self.client_secret, self.access_token, self.refresh_token)
        return [value for value in values if value]


Credential = LegacyKeyCredential | OAuthCredential

__all__ = ["Credential", "LegacyKeyCredential", "OAuthCredential"]
