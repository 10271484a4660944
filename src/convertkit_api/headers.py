"""Request header construction."""

from __future__ import annotations

import platform
import re

from .constants import API_KEY_HEADER, DEFAULT_CONTENT_TYPE, USER_AGENT_PRODUCT
from .credentials import Credential, LegacyKeyCredential, OAuthCredential
from .exceptions import ConfigurationError
from .version import __version__

_CONTENT_TYPE_PATTERN = re.compile(r"^[A-Za-z0-9][\w.+\-]*/[A-Za-z0-9*][\w.+\-*]*$")


def user_agent() -> str:
    """Return ``ConvertKitPythonSDK/<version>;Python/<python version>``."""
    return f"{USER_AGENT_PRODUCT}/{__version__};Python/{platform.python_version()}"


def build_headers(
    credential: Credential,
    content_type: str = DEFAULT_CONTENT_TYPE,
    auth_required: bool = True,
) -> dict[str, str]:
    """Build the header set for one request.

    Legacy credentials add ``X-Api-Key``; OAuth credentials add a bearer
    ``Authorization`` header. Neither is added when ``auth_required`` is false.

    Raises:
        ConfigurationError: If ``content_type`` is not a ``type/subtype`` value, or an
            OAuth credential without an access token is used for an authenticated call.
    """
    if not content_type or not _CONTENT_TYPE_PATTERN.match(content_type):
        raise ConfigurationError(
            f"Invalid content type: {content_type!r}",
            context={"content_type": content_type},
        )

    headers = {
        "Accept": content_type,
        "Content-Type": f"{content_type}; charset=utf-8",
        "User-Agent": user_agent(),
    }
    if not auth_required:
        return headers

    if isinstance(credential, LegacyKeyCredential):
        headers[API_KEY_HEADER] = credential.api_key
    elif isinstance(credential, OAuthCredential):
        if not credential.access_token:
            raise ConfigurationError(
                "OAuth access token required - exchange an authorization code first",
                context={"operation": "build_headers"},
            )
        headers["Authorization"] = f"Bearer {credential.access_token}"
    else:
        raise ConfigurationError(f"Unsupported credential type: {type(credential).__name__}")
    return headers


__all__ = ["build_headers", "user_agent"]
