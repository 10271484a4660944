"""
ConvertKit API - Security Masking Utilities

This module provides the masking transform applied to every debug log message before
it reaches a sink. Two kinds of sensitive material are masked:

- Credential values (API key, API secret, OAuth client ID and secret, access and
  refresh tokens). Every occurrence is replaced by ``*`` repeated to hide all but the
  last 4 characters, so ``abcd1234wxyz`` becomes ``********wxyz``.
- Email addresses. The local part keeps its first character, the domain keeps its
  first character and the first character of its top-level label, so
  ``owner@name.com`` becomes ``o****@n********.c**``.

Masking is irreversible and is applied unconditionally by the debug logger; there is
no code path that writes a raw credential or email address to a sink.
"""

import re
from typing import Iterable, List, Optional

# =============================================================================
# Security Constants and Patterns
# =============================================================================

# Number of trailing characters left readable in a masked credential
VISIBLE_SECRET_SUFFIX = 4

# Replacement character used by every masking function
_MASK_CHARACTER = '*'

# Email addresses embedded anywhere in a message.
# The domain must contain at least one dot and end in an alphabetic TLD.
_EMAIL_PATTERN = re.compile(
    r"[A-Za-z0-9._%+\-]+@(?:[A-Za-z0-9](?:[A-Za-z0-9\-]*[A-Za-z0-9])?\.)+[A-Za-z]{2,}"
)

# =============================================================================
# Core Masking Functions
# =============================================================================


def mask_secret(value: str) -> str:
    """
    Masks a credential value, keeping only its last 4 characters readable.

    The masked value has the same length as the original. Values of 4 characters or
    fewer are masked completely, since keeping 4 would reveal the whole secret.

    Args:
        value (str): The credential value to mask

    Returns:
        str: The masked value

    Examples:
        >>> mask_secret("abcd1234wxyz")
        '********wxyz'
        >>> mask_secret("abc")
        '***'
    """
    if not value:
        return value
    if len(value) <= VISIBLE_SECRET_SUFFIX:
        return _MASK_CHARACTER * len(value)
    hidden = len(value) - VISIBLE_SECRET_SUFFIX
    return _MASK_CHARACTER * hidden + value[-VISIBLE_SECRET_SUFFIX:]


def mask_email(email: str) -> str:
    """
    Masks an email address.

    The output is ``local[0]``, then ``*`` for the rest of the local part, ``@``, the
    first character of the domain followed by ``*`` repeated to the domain's full
    length, then ``.``, the first character of the top-level label and ``*`` for the
    rest of it.

    Args:
        email (str): A single email address

    Returns:
        str: The masked address, or the input unchanged if it is not an address

    Examples:
        >>> mask_email("owner@name.com")
        'o****@n********.c**'
    """
    local, separator, domain = email.rpartition('@')
    if not separator or not local or '.' not in domain:
        return email

    tld = domain.rsplit('.', 1)[1]
    masked_local = local[0] + _MASK_CHARACTER * (len(local) - 1)
    masked_domain = domain[0] + _MASK_CHARACTER * len(domain)
    masked_tld = tld[0] + _MASK_CHARACTER * (len(tld) - 1)
    return f"{masked_local}@{masked_domain}.{masked_tld}"


def mask_emails(message: str) -> str:
    """Masks every email address found in ``message``."""
    if not message:
        return message
    return _EMAIL_PATTERN.sub(lambda match: mask_email(match.group(0)), message)


def mask_secrets(message: str, secrets: Iterable[Optional[str]]) -> str:
    """
    Masks every occurrence of each secret value in ``message``.

    Longer secrets are replaced first so a secret that contains another one is never
    left partially readable.

    Args:
        message (str): Raw message text
        secrets (Iterable[Optional[str]]): Credential values; empty values are ignored

    Returns:
        str: The message with every secret occurrence masked
    """
    if not message:
        return message

    for secret in sorted({value for value in secrets if value}, key=len, reverse=True):
        if secret in message:
            message = message.replace(secret, mask_secret(secret))
    return message


def mask_message(message: str, secrets: Iterable[Optional[str]] = ()) -> str:
    """
    Applies the full masking transform: credential values first, then email addresses.

    This is the single entry point used by the debug logger.

    Args:
        message (str): Raw, unmasked message
        secrets (Iterable[Optional[str]]): Credential values configured on the client

    Returns:
        str: A message safe to persist
    """
    return mask_emails(mask_secrets(message, secrets))


def find_unmasked(text: str, secrets: Iterable[Optional[str]]) -> List[str]:
    """
    Returns the secret values and email addresses still readable in ``text``.

    Used by tests and diagnostics to confirm a log file holds no raw material.
    """
    leaked = [secret for secret in secrets if secret and secret in text]
    leaked.extend(match.group(0) for match in _EMAIL_PATTERN.finditer(text))
    return leaked


__all__ = [
    "VISIBLE_SECRET_SUFFIX",
    "mask_secret",
    "mask_email",
    "mask_emails",
    "mask_secrets",
    "mask_message",
    "find_unmasked",
]
