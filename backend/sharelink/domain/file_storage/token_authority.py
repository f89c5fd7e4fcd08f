"""
Token Authority

Derives and verifies access tokens for stored objects.

A token is the hex-encoded HMAC-SHA256 of the object name keyed by a shared
secret. Tokens are never persisted: verification re-derives the expected
token from the object name, so it needs no lookup and no per-token state.
"""

import hashlib
import hmac
import os
from typing import Optional

from sharelink.domain.errors import ConfigurationError

TOKEN_LENGTH = hashlib.sha256().digest_size * 2


def derive_token(secret: str, object_name: str) -> str:
    """
    Derive the access token for an object name.

    Args:
        secret: Shared secret used as the HMAC key
        object_name: Stored object name

    Returns:
        64 character lowercase hex digest

    Raises:
        ConfigurationError: If the secret is empty or unset
    """
    if not secret:
        raise ConfigurationError("missing SECRET_TOKEN")

    return hmac.new(
        secret.encode("utf-8"), object_name.encode("utf-8"), hashlib.sha256
    ).hexdigest()


def verify_token(secret: str, object_name: str, presented_token: str) -> bool:
    """
    Check a presented token against the one derived for ``object_name``.

    Args:
        secret: Shared secret used as the HMAC key
        object_name: Claimed object name
        presented_token: Token supplied by the client

    Returns:
        True if the tokens match, False otherwise

    Raises:
        ConfigurationError: If the secret is empty or unset
    """
    expected_token = derive_token(secret, object_name)

    if not presented_token or not isinstance(presented_token, str):
        return False

    # Use constant-time comparison to prevent timing attacks
    return hmac.compare_digest(
        presented_token.encode("utf-8"), expected_token.encode("utf-8")
    )


class TokenAuthority:
    """
    Issues and verifies object access tokens with a bound secret.

    The secret is resolved once at construction (explicit argument first,
    then the SECRET_TOKEN environment variable). An empty secret is accepted
    here and reported as a ConfigurationError on first use.
    """

    def __init__(self, secret: Optional[str] = None):
        """
        Initialize TokenAuthority.

        Args:
            secret: Shared secret (uses SECRET_TOKEN env var if not provided)
        """
        self._secret = secret if secret is not None else os.getenv("SECRET_TOKEN", "")

    @property
    def is_configured(self) -> bool:
        """True when a non-empty secret is available."""
        return bool(self._secret)

    def derive_token(self, object_name: str) -> str:
        return derive_token(self._secret, object_name)

    def verify_token(self, object_name: str, presented_token: str) -> bool:
        return verify_token(self._secret, object_name, presented_token)
