"""
JWT token creation.

Tokens are signed with RS256: only this application holds the private key,
and verification needs just the public key.

Token structure (claims):
    - ``email`` -- identity of the authenticated user.  Every protected
      endpoint resolves the caller from this claim.
    - ``iat``   -- issued-at timestamp (UTC epoch seconds).
    - ``exp``   -- expiration timestamp (UTC epoch seconds).
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any

import jwt

ALGORITHM = "RS256"
REQUIRED_TOKEN_CLAIMS = ["email", "iat", "exp"]


def create_token(email: str, private_key: str, expiry_hours: int) -> str:
    """
    Create an RS256-signed JWT for *email*.

    Args:
        email: Identity of the authenticated user.  Must be non-blank.
        private_key: RSA private key in PEM format.
        expiry_hours: Hours from now until the token expires.

    Returns:
        A compact JWS string suitable for an ``Authorization: Bearer``
        header.

    Raises:
        ValueError: If *email* is blank.
    """
    if not isinstance(email, str) or not email.strip():
        raise ValueError("email must be a non-empty string")

    now = datetime.now(timezone.utc)
    expires_at = now + timedelta(hours=int(expiry_hours))

    payload: dict[str, Any] = {
        "email": email,
        # NumericDate per RFC 7519: integer seconds since the epoch
        "iat": int(now.timestamp()),
        "exp": int(expires_at.timestamp()),
    }
    return jwt.encode(payload, private_key, algorithm=ALGORITHM)
