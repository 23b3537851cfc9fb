"""
Session token issuing and verification.

Tokens are HS256-signed JSON Web Tokens.  They are stateless: nothing is
stored server-side, and a token is valid exactly when its signature checks
out against the configured secret and its ``exp`` claim lies in the future.

Token structure (claims):
    - ``username`` -- the authenticated identity.
    - ``iat``      -- *issued-at* timestamp (UTC epoch seconds).
    - ``exp``      -- *expiration* timestamp (UTC epoch seconds).
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from typing import Any

import jwt

logger = logging.getLogger(__name__)

DEFAULT_ALLOWED_ALGORITHMS = ["HS256"]
REQUIRED_TOKEN_CLAIMS = ["username", "iat", "exp"]


def create_token(
    username: str,
    secret_key: str,
    expiry_hours: int,
    algorithm: str = "HS256",
) -> str:
    """
    Create a signed JWT for *username* that expires *expiry_hours* from now.

    Args:
        username: Identity to embed as the token subject.
        secret_key: Shared HMAC secret used to sign the token.
        expiry_hours: Number of hours until the token expires.
        algorithm: JWS signing algorithm.

    Returns:
        A compact JWS string suitable for an ``Authorization: Bearer``
        header.

    Raises:
        ValueError: If *username* is blank.
    """
    if not isinstance(username, str) or not username.strip():
        raise ValueError("username must be a non-empty string")

    now = datetime.now(timezone.utc)
    expires_at = now + timedelta(hours=int(expiry_hours))

    payload: dict[str, Any] = {
        "username": username,
        "iat": int(now.timestamp()),
        "exp": int(expires_at.timestamp()),
    }
    return jwt.encode(payload, secret_key, algorithm=algorithm)


def verify_token(
    token: str,
    secret_key: str,
    algorithms: list[str] | None = None,
    leeway: int = 0,
) -> dict[str, Any] | None:
    """
    Decode and validate a JWT, returning the payload on success.

    Checks the signature, expiry, and presence of every required claim, and
    that ``username`` is a non-blank string.  A token is rejected once
    ``exp <= now - leeway``.

    Returns:
        The decoded payload, or ``None`` if verification fails for any
        reason.  Callers get no hint about *why* a token was rejected.
    """
    try:
        decoded = jwt.decode(
            token,
            secret_key,
            algorithms=algorithms or DEFAULT_ALLOWED_ALGORITHMS,
            options={"require": REQUIRED_TOKEN_CLAIMS},
            leeway=leeway,
        )
    except jwt.InvalidTokenError as exc:
        logger.debug("Token rejected: %s", type(exc).__name__)
        return None

    username = decoded.get("username")
    if not isinstance(username, str) or not username.strip():
        return None
    return decoded
