"""
Bearer tokens carrying the page owner.

The owner identity is the "sub" claim of an HS256 JWT signed with
LINKHUB_SECRET_KEY. Issuing tokens belongs to the identity provider;
create_access_token exists for local development and tests.
"""

import os
from datetime import UTC, datetime, timedelta
from typing import Any, cast

from jose import jwt

SECRET_KEY = os.environ.get("LINKHUB_SECRET_KEY", "dev-secret-unsafe")
ALGORITHM = "HS256"
DEFAULT_TOKEN_TTL = timedelta(minutes=15)


def create_access_token(
    data: dict[str, Any],
    expires_delta: timedelta | None = None,
    now_utc: datetime | None = None,
) -> str:
    """
    Sign a token for the given claims.

    Args:
        data: Claims to encode (owner goes in "sub")
        expires_delta: Lifetime, DEFAULT_TOKEN_TTL if omitted
        now_utc: Issue time (for testing/determinism). Defaults to datetime.now(UTC).
    """
    issued_at = now_utc if now_utc is not None else datetime.now(UTC)
    claims = {**data, "exp": issued_at + (expires_delta or DEFAULT_TOKEN_TTL)}
    encoded: str = jwt.encode(claims, SECRET_KEY, algorithm=ALGORITHM)
    return encoded


def decode_access_token(token: str) -> dict[str, Any] | None:
    """Verified claims, or None for a bad signature, expired or malformed token."""
    try:
        return cast(dict[str, Any], jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM]))
    except jwt.JWTError:
        return None


def owner_from_token(token: str) -> str | None:
    """Owner named by a valid token, or None."""
    claims = decode_access_token(token)
    if claims is None:
        return None
    owner = claims.get("sub")
    if not isinstance(owner, str) or not owner:
        return None
    return owner
