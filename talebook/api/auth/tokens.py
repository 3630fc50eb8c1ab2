"""Bearer tokens that carry the username as the tale author identity."""

import os
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt

# Secret key for signing tokens - must be set in production
SECRET_KEY = os.getenv("JWT_SECRET", "dev-secret-change-in-production")
ALGORITHM = "HS256"
ACCESS_TOKEN_EXPIRE_DAYS = 30


def create_access_token(username: str, expires_delta: Optional[timedelta] = None) -> str:
    """Issue a signed token whose ``sub`` is the username.

    The same string is stored as ``author`` on tales and added to
    ``liked_by``, so ownership checks compare it directly.
    """
    issued_at = datetime.now(timezone.utc)
    expires_at = issued_at + (expires_delta or timedelta(days=ACCESS_TOKEN_EXPIRE_DAYS))
    return jwt.encode(
        {"sub": username, "iat": issued_at, "exp": expires_at},
        SECRET_KEY,
        algorithm=ALGORITHM,
    )


def verify_token(token: str) -> Optional[dict]:
    """Decoded claims, or None for a bad signature, malformed or expired token."""
    try:
        return jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])
    except jwt.InvalidTokenError:
        return None


def username_from_token(token: str) -> Optional[str]:
    """The username a valid token was issued to, or None."""
    claims = verify_token(token)
    if not claims:
        return None
    return claims.get("sub") or None
