"""Bearer token handling for the auth provider."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

import jwt

from snippetbox.core.config import settings
from snippetbox.core.exceptions import AuthenticationError


@dataclass(frozen=True)
class Identity:
    """A resolved, authenticated caller."""

    uid: str
    email: str


def create_access_token(
    uid: str,
    email: str,
    expires_delta: timedelta | None = None,
) -> str:
    """Issue a signed token carrying the caller's uid and email."""
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    )
    payload = {"sub": uid, "uid": uid, "email": email, "exp": expire}
    return jwt.encode(payload, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> Identity:
    """Verify a token and return the identity it carries.

    Raises:
        AuthenticationError: If the token is expired, malformed, or lacks a uid.
    """
    try:
        payload = jwt.decode(
            token,
            settings.jwt_secret_key,
            algorithms=[settings.jwt_algorithm],
        )
    except jwt.ExpiredSignatureError:
        raise AuthenticationError("Token has expired")
    except jwt.InvalidTokenError:
        raise AuthenticationError("Could not validate credentials")

    uid = payload.get("uid") or payload.get("sub")
    if not uid:
        raise AuthenticationError("Could not validate credentials")

    return Identity(uid=str(uid), email=str(payload.get("email") or ""))
