"""Request dependencies: the auth provider."""

from __future__ import annotations

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from snippetbox.core.exceptions import AuthenticationError
from snippetbox.core.logging import bind_request_context
from snippetbox.core.security import Identity, decode_access_token

bearer_scheme = HTTPBearer(auto_error=False)


async def get_current_identity(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> Identity:
    """Resolve the bearer token on the request to a user identity.

    Raises:
        AuthenticationError: If no token is present or it does not verify.
    """
    if credentials is None or not credentials.credentials:
        raise AuthenticationError()

    identity = decode_access_token(credentials.credentials)
    bind_request_context(user_id=identity.uid)
    return identity
