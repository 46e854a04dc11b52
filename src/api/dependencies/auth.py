"""Authentication dependencies for FastAPI."""

from typing import Annotated

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from core.exceptions import AuthenticationError, ErrorCode
from core.rate_limit import CALLER_STATE_ATTR
from infrastructure.auth.jwt_provider import JWTAuthProvider
from infrastructure.auth.provider import AuthenticatedKey

bearer = HTTPBearer(auto_error=False)

_auth_provider: JWTAuthProvider | None = None


def get_auth_provider() -> JWTAuthProvider:
    """Get or create the auth provider singleton."""
    global _auth_provider
    if _auth_provider is None:
        _auth_provider = JWTAuthProvider()
    return _auth_provider


async def get_current_key(
    request: Request,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer)],
    auth_provider: JWTAuthProvider = Depends(get_auth_provider),
) -> AuthenticatedKey:
    """
    Resolve the key the caller has proven control of.

    The key is also recorded on ``request.state`` so write limits are
    counted against it.

    Raises:
        AuthenticationError: If no token provided or token is invalid
    """
    if not credentials:
        raise AuthenticationError(
            message="Authorization header required",
            error_code=ErrorCode.UNAUTHORIZED,
        )

    proven = await auth_provider.validate_token(credentials.credentials)
    if not proven:
        raise AuthenticationError(
            message="Invalid or expired token",
            error_code=ErrorCode.INVALID_TOKEN,
        )

    setattr(request.state, CALLER_STATE_ATTR, proven.key.hex())
    return proven


CurrentKey = Annotated[AuthenticatedKey, Depends(get_current_key)]
