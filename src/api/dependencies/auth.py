"""Resolve the caller's identity from the request headers."""

from typing import Annotated

from fastapi import Depends, Header
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from core.exceptions import AuthenticationError, ErrorCode
from infrastructure.auth.jwt_provider import JWTAuthProvider
from infrastructure.auth.provider import IAuthProvider, TokenUser

# auto_error=False: a missing header is reported by get_current_user in our error shape
bearer_scheme = HTTPBearer(auto_error=False)

_auth_provider: JWTAuthProvider | None = None


def get_auth_provider() -> IAuthProvider:
    """Process-wide token provider, created on first use."""
    global _auth_provider
    if _auth_provider is None:
        _auth_provider = JWTAuthProvider()
    return _auth_provider


def _extract_token(
    credentials: HTTPAuthorizationCredentials | None,
    x_auth_token: str | None,
) -> str | None:
    """Prefer ``Authorization: Bearer``, fall back to the legacy ``x-auth-token`` header."""
    if credentials:
        return credentials.credentials
    return x_auth_token or None


async def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
    x_auth_token: Annotated[str | None, Header()] = None,
    auth_provider: IAuthProvider = Depends(get_auth_provider),
) -> TokenUser:
    """The authenticated caller; raises 401 when the token is missing or invalid."""
    token = _extract_token(credentials, x_auth_token)
    if not token:
        raise AuthenticationError("No token, authorization denied", ErrorCode.UNAUTHORIZED)

    user = await auth_provider.validate_token(token)
    if user is None:
        raise AuthenticationError("Token is not valid", ErrorCode.INVALID_TOKEN)
    return user


CurrentUser = Annotated[TokenUser, Depends(get_current_user)]
