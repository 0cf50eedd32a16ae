"""Login and current-user routes."""

from fastapi import APIRouter, Depends, Request

from api.dependencies.auth import CurrentUser, get_auth_provider
from api.v1.dependencies import get_user_service
from api.v1.schemas.user import TokenResponse, UserLogin, UserResponse
from core.rate_limit import READ_LIMIT, WRITE_LIMIT, limiter
from domain.services.user_service import UserService
from infrastructure.auth.provider import IAuthProvider, TokenUser

router = APIRouter(prefix="/auth", tags=["auth"])


@router.get(
    "",
    response_model=UserResponse,
    summary="Get the authenticated user",
    responses={
        401: {"description": "Missing or invalid token"},
        404: {"description": "User no longer exists"},
    },
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def get_me(
    request: Request,
    user: CurrentUser,
    service: UserService = Depends(get_user_service),
) -> UserResponse:
    """Return the account behind the token, without its password hash."""
    account = await service.get_by_id(user.id)
    return UserResponse.model_validate(account)


@router.post(
    "",
    response_model=TokenResponse,
    summary="Log in",
    responses={
        400: {"description": "Invalid credentials"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def login(
    request: Request,
    body: UserLogin,
    service: UserService = Depends(get_user_service),
    auth_provider: IAuthProvider = Depends(get_auth_provider),
) -> TokenResponse:
    """Exchange email and password for a signed token."""
    account = await service.authenticate(body.email, body.password)
    token = auth_provider.create_token(TokenUser.of(account))
    return TokenResponse(token=token)
