"""User registration routes."""

from fastapi import APIRouter, Depends, Request, status

from api.dependencies.auth import get_auth_provider
from api.v1.dependencies import get_user_service
from api.v1.schemas.user import TokenResponse, UserRegister
from core.rate_limit import WRITE_LIMIT, limiter
from domain.services.user_service import UserService
from infrastructure.auth.provider import IAuthProvider, TokenUser

router = APIRouter(prefix="/users", tags=["users"])


@router.post(
    "",
    response_model=TokenResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register a user",
    responses={
        201: {"description": "User registered, token issued"},
        400: {"description": "Validation failed or user already exists"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def register_user(
    request: Request,
    body: UserRegister,
    service: UserService = Depends(get_user_service),
    auth_provider: IAuthProvider = Depends(get_auth_provider),
) -> TokenResponse:
    """Register a new account and return a signed token for it."""
    user = await service.register(name=body.name, email=body.email, password=body.password)
    token = auth_provider.create_token(TokenUser.of(user))
    return TokenResponse(token=token)
