"""Profile API routes."""

from typing import Any
from uuid import UUID

from fastapi import APIRouter, Depends, Request

from api.dependencies.auth import CurrentUser
from api.v1.dependencies import get_github_client, get_profile_service
from api.v1.schemas.common import MessageResponse
from api.v1.schemas.profile import (
    EducationCreate,
    EducationResponse,
    ExperienceCreate,
    ExperienceResponse,
    ProfileResponse,
    ProfileUpsert,
    SocialLinksSchema,
)
from api.v1.schemas.user import UserSummaryResponse
from core.rate_limit import READ_LIMIT, WRITE_LIMIT, limiter
from domain.entities.profile import ProfileWithOwner
from domain.services.profile_service import ProfileService
from infrastructure.github.client import GitHubClient

router = APIRouter(prefix="/profile", tags=["profile"])


def _to_response(item: ProfileWithOwner) -> ProfileResponse:
    profile = item.profile
    return ProfileResponse(
        id=profile.id,
        user_id=profile.user_id,
        user=UserSummaryResponse.model_validate(item.owner) if item.owner else None,
        status=profile.status,
        skills=profile.skills,
        company=profile.company,
        website=profile.website,
        location=profile.location,
        bio=profile.bio,
        github_username=profile.github_username,
        social=SocialLinksSchema.model_validate(profile.social),
        experience=[ExperienceResponse.model_validate(e) for e in profile.experience],
        education=[EducationResponse.model_validate(e) for e in profile.education],
        created_at=profile.created_at,
        updated_at=profile.updated_at,
    )


@router.get(
    "/me",
    response_model=ProfileResponse,
    summary="Get my profile",
    responses={
        400: {"description": "There is no profile for the current user"},
    },
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def get_my_profile(
    request: Request,
    user: CurrentUser,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileResponse:
    """Get the authenticated user's profile."""
    return _to_response(await service.get_for_user(user.id))


@router.post(
    "",
    response_model=ProfileResponse,
    summary="Create or update my profile",
    responses={
        400: {"description": "Status or skills missing"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def upsert_profile(
    request: Request,
    body: ProfileUpsert,
    user: CurrentUser,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileResponse:
    """
    Create the profile on first call, update it afterwards.

    Only supplied fields are written; `social` links are merged one by one.
    """
    return _to_response(await service.upsert(user.id, body.to_patch()))


@router.get(
    "",
    response_model=list[ProfileResponse],
    summary="List all profiles",
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def list_profiles(
    request: Request,
    service: ProfileService = Depends(get_profile_service),
) -> list[ProfileResponse]:
    """Get every developer profile. Public."""
    return [_to_response(item) for item in await service.get_all()]


@router.get(
    "/user/{user_id}",
    response_model=ProfileResponse,
    summary="Get a profile by user ID",
    responses={
        400: {"description": "Profile not found"},
    },
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def get_profile_by_user(
    request: Request,
    user_id: UUID,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileResponse:
    """Get a user's profile. Public."""
    return _to_response(await service.get_for_user(user_id))


@router.delete(
    "",
    response_model=MessageResponse,
    summary="Delete my account",
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def delete_account(
    request: Request,
    user: CurrentUser,
    service: ProfileService = Depends(get_profile_service),
) -> MessageResponse:
    """Delete the user's posts, profile and account."""
    await service.delete_account(user.id)
    return MessageResponse(msg="User removed")


@router.put(
    "/experience",
    response_model=ProfileResponse,
    summary="Add an experience entry",
    responses={
        400: {"description": "Validation failed"},
        404: {"description": "No profile for the current user"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def add_experience(
    request: Request,
    body: ExperienceCreate,
    user: CurrentUser,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileResponse:
    """Add an experience entry at the top of the list."""
    return _to_response(await service.add_experience(user.id, body.to_entry()))


@router.delete(
    "/experience/{experience_id}",
    response_model=ProfileResponse,
    summary="Remove an experience entry",
    responses={
        404: {"description": "No profile for the current user"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def remove_experience(
    request: Request,
    experience_id: UUID,
    user: CurrentUser,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileResponse:
    """Remove an experience entry. Unknown IDs return the profile unchanged."""
    return _to_response(await service.remove_experience(user.id, experience_id))


@router.put(
    "/education",
    response_model=ProfileResponse,
    summary="Add an education entry",
    responses={
        400: {"description": "Validation failed"},
        404: {"description": "No profile for the current user"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def add_education(
    request: Request,
    body: EducationCreate,
    user: CurrentUser,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileResponse:
    """Add an education entry at the top of the list."""
    return _to_response(await service.add_education(user.id, body.to_entry()))


@router.delete(
    "/education/{education_id}",
    response_model=ProfileResponse,
    summary="Remove an education entry",
    responses={
        404: {"description": "No profile for the current user"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def remove_education(
    request: Request,
    education_id: UUID,
    user: CurrentUser,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileResponse:
    """Remove an education entry. Unknown IDs return the profile unchanged."""
    return _to_response(await service.remove_education(user.id, education_id))


@router.get(
    "/github/{username}",
    summary="List a GitHub user's repositories",
    responses={
        404: {"description": "No GitHub user found"},
        502: {"description": "GitHub unreachable"},
    },
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def get_github_repos(
    request: Request,
    username: str,
    client: GitHubClient = Depends(get_github_client),
) -> list[dict[str, Any]]:
    """Proxy the public repository list from GitHub."""
    return await client.list_repos(username)
