"""Profile service layer: profile upsert, experience/education lists, account removal."""

from collections.abc import Callable
from uuid import UUID

import structlog

from core.exceptions import (
    ProfileAlreadyExistsError,
    ProfileNotFoundError,
    UserNotFoundError,
    ValidationError,
)
from domain.entities.profile import (
    EducationEntry,
    ExperienceEntry,
    Profile,
    ProfilePatch,
    ProfileWithOwner,
    normalize_skills,
)
from domain.entities.user import UserSummary
from domain.repositories.unit_of_work import IUnitOfWork

logger = structlog.get_logger()


def validate_patch(patch: ProfilePatch) -> None:
    """Status and skills are required on every upsert."""
    errors = []
    if not patch.status or not patch.status.strip():
        errors.append({"field": "status", "msg": "Status is required"})
    if patch.skills is not None:
        patch.skills = normalize_skills(patch.skills)
    if not patch.skills:
        errors.append({"field": "skills", "msg": "At least one skill is required"})
    if errors:
        raise ValidationError(errors)
    patch.status = patch.status.strip()  # type: ignore[union-attr]


class ProfileService:
    """Service layer for Profile business logic."""

    def __init__(self, uow_factory: Callable[[], IUnitOfWork]) -> None:
        self._uow_factory = uow_factory

    async def get_for_user(self, user_id: UUID) -> ProfileWithOwner:
        """Get the profile owned by ``user_id``."""
        async with self._uow_factory() as uow:
            profile = await uow.profiles.get_by_user(user_id)
            if not profile:
                raise ProfileNotFoundError(str(user_id), status_code=400)
            owner = await uow.users.get(user_id)
            return ProfileWithOwner(profile=profile, owner=UserSummary.of(owner) if owner else None)

    async def get_all(self) -> list[ProfileWithOwner]:
        """Get all profiles with their owners' names and avatars."""
        async with self._uow_factory() as uow:
            profiles = await uow.profiles.get_all()
            owners = await uow.users.get_many([p.user_id for p in profiles])
            return [
                ProfileWithOwner(
                    profile=profile,
                    owner=UserSummary.of(owners[profile.user_id])
                    if profile.user_id in owners
                    else None,
                )
                for profile in profiles
            ]

    async def upsert(self, user_id: UUID, patch: ProfilePatch) -> ProfileWithOwner:
        """Create the user's profile or apply a sparse update to it.

        The returned profile is the persisted state after the update.
        """
        validate_patch(patch)

        async with self._uow_factory() as uow:
            user = await uow.users.get(user_id)
            if not user:
                raise UserNotFoundError(str(user_id))

            profile = await uow.profiles.get_by_user(user_id)
            if profile:
                profile.apply(patch)
                saved = await uow.profiles.update(profile)
                event = "profile_updated"
            else:
                try:
                    saved = await uow.profiles.create(Profile.from_patch(user_id, patch))
                    event = "profile_created"
                except ProfileAlreadyExistsError:
                    # Lost a race with another first upsert; apply ours on top.
                    await uow.rollback()
                    profile = await self._require_profile(uow, user_id)
                    profile.apply(patch)
                    saved = await uow.profiles.update(profile)
                    event = "profile_updated"

            await uow.commit()

        logger.info(event, user_id=str(user_id), profile_id=str(saved.id))
        return ProfileWithOwner(profile=saved, owner=UserSummary.of(user))

    async def add_experience(self, user_id: UUID, entry: ExperienceEntry) -> ProfileWithOwner:
        """Prepend an experience entry."""
        async with self._uow_factory() as uow:
            profile = await self._require_profile(uow, user_id)
            profile.add_experience(entry)
            return await self._save(uow, profile)

    async def remove_experience(self, user_id: UUID, entry_id: UUID) -> ProfileWithOwner:
        """Remove an experience entry. Unknown ids leave the profile unchanged."""
        async with self._uow_factory() as uow:
            profile = await self._require_profile(uow, user_id)
            if not profile.remove_experience(entry_id):
                logger.info(
                    "experience_entry_not_found",
                    user_id=str(user_id),
                    entry_id=str(entry_id),
                )
                return await self._with_owner(uow, profile)
            return await self._save(uow, profile)

    async def add_education(self, user_id: UUID, entry: EducationEntry) -> ProfileWithOwner:
        """Prepend an education entry."""
        async with self._uow_factory() as uow:
            profile = await self._require_profile(uow, user_id)
            profile.add_education(entry)
            return await self._save(uow, profile)

    async def remove_education(self, user_id: UUID, entry_id: UUID) -> ProfileWithOwner:
        """Remove an education entry. Unknown ids leave the profile unchanged."""
        async with self._uow_factory() as uow:
            profile = await self._require_profile(uow, user_id)
            if not profile.remove_education(entry_id):
                logger.info(
                    "education_entry_not_found",
                    user_id=str(user_id),
                    entry_id=str(entry_id),
                )
                return await self._with_owner(uow, profile)
            return await self._save(uow, profile)

    async def delete_account(self, user_id: UUID) -> None:
        """Delete the user's posts, then profile, then the user record.

        Each step is committed on its own; a failure part-way leaves the
        earlier deletions in place.
        """
        async with self._uow_factory() as uow:
            deleted_posts = await uow.posts.delete_for_user(user_id)
            await uow.commit()
            logger.info("account_posts_deleted", user_id=str(user_id), count=deleted_posts)

            await uow.profiles.delete_by_user(user_id)
            await uow.commit()
            logger.info("account_profile_deleted", user_id=str(user_id))

            await uow.users.delete(user_id)
            await uow.commit()

        logger.info("account_deleted", user_id=str(user_id))

    async def _require_profile(self, uow: IUnitOfWork, user_id: UUID) -> Profile:
        profile = await uow.profiles.get_by_user(user_id)
        if not profile:
            raise ProfileNotFoundError(str(user_id))
        return profile

    async def _save(self, uow: IUnitOfWork, profile: Profile) -> ProfileWithOwner:
        saved = await uow.profiles.update(profile)
        await uow.commit()
        return await self._with_owner(uow, saved)

    async def _with_owner(self, uow: IUnitOfWork, profile: Profile) -> ProfileWithOwner:
        owner = await uow.users.get(profile.user_id)
        return ProfileWithOwner(profile=profile, owner=UserSummary.of(owner) if owner else None)
