"""SQLAlchemy implementation of Profile repository."""

from datetime import date
from typing import Any
from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from core.exceptions import ProfileAlreadyExistsError
from domain.entities.profile import EducationEntry, ExperienceEntry, Profile, SocialLinks
from infrastructure.database.models import ProfileModel


def _date_or_none(value: str | None) -> date | None:
    return date.fromisoformat(value) if value else None


class SQLAlchemyProfileRepository:
    """SQLAlchemy implementation of IProfileRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_by_user(self, user_id: UUID) -> Profile | None:
        """Get the profile owned by a user."""
        model = await self._get_model(user_id)
        return self._to_entity(model) if model else None

    async def get_all(self) -> list[Profile]:
        """Get every profile, oldest first."""
        stmt = select(ProfileModel).order_by(ProfileModel.created_at)
        result = await self._session.execute(stmt)
        return [self._to_entity(model) for model in result.scalars()]

    async def create(self, profile: Profile) -> Profile:
        """Create a new profile.

        Raises ProfileAlreadyExistsError when the user already has one; the
        caller must roll back before reusing the session.
        """
        model = ProfileModel(id=profile.id, user_id=profile.user_id, created_at=profile.created_at)
        self._write(model, profile)
        self._session.add(model)
        try:
            await self._session.flush()
        except IntegrityError as e:
            raise ProfileAlreadyExistsError(str(profile.user_id)) from e
        await self._session.refresh(model)
        return self._to_entity(model)

    async def update(self, profile: Profile) -> Profile:
        """Write the whole profile document back."""
        model = await self._get_model(profile.user_id)

        if not model:
            raise ValueError(f"Profile for user {profile.user_id} not found")

        self._write(model, profile)
        await self._session.flush()
        await self._session.refresh(model)
        return self._to_entity(model)

    async def delete_by_user(self, user_id: UUID) -> bool:
        """Delete the profile owned by a user."""
        stmt = delete(ProfileModel).where(ProfileModel.user_id == user_id)
        result = await self._session.execute(stmt)
        await self._session.flush()
        return bool(result.rowcount)

    async def _get_model(self, user_id: UUID) -> ProfileModel | None:
        stmt = select(ProfileModel).where(ProfileModel.user_id == user_id)
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    def _write(self, model: ProfileModel, entity: Profile) -> None:
        """Copy entity fields onto the ORM model (JSON columns get fresh lists)."""
        model.status = entity.status
        model.company = entity.company
        model.website = entity.website
        model.location = entity.location
        model.bio = entity.bio
        model.github_username = entity.github_username
        model.skills = list(entity.skills)
        model.social = entity.social.to_dict()
        model.experience = [self._experience_to_dict(e) for e in entity.experience]
        model.education = [self._education_to_dict(e) for e in entity.education]
        model.updated_at = entity.updated_at

    def _to_entity(self, model: ProfileModel) -> Profile:
        """Convert ORM model to domain entity."""
        return Profile(
            id=model.id,
            user_id=model.user_id,
            status=model.status,
            skills=list(model.skills or []),
            company=model.company,
            website=model.website,
            location=model.location,
            bio=model.bio,
            github_username=model.github_username,
            social=SocialLinks(**(model.social or {})),
            experience=[self._experience_from_dict(d) for d in model.experience or []],
            education=[self._education_from_dict(d) for d in model.education or []],
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    @staticmethod
    def _experience_to_dict(entry: ExperienceEntry) -> dict[str, Any]:
        return {
            "id": str(entry.id),
            "title": entry.title,
            "company": entry.company,
            "location": entry.location,
            "from": entry.from_date.isoformat(),
            "to": entry.to_date.isoformat() if entry.to_date else None,
            "current": entry.current,
            "description": entry.description,
        }

    @staticmethod
    def _experience_from_dict(data: dict[str, Any]) -> ExperienceEntry:
        return ExperienceEntry(
            id=UUID(data["id"]),
            title=data["title"],
            company=data["company"],
            location=data.get("location"),
            from_date=date.fromisoformat(data["from"]),
            to_date=_date_or_none(data.get("to")),
            current=bool(data.get("current", False)),
            description=data.get("description"),
        )

    @staticmethod
    def _education_to_dict(entry: EducationEntry) -> dict[str, Any]:
        return {
            "id": str(entry.id),
            "school": entry.school,
            "degree": entry.degree,
            "fieldofstudy": entry.field_of_study,
            "from": entry.from_date.isoformat(),
            "to": entry.to_date.isoformat() if entry.to_date else None,
            "current": entry.current,
            "description": entry.description,
        }

    @staticmethod
    def _education_from_dict(data: dict[str, Any]) -> EducationEntry:
        return EducationEntry(
            id=UUID(data["id"]),
            school=data["school"],
            degree=data["degree"],
            field_of_study=data["fieldofstudy"],
            from_date=date.fromisoformat(data["from"]),
            to_date=_date_or_none(data.get("to")),
            current=bool(data.get("current", False)),
            description=data.get("description"),
        )
