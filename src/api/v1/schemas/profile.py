"""Pydantic schemas for Profile API."""

from datetime import date, datetime
from uuid import UUID

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from api.v1.schemas.user import UserSummaryResponse
from domain.entities.profile import (
    EducationEntry,
    ExperienceEntry,
    ProfilePatch,
    SocialLinks,
    normalize_skills,
)


def _blank_to_none(value: str | None) -> str | None:
    if value is None:
        return None
    value = value.strip()
    return value or None


class SocialLinksSchema(BaseModel):
    """Social network links."""

    model_config = ConfigDict(from_attributes=True)

    youtube: str | None = Field(None, max_length=500)
    twitter: str | None = Field(None, max_length=500)
    facebook: str | None = Field(None, max_length=500)
    linkedin: str | None = Field(None, max_length=500)
    instagram: str | None = Field(None, max_length=500)


class ProfileUpsert(BaseModel):
    """Schema for creating or updating a Profile.

    ``skills`` accepts a comma-separated string or a list of strings.
    """

    status: str = Field(..., max_length=100)
    skills: str | list[str]
    company: str | None = Field(None, max_length=255)
    website: str | None = Field(None, max_length=500)
    location: str | None = Field(None, max_length=255)
    bio: str | None = Field(None, max_length=2000)
    github_username: str | None = Field(
        None,
        max_length=100,
        validation_alias=AliasChoices("github_username", "githubUsername", "githubusername"),
    )
    social: SocialLinksSchema | None = None

    @field_validator("status")
    @classmethod
    def validate_status(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Status is required")
        return v

    @field_validator("skills")
    @classmethod
    def validate_skills(cls, v: str | list[str]) -> list[str]:
        skills = normalize_skills(v)
        if not skills:
            raise ValueError("At least one skill is required")
        return skills

    def to_patch(self) -> ProfilePatch:
        """Blank or missing fields become "not supplied"."""
        social = None
        if self.social is not None:
            social = SocialLinks(
                youtube=_blank_to_none(self.social.youtube),
                twitter=_blank_to_none(self.social.twitter),
                facebook=_blank_to_none(self.social.facebook),
                linkedin=_blank_to_none(self.social.linkedin),
                instagram=_blank_to_none(self.social.instagram),
            )
        return ProfilePatch(
            status=self.status,
            skills=list(self.skills),
            company=_blank_to_none(self.company),
            website=_blank_to_none(self.website),
            location=_blank_to_none(self.location),
            bio=_blank_to_none(self.bio),
            github_username=_blank_to_none(self.github_username),
            social=social,
        )


class ExperienceCreate(BaseModel):
    """Schema for adding an experience entry (``from``/``to`` on the wire)."""

    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)

    title: str = Field(..., min_length=1, max_length=255)
    company: str = Field(..., min_length=1, max_length=255)
    location: str | None = Field(None, max_length=255)
    from_date: date = Field(..., alias="from")
    to_date: date | None = Field(None, alias="to")
    current: bool = False
    description: str | None = Field(None, max_length=2000)

    def to_entry(self) -> ExperienceEntry:
        return ExperienceEntry(
            title=self.title,
            company=self.company,
            location=self.location or None,
            from_date=self.from_date,
            to_date=self.to_date,
            current=self.current,
            description=self.description or None,
        )


class EducationCreate(BaseModel):
    """Schema for adding an education entry (``fieldofstudy``, ``from``/``to`` on the wire)."""

    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)

    school: str = Field(..., min_length=1, max_length=255)
    degree: str = Field(..., min_length=1, max_length=255)
    field_of_study: str = Field(..., alias="fieldofstudy", min_length=1, max_length=255)
    from_date: date = Field(..., alias="from")
    to_date: date | None = Field(None, alias="to")
    current: bool = False
    description: str | None = Field(None, max_length=2000)

    def to_entry(self) -> EducationEntry:
        return EducationEntry(
            school=self.school,
            degree=self.degree,
            field_of_study=self.field_of_study,
            from_date=self.from_date,
            to_date=self.to_date,
            current=self.current,
            description=self.description or None,
        )


class ExperienceResponse(BaseModel):
    """Schema for an experience entry."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    title: str
    company: str
    location: str | None = None
    from_date: date = Field(serialization_alias="from")
    to_date: date | None = Field(None, serialization_alias="to")
    current: bool
    description: str | None = None


class EducationResponse(BaseModel):
    """Schema for an education entry."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    school: str
    degree: str
    field_of_study: str = Field(serialization_alias="fieldofstudy")
    from_date: date = Field(serialization_alias="from")
    to_date: date | None = Field(None, serialization_alias="to")
    current: bool
    description: str | None = None


class ProfileResponse(BaseModel):
    """Schema for Profile response."""

    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={
            "example": {
                "id": "123e4567-e89b-12d3-a456-426614174000",
                "user_id": "456e4567-e89b-12d3-a456-426614174000",
                "user": {
                    "id": "456e4567-e89b-12d3-a456-426614174000",
                    "name": "Jane Doe",
                    "avatar_url": "https://www.gravatar.com/avatar/abc?s=200&r=pg&d=mm",
                },
                "status": "Senior Developer",
                "skills": ["python", "fastapi", "postgres"],
                "company": "Acme",
                "social": {"twitter": "https://twitter.com/jane"},
                "experience": [],
                "education": [],
                "created_at": "2026-01-28T10:00:00",
                "updated_at": "2026-01-28T10:00:00",
            }
        },
    )

    id: UUID
    user_id: UUID
    user: UserSummaryResponse | None = None
    status: str
    skills: list[str]
    company: str | None = None
    website: str | None = None
    location: str | None = None
    bio: str | None = None
    github_username: str | None = None
    social: SocialLinksSchema
    experience: list[ExperienceResponse]
    education: list[EducationResponse]
    created_at: datetime
    updated_at: datetime
