"""Profile domain entity and its nested sub-documents."""

from dataclasses import dataclass, field, fields, replace
from datetime import date, datetime
from uuid import UUID, uuid4

from domain.entities.user import UserSummary


def normalize_skills(skills: str | list[str]) -> list[str]:
    """Turn a comma-delimited string or a list into trimmed, non-empty skills.

    >>> normalize_skills("js, node , react")
    ['js', 'node', 'react']
    """
    if isinstance(skills, str):
        skills = skills.split(",")
    return [skill.strip() for skill in skills if skill and skill.strip()]


@dataclass
class SocialLinks:
    """Social network links; every field is optional."""

    youtube: str | None = None
    twitter: str | None = None
    facebook: str | None = None
    linkedin: str | None = None
    instagram: str | None = None

    def merge(self, other: "SocialLinks") -> "SocialLinks":
        """Return a copy with every link set in ``other`` applied on top."""
        updates = {
            f.name: getattr(other, f.name)
            for f in fields(other)
            if getattr(other, f.name) is not None
        }
        return replace(self, **updates)

    def to_dict(self) -> dict[str, str]:
        return {f.name: getattr(self, f.name) for f in fields(self) if getattr(self, f.name)}


@dataclass
class ExperienceEntry:
    """A job held by the profile owner."""

    title: str
    company: str
    from_date: date
    id: UUID = field(default_factory=uuid4)
    location: str | None = None
    to_date: date | None = None
    current: bool = False
    description: str | None = None


@dataclass
class EducationEntry:
    """A school attended by the profile owner."""

    school: str
    degree: str
    field_of_study: str
    from_date: date
    id: UUID = field(default_factory=uuid4)
    to_date: date | None = None
    current: bool = False
    description: str | None = None


@dataclass
class ProfilePatch:
    """Partial profile input. ``None`` means the field was not supplied."""

    status: str | None = None
    skills: list[str] | None = None
    company: str | None = None
    website: str | None = None
    location: str | None = None
    bio: str | None = None
    github_username: str | None = None
    social: SocialLinks | None = None


@dataclass
class Profile:
    """Domain entity for a user's developer profile (one per user)."""

    user_id: UUID
    status: str
    skills: list[str]
    id: UUID = field(default_factory=uuid4)
    company: str | None = None
    website: str | None = None
    location: str | None = None
    bio: str | None = None
    github_username: str | None = None
    social: SocialLinks = field(default_factory=SocialLinks)
    experience: list[ExperienceEntry] = field(default_factory=list)
    education: list[EducationEntry] = field(default_factory=list)
    created_at: datetime = field(default_factory=datetime.utcnow)
    updated_at: datetime = field(default_factory=datetime.utcnow)

    @classmethod
    def from_patch(cls, user_id: UUID, patch: ProfilePatch) -> "Profile":
        """Build a new profile; the caller has checked status and skills."""
        profile = cls(user_id=user_id, status=patch.status or "", skills=list(patch.skills or []))
        profile.apply(patch)
        return profile

    def apply(self, patch: ProfilePatch) -> None:
        """Sparse update: copy every supplied field, leave the rest untouched."""
        for name in (
            "status",
            "company",
            "website",
            "location",
            "bio",
            "github_username",
        ):
            value = getattr(patch, name)
            if value is not None:
                setattr(self, name, value)
        if patch.skills is not None:
            self.skills = list(patch.skills)
        if patch.social is not None:
            self.social = self.social.merge(patch.social)
        self.updated_at = datetime.utcnow()

    def add_experience(self, entry: ExperienceEntry) -> None:
        """Insert at the head so the newest entry comes first."""
        self.experience.insert(0, entry)
        self.updated_at = datetime.utcnow()

    def remove_experience(self, entry_id: UUID) -> bool:
        """Remove the entry with ``entry_id``; returns False if there was none."""
        for index, entry in enumerate(self.experience):
            if entry.id == entry_id:
                del self.experience[index]
                self.updated_at = datetime.utcnow()
                return True
        return False

    def add_education(self, entry: EducationEntry) -> None:
        """Insert at the head so the newest entry comes first."""
        self.education.insert(0, entry)
        self.updated_at = datetime.utcnow()

    def remove_education(self, entry_id: UUID) -> bool:
        """Remove the entry with ``entry_id``; returns False if there was none."""
        for index, entry in enumerate(self.education):
            if entry.id == entry_id:
                del self.education[index]
                self.updated_at = datetime.utcnow()
                return True
        return False

    def __post_init__(self) -> None:
        """Ensure updated_at is always at least as recent as created_at."""
        if self.updated_at < self.created_at:
            self.updated_at = self.created_at


@dataclass(frozen=True, slots=True)
class ProfileWithOwner:
    """Read-only value object: a Profile bundled with its owner's public fields."""

    profile: Profile
    owner: UserSummary | None
