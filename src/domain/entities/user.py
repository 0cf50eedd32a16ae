"""User domain entity."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID, uuid4


@dataclass
class User:
    """Domain entity for a registered account."""

    name: str
    email: str
    password_hash: str
    id: UUID = field(default_factory=uuid4)
    avatar_url: str | None = None
    created_at: datetime = field(default_factory=datetime.utcnow)

    def __post_init__(self) -> None:
        """Normalize email for lookups."""
        self.email = self.email.strip().lower()


@dataclass(frozen=True, slots=True)
class UserSummary:
    """Read-only snapshot of the public user fields."""

    id: UUID
    name: str
    avatar_url: str | None = None

    @classmethod
    def of(cls, user: User) -> "UserSummary":
        return cls(id=user.id, name=user.name, avatar_url=user.avatar_url)
