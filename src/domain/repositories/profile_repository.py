"""Profile repository protocol."""

from typing import Protocol
from uuid import UUID

from domain.entities.profile import Profile


class IProfileRepository(Protocol):
    """Repository interface for Profile documents."""

    async def get_by_user(self, user_id: UUID) -> Profile | None:
        """Get the profile owned by a user."""
        ...

    async def get_all(self) -> list[Profile]:
        """Get every profile."""
        ...

    async def create(self, profile: Profile) -> Profile:
        """Create a new profile.

        Raises ProfileAlreadyExistsError if the user already owns one.
        """
        ...

    async def update(self, profile: Profile) -> Profile:
        """Replace the stored document with ``profile``."""
        ...

    async def delete_by_user(self, user_id: UUID) -> bool:
        """Delete the profile owned by a user."""
        ...
