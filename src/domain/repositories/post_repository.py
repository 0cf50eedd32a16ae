"""Post repository protocol."""

from typing import Protocol
from uuid import UUID

from domain.entities.post import Post


class IPostRepository(Protocol):
    """Repository interface for Post documents."""

    async def get(self, id: UUID) -> Post | None:
        """Get a post by ID."""
        ...

    async def get_all(self) -> list[Post]:
        """Get every post, newest first."""
        ...

    async def create(self, post: Post) -> Post:
        """Create a new post."""
        ...

    async def update(self, post: Post) -> Post:
        """Replace the stored likes and comments with those of ``post``."""
        ...

    async def delete(self, id: UUID) -> bool:
        """Delete a post and return success status."""
        ...

    async def delete_for_user(self, user_id: UUID) -> int:
        """Delete every post owned by a user, returning how many went."""
        ...
