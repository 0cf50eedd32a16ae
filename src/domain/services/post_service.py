"""Post service layer: posts, likes and comments."""

from collections.abc import Callable
from uuid import UUID

import structlog

from core.exceptions import (
    AuthorizationError,
    CommentNotFoundError,
    PostAlreadyLikedError,
    PostNotFoundError,
    PostNotLikedError,
    UserNotFoundError,
    ValidationError,
)
from domain.entities.post import Comment, Like, Post
from domain.entities.user import User
from domain.repositories.unit_of_work import IUnitOfWork

logger = structlog.get_logger()


def _require_text(text: str) -> str:
    text = (text or "").strip()
    if not text:
        raise ValidationError.for_field("text", "Text is required")
    return text


class PostService:
    """Service layer for Post business logic.

    Every mutation loads the post, changes it in memory and writes the
    whole document back. Concurrent writers to the same post are not
    coordinated; the last write wins.
    """

    def __init__(self, uow_factory: Callable[[], IUnitOfWork]) -> None:
        self._uow_factory = uow_factory

    async def create(self, author_id: UUID, text: str) -> Post:
        """Create a post, snapshotting the author's name and avatar."""
        text = _require_text(text)
        async with self._uow_factory() as uow:
            author = await self._require_user(uow, author_id)
            post = Post(
                user_id=author.id,
                text=text,
                name=author.name,
                avatar_url=author.avatar_url,
            )
            created = await uow.posts.create(post)
            await uow.commit()

        logger.info("post_created", post_id=str(created.id), user_id=str(author_id))
        return created

    async def get_all(self) -> list[Post]:
        """All posts, newest first."""
        async with self._uow_factory() as uow:
            return await uow.posts.get_all()  # type: ignore[no-any-return]

    async def get_by_id(self, post_id: UUID) -> Post:
        async with self._uow_factory() as uow:
            return await self._require_post(uow, post_id)

    async def delete(self, post_id: UUID, requester_id: UUID) -> None:
        """Delete a post. Only its author may do so."""
        async with self._uow_factory() as uow:
            post = await self._require_post(uow, post_id)
            if post.user_id != requester_id:
                raise AuthorizationError()

            await uow.posts.delete(post_id)
            await uow.commit()

        logger.info("post_deleted", post_id=str(post_id), user_id=str(requester_id))

    async def like(self, post_id: UUID, user_id: UUID) -> list[Like]:
        """Like a post once; returns the updated likes, newest first."""
        async with self._uow_factory() as uow:
            post = await self._require_post(uow, post_id)
            if post.is_liked_by(user_id):
                raise PostAlreadyLikedError(str(post_id))

            post.add_like(user_id)
            updated = await uow.posts.update(post)
            await uow.commit()
            return updated.likes

    async def unlike(self, post_id: UUID, user_id: UUID) -> list[Like]:
        """Withdraw a like; returns the updated likes."""
        async with self._uow_factory() as uow:
            post = await self._require_post(uow, post_id)
            if not post.remove_like(user_id):
                raise PostNotLikedError(str(post_id))

            updated = await uow.posts.update(post)
            await uow.commit()
            return updated.likes

    async def add_comment(self, post_id: UUID, user_id: UUID, text: str) -> list[Comment]:
        """Prepend a comment; returns the updated comments."""
        text = _require_text(text)
        async with self._uow_factory() as uow:
            author = await self._require_user(uow, user_id)
            post = await self._require_post(uow, post_id)

            post.add_comment(
                Comment(
                    user_id=author.id,
                    text=text,
                    name=author.name,
                    avatar_url=author.avatar_url,
                )
            )
            updated = await uow.posts.update(post)
            await uow.commit()
            return updated.comments

    async def remove_comment(
        self, post_id: UUID, comment_id: UUID, requester_id: UUID
    ) -> list[Comment]:
        """Remove a comment. Only its author may do so."""
        async with self._uow_factory() as uow:
            post = await self._require_post(uow, post_id)

            comment = post.find_comment(comment_id)
            if not comment:
                raise CommentNotFoundError(str(comment_id))
            if comment.user_id != requester_id:
                raise AuthorizationError()

            post.remove_comment(comment_id)
            updated = await uow.posts.update(post)
            await uow.commit()
            return updated.comments

    async def _require_post(self, uow: IUnitOfWork, post_id: UUID) -> Post:
        post = await uow.posts.get(post_id)
        if not post:
            raise PostNotFoundError(str(post_id))
        return post

    async def _require_user(self, uow: IUnitOfWork, user_id: UUID) -> User:
        user = await uow.users.get(user_id)
        if not user:
            raise UserNotFoundError(str(user_id))
        return user
