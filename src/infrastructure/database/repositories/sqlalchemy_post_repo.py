"""SQLAlchemy implementation of Post repository."""

from datetime import datetime
from typing import Any
from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from domain.entities.post import Comment, Like, Post
from infrastructure.database.models import PostModel


class SQLAlchemyPostRepository:
    """SQLAlchemy implementation of IPostRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, id: UUID) -> Post | None:
        """Get a post by ID."""
        model = await self._get_model(id)
        return self._to_entity(model) if model else None

    async def get_all(self) -> list[Post]:
        """Get all posts, most recent first."""
        stmt = select(PostModel).order_by(PostModel.date.desc())
        result = await self._session.execute(stmt)
        return [self._to_entity(model) for model in result.scalars()]

    async def create(self, post: Post) -> Post:
        """Create a new post."""
        model = PostModel(
            id=post.id,
            user_id=post.user_id,
            text=post.text,
            name=post.name,
            avatar_url=post.avatar_url,
            date=post.date,
            likes=[self._like_to_dict(like) for like in post.likes],
            comments=[self._comment_to_dict(c) for c in post.comments],
        )
        self._session.add(model)
        await self._session.flush()
        await self._session.refresh(model)
        return self._to_entity(model)

    async def update(self, post: Post) -> Post:
        """Write the likes and comments lists back."""
        model = await self._get_model(post.id)

        if not model:
            raise ValueError(f"Post {post.id} not found")

        model.likes = [self._like_to_dict(like) for like in post.likes]
        model.comments = [self._comment_to_dict(c) for c in post.comments]

        await self._session.flush()
        await self._session.refresh(model)
        return self._to_entity(model)

    async def delete(self, id: UUID) -> bool:
        """Delete a post."""
        stmt = delete(PostModel).where(PostModel.id == id)
        result = await self._session.execute(stmt)
        await self._session.flush()
        return bool(result.rowcount)

    async def delete_for_user(self, user_id: UUID) -> int:
        """Delete every post written by a user."""
        stmt = delete(PostModel).where(PostModel.user_id == user_id)
        result = await self._session.execute(stmt)
        await self._session.flush()
        return result.rowcount or 0

    async def _get_model(self, id: UUID) -> PostModel | None:
        stmt = select(PostModel).where(PostModel.id == id)
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    def _to_entity(self, model: PostModel) -> Post:
        """Convert ORM model to domain entity."""
        return Post(
            id=model.id,
            user_id=model.user_id,
            text=model.text,
            name=model.name,
            avatar_url=model.avatar_url,
            date=model.date,
            likes=[Like(user_id=UUID(d["user"])) for d in model.likes or []],
            comments=[self._comment_from_dict(d) for d in model.comments or []],
        )

    @staticmethod
    def _like_to_dict(like: Like) -> dict[str, Any]:
        return {"user": str(like.user_id)}

    @staticmethod
    def _comment_to_dict(comment: Comment) -> dict[str, Any]:
        return {
            "id": str(comment.id),
            "user": str(comment.user_id),
            "text": comment.text,
            "name": comment.name,
            "avatar_url": comment.avatar_url,
            "date": comment.date.isoformat(),
        }

    @staticmethod
    def _comment_from_dict(data: dict[str, Any]) -> Comment:
        return Comment(
            id=UUID(data["id"]),
            user_id=UUID(data["user"]),
            text=data["text"],
            name=data["name"],
            avatar_url=data.get("avatar_url"),
            date=datetime.fromisoformat(data["date"]),
        )
