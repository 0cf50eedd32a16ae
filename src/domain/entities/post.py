"""Post domain entity with its likes and comments."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID, uuid4


@dataclass
class Like:
    """A single user's like on a post."""

    user_id: UUID


@dataclass
class Comment:
    """A comment on a post. ``name``/``avatar_url`` are snapshots of the author."""

    user_id: UUID
    text: str
    name: str
    id: UUID = field(default_factory=uuid4)
    avatar_url: str | None = None
    date: datetime = field(default_factory=datetime.utcnow)


@dataclass
class Post:
    """Domain entity for a feed post.

    ``likes`` holds at most one entry per user; both ``likes`` and
    ``comments`` are kept newest first.
    """

    user_id: UUID
    text: str
    name: str
    id: UUID = field(default_factory=uuid4)
    avatar_url: str | None = None
    date: datetime = field(default_factory=datetime.utcnow)
    likes: list[Like] = field(default_factory=list)
    comments: list[Comment] = field(default_factory=list)

    def is_liked_by(self, user_id: UUID) -> bool:
        return any(like.user_id == user_id for like in self.likes)

    def add_like(self, user_id: UUID) -> None:
        """Prepend a like; the caller checks ``is_liked_by`` first."""
        self.likes.insert(0, Like(user_id=user_id))

    def remove_like(self, user_id: UUID) -> bool:
        for index, like in enumerate(self.likes):
            if like.user_id == user_id:
                del self.likes[index]
                return True
        return False

    def add_comment(self, comment: Comment) -> None:
        self.comments.insert(0, comment)

    def find_comment(self, comment_id: UUID) -> Comment | None:
        return next((c for c in self.comments if c.id == comment_id), None)

    def remove_comment(self, comment_id: UUID) -> bool:
        for index, comment in enumerate(self.comments):
            if comment.id == comment_id:
                del self.comments[index]
                return True
        return False
