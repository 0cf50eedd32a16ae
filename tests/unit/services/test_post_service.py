"""Unit tests for PostService."""

from uuid import UUID, uuid4

import pytest

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
from domain.services.post_service import PostService
from tests.unit.conftest import FakeUnitOfWork


@pytest.fixture
def service(uow: FakeUnitOfWork) -> PostService:
    return PostService(lambda: uow)


@pytest.fixture
def post(user: User) -> Post:
    return Post(user_id=user.id, text="First post", name=user.name, avatar_url=user.avatar_url)


@pytest.fixture
def stored(uow: FakeUnitOfWork, post: Post) -> Post:
    """Wire the post repository to serve and echo back ``post``."""
    uow.posts.get.return_value = post
    uow.posts.update.side_effect = lambda p: p
    return post


class TestCreate:
    @pytest.mark.asyncio
    async def test_snapshots_author(self, service: PostService, uow: FakeUnitOfWork, user: User):
        uow.users.get.return_value = user
        uow.posts.create.side_effect = lambda p: p

        post = await service.create(user.id, "  Hello world ")

        assert post.text == "Hello world"
        assert post.user_id == user.id
        assert post.name == "Jane Doe"
        assert post.avatar_url == "https://example.com/jane.png"
        assert post.likes == [] and post.comments == []
        assert uow.committed

    @pytest.mark.asyncio
    async def test_empty_text_rejected(self, service: PostService, uow: FakeUnitOfWork, user_id):
        with pytest.raises(ValidationError) as exc_info:
            await service.create(user_id, "   ")

        assert exc_info.value.details == [{"field": "text", "msg": "Text is required"}]
        uow.posts.create.assert_not_called()

    @pytest.mark.asyncio
    async def test_unknown_author(self, service: PostService, uow: FakeUnitOfWork, user_id):
        uow.users.get.return_value = None

        with pytest.raises(UserNotFoundError):
            await service.create(user_id, "Hello")


class TestRead:
    @pytest.mark.asyncio
    async def test_get_all_passes_through(self, service: PostService, uow: FakeUnitOfWork, post):
        uow.posts.get_all.return_value = [post]

        assert await service.get_all() == [post]

    @pytest.mark.asyncio
    async def test_get_by_id_missing(self, service: PostService, uow: FakeUnitOfWork):
        uow.posts.get.return_value = None

        with pytest.raises(PostNotFoundError) as exc_info:
            await service.get_by_id(uuid4())

        assert exc_info.value.status_code == 404
        assert exc_info.value.message == "Post does not exist."


class TestDelete:
    @pytest.mark.asyncio
    async def test_owner_can_delete(self, service: PostService, uow: FakeUnitOfWork, stored, user):
        await service.delete(stored.id, user.id)

        uow.posts.delete.assert_awaited_once_with(stored.id)
        assert uow.committed

    @pytest.mark.asyncio
    async def test_other_user_is_rejected(
        self, service: PostService, uow: FakeUnitOfWork, stored: Post, other_user_id: UUID
    ):
        with pytest.raises(AuthorizationError) as exc_info:
            await service.delete(stored.id, other_user_id)

        assert exc_info.value.status_code == 401
        uow.posts.delete.assert_not_called()
        assert not uow.committed


class TestLikes:
    @pytest.mark.asyncio
    async def test_like_then_like_again(
        self, service: PostService, uow: FakeUnitOfWork, stored: Post, other_user_id: UUID
    ):
        likes = await service.like(stored.id, other_user_id)
        assert likes == [Like(user_id=other_user_id)]

        with pytest.raises(PostAlreadyLikedError):
            await service.like(stored.id, other_user_id)

        assert [like.user_id for like in stored.likes] == [other_user_id]
        assert uow.commits == 1

    @pytest.mark.asyncio
    async def test_newest_like_first(
        self, service: PostService, stored: Post, user_id: UUID, other_user_id: UUID
    ):
        await service.like(stored.id, user_id)
        likes = await service.like(stored.id, other_user_id)

        assert [like.user_id for like in likes] == [other_user_id, user_id]

    @pytest.mark.asyncio
    async def test_unlike_removes_like(
        self, service: PostService, stored: Post, user_id: UUID, other_user_id: UUID
    ):
        stored.likes = [Like(user_id=other_user_id), Like(user_id=user_id)]

        likes = await service.unlike(stored.id, user_id)

        assert likes == [Like(user_id=other_user_id)]

    @pytest.mark.asyncio
    async def test_unlike_without_like(
        self, service: PostService, uow: FakeUnitOfWork, stored: Post, user_id: UUID
    ):
        with pytest.raises(PostNotLikedError) as exc_info:
            await service.unlike(stored.id, user_id)

        assert exc_info.value.message == "Post hasn't been liked yet."
        uow.posts.update.assert_not_called()

    @pytest.mark.asyncio
    async def test_like_missing_post(self, service: PostService, uow: FakeUnitOfWork, user_id):
        uow.posts.get.return_value = None

        with pytest.raises(PostNotFoundError):
            await service.like(uuid4(), user_id)


class TestComments:
    @pytest.mark.asyncio
    async def test_comments_are_newest_first(
        self, service: PostService, uow: FakeUnitOfWork, stored: Post, user: User
    ):
        uow.users.get.return_value = user

        await service.add_comment(stored.id, user.id, "c1")
        comments = await service.add_comment(stored.id, user.id, "c2")

        assert [c.text for c in comments] == ["c2", "c1"]
        assert comments[0].name == "Jane Doe"
        assert comments[0].avatar_url == user.avatar_url
        assert comments[0].id != comments[1].id

    @pytest.mark.asyncio
    async def test_empty_comment_rejected(self, service: PostService, stored: Post, user_id):
        with pytest.raises(ValidationError):
            await service.add_comment(stored.id, user_id, "")

    @pytest.mark.asyncio
    async def test_author_removes_comment(
        self, service: PostService, stored: Post, user_id: UUID
    ):
        keep = Comment(user_id=user_id, text="keep", name="Jane Doe")
        drop = Comment(user_id=user_id, text="drop", name="Jane Doe")
        stored.comments = [drop, keep]

        comments = await service.remove_comment(stored.id, drop.id, user_id)

        assert comments == [keep]

    @pytest.mark.asyncio
    async def test_unknown_comment(self, service: PostService, stored: Post, user_id: UUID):
        with pytest.raises(CommentNotFoundError) as exc_info:
            await service.remove_comment(stored.id, uuid4(), user_id)

        assert exc_info.value.status_code == 404

    @pytest.mark.asyncio
    async def test_post_owner_cannot_remove_others_comment(
        self,
        service: PostService,
        uow: FakeUnitOfWork,
        stored: Post,
        user_id: UUID,
        other_user_id: UUID,
    ):
        comment = Comment(user_id=other_user_id, text="mine", name="Other")
        stored.comments = [comment]

        with pytest.raises(AuthorizationError):
            await service.remove_comment(stored.id, comment.id, user_id)

        assert stored.comments == [comment]
        uow.posts.update.assert_not_called()
