"""Post API routes."""

from uuid import UUID

from fastapi import APIRouter, Depends, Request, status

from api.dependencies.auth import CurrentUser
from api.v1.dependencies import get_post_service
from api.v1.schemas.common import MessageResponse
from api.v1.schemas.post import (
    CommentCreate,
    CommentResponse,
    LikeResponse,
    PostCreate,
    PostResponse,
)
from core.rate_limit import READ_LIMIT, WRITE_LIMIT, limiter
from domain.entities.post import Comment, Like, Post
from domain.services.post_service import PostService

router = APIRouter(prefix="/posts", tags=["posts"])


def _likes(likes: list[Like]) -> list[LikeResponse]:
    return [LikeResponse(user=like.user_id) for like in likes]


def _comments(comments: list[Comment]) -> list[CommentResponse]:
    return [
        CommentResponse(
            id=c.id,
            user=c.user_id,
            text=c.text,
            name=c.name,
            avatar_url=c.avatar_url,
            date=c.date,
        )
        for c in comments
    ]


def _to_response(post: Post) -> PostResponse:
    return PostResponse(
        id=post.id,
        user=post.user_id,
        text=post.text,
        name=post.name,
        avatar_url=post.avatar_url,
        date=post.date,
        likes=_likes(post.likes),
        comments=_comments(post.comments),
    )


@router.post(
    "",
    response_model=PostResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a post",
    responses={
        400: {"description": "Text is required"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def create_post(
    request: Request,
    body: PostCreate,
    user: CurrentUser,
    service: PostService = Depends(get_post_service),
) -> PostResponse:
    """Create a post as the authenticated user."""
    return _to_response(await service.create(user.id, body.text))


@router.get(
    "",
    response_model=list[PostResponse],
    summary="List all posts",
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def list_posts(
    request: Request,
    user: CurrentUser,
    service: PostService = Depends(get_post_service),
) -> list[PostResponse]:
    """Get every post, most recent first."""
    return [_to_response(post) for post in await service.get_all()]


@router.get(
    "/{post_id}",
    response_model=PostResponse,
    summary="Get a post",
    responses={
        404: {"description": "Post not found"},
    },
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def get_post(
    request: Request,
    post_id: UUID,
    user: CurrentUser,
    service: PostService = Depends(get_post_service),
) -> PostResponse:
    """Get a single post by ID."""
    return _to_response(await service.get_by_id(post_id))


@router.delete(
    "/{post_id}",
    response_model=MessageResponse,
    summary="Delete a post",
    responses={
        401: {"description": "Not the author of the post"},
        404: {"description": "Post not found"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def delete_post(
    request: Request,
    post_id: UUID,
    user: CurrentUser,
    service: PostService = Depends(get_post_service),
) -> MessageResponse:
    """Delete a post. Only its author may do this."""
    await service.delete(post_id, user.id)
    return MessageResponse(msg="Post removed")


@router.put(
    "/like/{post_id}",
    response_model=list[LikeResponse],
    summary="Like a post",
    responses={
        400: {"description": "Post already liked"},
        404: {"description": "Post not found"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def like_post(
    request: Request,
    post_id: UUID,
    user: CurrentUser,
    service: PostService = Depends(get_post_service),
) -> list[LikeResponse]:
    """Like a post. Each user can like a post once."""
    return _likes(await service.like(post_id, user.id))


@router.put(
    "/unlike/{post_id}",
    response_model=list[LikeResponse],
    summary="Unlike a post",
    responses={
        400: {"description": "Post has not been liked yet"},
        404: {"description": "Post not found"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def unlike_post(
    request: Request,
    post_id: UUID,
    user: CurrentUser,
    service: PostService = Depends(get_post_service),
) -> list[LikeResponse]:
    """Remove the authenticated user's like from a post."""
    return _likes(await service.unlike(post_id, user.id))


@router.put(
    "/comment/{post_id}",
    response_model=list[CommentResponse],
    summary="Comment on a post",
    responses={
        400: {"description": "Text is required"},
        404: {"description": "Post not found"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def add_comment(
    request: Request,
    post_id: UUID,
    body: CommentCreate,
    user: CurrentUser,
    service: PostService = Depends(get_post_service),
) -> list[CommentResponse]:
    """Add a comment at the top of the post's comments."""
    return _comments(await service.add_comment(post_id, user.id, body.text))


@router.delete(
    "/comment/{post_id}/{comment_id}",
    response_model=list[CommentResponse],
    summary="Delete a comment",
    responses={
        401: {"description": "Not the author of the comment"},
        404: {"description": "Post or comment not found"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def remove_comment(
    request: Request,
    post_id: UUID,
    comment_id: UUID,
    user: CurrentUser,
    service: PostService = Depends(get_post_service),
) -> list[CommentResponse]:
    """Delete a comment. Only its author may do this."""
    return _comments(await service.remove_comment(post_id, comment_id, user.id))
