"""Pydantic schemas for Post API."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class PostCreate(BaseModel):
    """Schema for creating a Post."""

    model_config = ConfigDict(str_strip_whitespace=True)

    text: str = Field(..., min_length=1, max_length=5000)


class CommentCreate(BaseModel):
    """Schema for adding a Comment."""

    model_config = ConfigDict(str_strip_whitespace=True)

    text: str = Field(..., min_length=1, max_length=2000)


class LikeResponse(BaseModel):
    """Schema for a like."""

    user: UUID


class CommentResponse(BaseModel):
    """Schema for a comment."""

    id: UUID
    user: UUID
    text: str
    name: str
    avatar_url: str | None = None
    date: datetime


class PostResponse(BaseModel):
    """Schema for Post response."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": "123e4567-e89b-12d3-a456-426614174000",
                "user": "456e4567-e89b-12d3-a456-426614174000",
                "text": "Hello world",
                "name": "Jane Doe",
                "avatar_url": "https://www.gravatar.com/avatar/abc?s=200&r=pg&d=mm",
                "date": "2026-01-28T10:00:00",
                "likes": [{"user": "789e4567-e89b-12d3-a456-426614174000"}],
                "comments": [],
            }
        },
    )

    id: UUID
    user: UUID
    text: str
    name: str
    avatar_url: str | None = None
    date: datetime
    likes: list[LikeResponse]
    comments: list[CommentResponse]
