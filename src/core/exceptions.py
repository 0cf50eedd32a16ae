"""Custom exceptions and error codes."""

from enum import StrEnum
from typing import Any


class ErrorCode(StrEnum):
    """Standardized error codes for the API."""

    # Authentication errors (401)
    UNAUTHORIZED = "UNAUTHORIZED"
    INVALID_TOKEN = "INVALID_TOKEN"
    TOKEN_EXPIRED = "TOKEN_EXPIRED"

    # Ownership errors (401)
    NOT_AUTHORIZED = "NOT_AUTHORIZED"

    # Not found errors
    USER_NOT_FOUND = "USER_NOT_FOUND"
    PROFILE_NOT_FOUND = "PROFILE_NOT_FOUND"
    POST_NOT_FOUND = "POST_NOT_FOUND"
    COMMENT_NOT_FOUND = "COMMENT_NOT_FOUND"

    # Validation errors (400)
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INVALID_CREDENTIALS = "INVALID_CREDENTIALS"

    # Conflict errors (400)
    USER_ALREADY_EXISTS = "USER_ALREADY_EXISTS"
    PROFILE_ALREADY_EXISTS = "PROFILE_ALREADY_EXISTS"
    ALREADY_LIKED = "ALREADY_LIKED"
    NOT_LIKED = "NOT_LIKED"

    # Upstream errors
    GITHUB_USER_NOT_FOUND = "GITHUB_USER_NOT_FOUND"
    UPSTREAM_UNAVAILABLE = "UPSTREAM_UNAVAILABLE"

    # Rate limiting (429)
    RATE_LIMIT_EXCEEDED = "RATE_LIMIT_EXCEEDED"

    # Server errors (500)
    INTERNAL_ERROR = "INTERNAL_ERROR"


class AppException(Exception):
    """Base application exception."""

    def __init__(
        self,
        error_code: ErrorCode,
        message: str,
        status_code: int = 400,
        details: Any | None = None,
    ) -> None:
        self.error_code = error_code
        self.message = message
        self.status_code = status_code
        self.details = details
        super().__init__(self.message)


class AuthenticationError(AppException):
    """Authentication failed."""

    def __init__(
        self,
        message: str = "Authentication required",
        error_code: ErrorCode = ErrorCode.UNAUTHORIZED,
    ) -> None:
        super().__init__(
            error_code=error_code,
            message=message,
            status_code=401,
        )


class AuthorizationError(AppException):
    """The requester does not own the resource."""

    def __init__(self, message: str = "User not authorized") -> None:
        super().__init__(
            error_code=ErrorCode.NOT_AUTHORIZED,
            message=message,
            status_code=401,
        )


class ValidationError(AppException):
    """One or more fields failed validation.

    ``errors`` is a list of ``{"field": ..., "msg": ...}`` mappings.
    """

    def __init__(self, errors: list[dict[str, str]]) -> None:
        super().__init__(
            error_code=ErrorCode.VALIDATION_ERROR,
            message="Request validation failed",
            status_code=400,
            details=errors,
        )

    @classmethod
    def for_field(cls, field: str, msg: str) -> "ValidationError":
        return cls([{"field": field, "msg": msg}])


class InvalidCredentialsError(AppException):
    """Email/password pair did not match a user."""

    def __init__(self) -> None:
        super().__init__(
            error_code=ErrorCode.INVALID_CREDENTIALS,
            message="Invalid credentials",
            status_code=400,
        )


class NotFoundError(AppException):
    """Base class for missing entities."""

    def __init__(
        self,
        error_code: ErrorCode,
        message: str,
        details: Any | None = None,
        status_code: int = 404,
    ) -> None:
        super().__init__(
            error_code=error_code,
            message=message,
            status_code=status_code,
            details=details,
        )


class UserNotFoundError(NotFoundError):
    """User not found."""

    def __init__(self, user_id: str) -> None:
        super().__init__(
            ErrorCode.USER_NOT_FOUND,
            f"User not found: {user_id}",
            details={"user_id": user_id},
        )


class ProfileNotFoundError(NotFoundError):
    """No profile exists for the user.

    Reads report it as 400 to stay compatible with existing clients of the
    profile API; mutations of the experience and education lists use 404.
    """

    def __init__(self, user_id: str, status_code: int = 404) -> None:
        super().__init__(
            ErrorCode.PROFILE_NOT_FOUND,
            "There is no profile with that user.",
            details={"user_id": user_id},
            status_code=status_code,
        )


class PostNotFoundError(NotFoundError):
    """Post not found."""

    def __init__(self, post_id: str) -> None:
        super().__init__(
            ErrorCode.POST_NOT_FOUND,
            "Post does not exist.",
            details={"post_id": post_id},
        )


class CommentNotFoundError(NotFoundError):
    """Comment not found on a post."""

    def __init__(self, comment_id: str) -> None:
        super().__init__(
            ErrorCode.COMMENT_NOT_FOUND,
            "Comment does not exist.",
            details={"comment_id": comment_id},
        )


class ConflictError(AppException):
    """Request conflicts with the current state of a document."""

    def __init__(
        self,
        error_code: ErrorCode,
        message: str,
        details: Any | None = None,
    ) -> None:
        super().__init__(
            error_code=error_code,
            message=message,
            status_code=400,
            details=details,
        )


class UserAlreadyExistsError(ConflictError):
    """Email is already registered."""

    def __init__(self, email: str) -> None:
        super().__init__(
            ErrorCode.USER_ALREADY_EXISTS,
            "User already exists",
            details={"email": email},
        )


class ProfileAlreadyExistsError(ConflictError):
    """A profile for the user was created concurrently."""

    def __init__(self, user_id: str) -> None:
        super().__init__(
            ErrorCode.PROFILE_ALREADY_EXISTS,
            "Profile already exists",
            details={"user_id": user_id},
        )


class PostAlreadyLikedError(ConflictError):
    """User has already liked the post."""

    def __init__(self, post_id: str) -> None:
        super().__init__(
            ErrorCode.ALREADY_LIKED,
            "You've already liked that post.",
            details={"post_id": post_id},
        )


class PostNotLikedError(ConflictError):
    """User has not liked the post."""

    def __init__(self, post_id: str) -> None:
        super().__init__(
            ErrorCode.NOT_LIKED,
            "Post hasn't been liked yet.",
            details={"post_id": post_id},
        )


class UpstreamError(AppException):
    """An external API call failed."""


class GitHubUserNotFoundError(UpstreamError):
    """GitHub answered with a non-200 status."""

    def __init__(self, username: str, upstream_status: int) -> None:
        super().__init__(
            error_code=ErrorCode.GITHUB_USER_NOT_FOUND,
            message="No github user found.",
            status_code=404,
            details={"username": username, "upstream_status": upstream_status},
        )


class UpstreamUnavailableError(UpstreamError):
    """The external API could not be reached."""

    def __init__(self, service: str) -> None:
        super().__init__(
            error_code=ErrorCode.UPSTREAM_UNAVAILABLE,
            message=f"{service} is currently unavailable",
            status_code=502,
            details={"service": service},
        )
