"""User service layer: registration, login and account lookup."""

import hashlib
from collections.abc import Callable
from uuid import UUID

import structlog

from core.exceptions import InvalidCredentialsError, UserAlreadyExistsError, UserNotFoundError
from domain.entities.user import User
from domain.repositories.unit_of_work import IUnitOfWork
from infrastructure.auth.passwords import hash_password, verify_password

logger = structlog.get_logger()

GRAVATAR_URL = "https://www.gravatar.com/avatar/{digest}?s=200&r=pg&d=mm"


def gravatar_url(email: str) -> str:
    """Gravatar image URL for an email address."""
    digest = hashlib.md5(email.strip().lower().encode("utf-8")).hexdigest()
    return GRAVATAR_URL.format(digest=digest)


class UserService:
    """Service layer for user accounts."""

    def __init__(self, uow_factory: Callable[[], IUnitOfWork]) -> None:
        self._uow_factory = uow_factory

    async def register(self, name: str, email: str, password: str) -> User:
        """Create an account. Emails are unique (case-insensitive)."""
        async with self._uow_factory() as uow:
            existing = await uow.users.get_by_email(email)
            if existing:
                raise UserAlreadyExistsError(email)

            user = User(
                name=name.strip(),
                email=email,
                password_hash=hash_password(password),
                avatar_url=gravatar_url(email),
            )
            created = await uow.users.create(user)
            await uow.commit()

        logger.info("user_registered", user_id=str(created.id))
        return created

    async def authenticate(self, email: str, password: str) -> User:
        """Return the user for a matching email/password pair."""
        async with self._uow_factory() as uow:
            user = await uow.users.get_by_email(email)

        if not user or not verify_password(password, user.password_hash):
            raise InvalidCredentialsError()
        return user

    async def get_by_id(self, user_id: UUID) -> User:
        async with self._uow_factory() as uow:
            user = await uow.users.get(user_id)
            if not user:
                raise UserNotFoundError(str(user_id))
            return user
