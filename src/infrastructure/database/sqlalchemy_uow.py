"""SQLAlchemy Unit of Work implementation."""

from typing import Any, Optional

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from infrastructure.database.repositories.sqlalchemy_post_repo import SQLAlchemyPostRepository
from infrastructure.database.repositories.sqlalchemy_profile_repo import (
    SQLAlchemyProfileRepository,
)
from infrastructure.database.repositories.sqlalchemy_user_repo import SQLAlchemyUserRepository


class SQLAlchemyUnitOfWork:
    """One session per ``async with`` block, shared by the three repositories.

    Nothing is committed implicitly; leaving the block with an exception
    rolls back whatever was not committed yet.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory
        self._session: Optional[AsyncSession] = None
        self._users: Optional[SQLAlchemyUserRepository] = None
        self._profiles: Optional[SQLAlchemyProfileRepository] = None
        self._posts: Optional[SQLAlchemyPostRepository] = None

    @property
    def users(self) -> SQLAlchemyUserRepository:
        self._require_session()
        return self._users  # type: ignore[return-value]

    @property
    def profiles(self) -> SQLAlchemyProfileRepository:
        self._require_session()
        return self._profiles  # type: ignore[return-value]

    @property
    def posts(self) -> SQLAlchemyPostRepository:
        self._require_session()
        return self._posts  # type: ignore[return-value]

    async def commit(self) -> None:
        if self._session:
            await self._session.commit()

    async def rollback(self) -> None:
        if self._session:
            await self._session.rollback()

    async def __aenter__(self) -> "SQLAlchemyUnitOfWork":
        session = self._session_factory()
        self._session = session
        self._users = SQLAlchemyUserRepository(session)
        self._profiles = SQLAlchemyProfileRepository(session)
        self._posts = SQLAlchemyPostRepository(session)
        return self

    async def __aexit__(
        self,
        exc_type: Optional[type],
        exc_val: Optional[Exception],
        exc_tb: Any,
    ) -> None:
        if not self._session:
            return
        try:
            if exc_type:
                await self.rollback()
        finally:
            await self._session.close()
            self._session = None
            self._users = self._profiles = self._posts = None

    def _require_session(self) -> None:
        if not self._session:
            raise RuntimeError("UnitOfWork not initialized. Use as context manager.")
