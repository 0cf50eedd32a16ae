"""Token identity and the provider protocol the API depends on."""

from dataclasses import dataclass
from typing import Optional, Protocol
from uuid import UUID

from domain.entities.user import User


@dataclass(frozen=True)
class TokenUser:
    """The identity carried inside an access token."""

    id: UUID
    email: str
    name: Optional[str] = None

    @classmethod
    def of(cls, user: User) -> "TokenUser":
        return cls(id=user.id, email=user.email, name=user.name)


class IAuthProvider(Protocol):
    """Issues tokens and turns them back into a ``TokenUser``."""

    async def validate_token(self, token: str) -> Optional[TokenUser]:
        """Return the identity in ``token``, or None if it is invalid or expired."""
        ...

    def create_token(self, user: TokenUser) -> str:
        ...
