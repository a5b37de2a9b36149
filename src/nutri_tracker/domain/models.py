"""Domain models for users and sessions."""

from dataclasses import dataclass
from uuid import UUID


@dataclass(frozen=True)
class UserRecord:
    """Represents a user stored in the database."""

    id: UUID
    name: str
    username: str
    password_hash: str

    def public(self) -> dict[str, str]:
        """Return the user fields that are safe to send to clients."""
        return {"id": str(self.id), "name": self.name, "username": self.username}


@dataclass(frozen=True)
class TokenClaims:
    """Identity asserted by a verified session token."""

    user_id: UUID
    username: str
