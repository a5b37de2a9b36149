"""Signup, login and profile lookup."""

import logging
from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from nutri_tracker.domain.models import TokenClaims, UserRecord
from nutri_tracker.errors import (
    DuplicateUsername,
    InvalidCredentials,
    NotFound,
    ValidationError,
)
from nutri_tracker.services.tokens import TokenService

logger = logging.getLogger(__name__)


class UserRepository(Protocol):
    """Persistence interface for user data."""

    def get_by_username(self, username: str) -> UserRecord | None:
        """Return the user with this username, if present."""

    def get_by_id(self, user_id: UUID) -> UserRecord | None:
        """Return the user with this id, if present."""

    def create_user(self, name: str, username: str, password_hash: str) -> UserRecord:
        """Create and return a new user record."""


class PasswordHasher(Protocol):
    """Interface for one-way password hashing."""

    def hash(self, password: str) -> str:
        """Return a salted hash of the password."""

    def verify(self, password: str, password_hash: str) -> bool:
        """Return true when the password matches the hash."""


@dataclass(frozen=True)
class AuthResult:
    """Authenticated user together with a freshly issued token."""

    user: UserRecord
    token: str


@dataclass
class AuthService:
    """Application service for account creation and login."""

    repository: UserRepository
    hasher: PasswordHasher
    tokens: TokenService

    def signup(self, name: str, username: str, password: str) -> AuthResult:
        """Create an account and return it with a session token."""
        name = (name or "").strip()
        username = (username or "").strip()
        if not name or not username or not password:
            raise ValidationError("Missing required fields")
        if self.repository.get_by_username(username) is not None:
            raise DuplicateUsername()
        user = self.repository.create_user(
            name=name,
            username=username,
            password_hash=self.hasher.hash(password),
        )
        logger.info("User signed up", extra={"user_id": str(user.id)})
        return AuthResult(user=user, token=self.tokens.issue(user.id, user.username))

    def login(self, username: str, password: str) -> AuthResult:
        """Check credentials and return the user with a session token."""
        username = (username or "").strip()
        if not username or not password:
            raise ValidationError("Username and password required")
        user = self.repository.get_by_username(username)
        if user is None or not self.hasher.verify(password, user.password_hash):
            logger.warning("Failed login attempt")
            raise InvalidCredentials()
        logger.info("User logged in", extra={"user_id": str(user.id)})
        return AuthResult(user=user, token=self.tokens.issue(user.id, user.username))

    def profile(self, claims: TokenClaims) -> UserRecord:
        """Return the user a verified token refers to."""
        user = self.repository.get_by_id(claims.user_id)
        if user is None:
            raise NotFound("User not found")
        return user
