"""Session token issuing and verification."""

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from uuid import UUID

import jwt

from nutri_tracker.domain.models import TokenClaims
from nutri_tracker.errors import InvalidToken

TOKEN_ALGORITHM = "HS256"


def _utc_now() -> datetime:
    return datetime.now(tz=UTC)


@dataclass
class TokenService:
    """Issues and verifies HS256 session tokens carrying ``{id, username}``."""

    secret: str
    ttl_days: int = 7
    clock: Callable[[], datetime] = field(default=_utc_now)

    @property
    def max_age_seconds(self) -> int:
        return self.ttl_days * 24 * 60 * 60

    def issue(self, user_id: UUID, username: str) -> str:
        """Return a signed token for the user."""
        now = self.clock()
        payload = {
            "id": str(user_id),
            "username": username,
            "iat": int(now.timestamp()),
            "exp": int((now + timedelta(days=self.ttl_days)).timestamp()),
        }
        return jwt.encode(payload, self.secret, algorithm=TOKEN_ALGORITHM)

    def verify(self, token: str) -> TokenClaims:
        """Decode a token, raising InvalidToken on any failure."""
        try:
            payload = jwt.decode(
                token,
                self.secret,
                algorithms=[TOKEN_ALGORITHM],
                options={"require": ["exp", "id", "username"]},
            )
        except jwt.ExpiredSignatureError as exc:
            raise InvalidToken("Token expired") from exc
        except jwt.InvalidTokenError as exc:
            raise InvalidToken() from exc
        try:
            user_id = UUID(str(payload["id"]))
        except ValueError as exc:
            raise InvalidToken() from exc
        return TokenClaims(user_id=user_id, username=str(payload["username"]))
