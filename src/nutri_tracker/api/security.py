"""Session token extraction and the authenticated-user dependency."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import Request, Response

from nutri_tracker.domain.models import TokenClaims  # noqa: TC001
from nutri_tracker.errors import Unauthorized

if TYPE_CHECKING:
    from nutri_tracker.containers import AppContainer

TOKEN_COOKIE_NAME = "token"


def get_token_from_request(request: Request) -> str | None:
    """Return the session token, preferring the cookie over the header."""
    cookie = request.cookies.get(TOKEN_COOKIE_NAME)
    if cookie:
        return cookie
    auth = request.headers.get("authorization") or ""
    scheme, _, value = auth.partition(" ")
    if scheme.lower() == "bearer" and value.strip():
        return value.strip()
    return None


async def require_user(request: Request) -> TokenClaims:
    """Ensure the request carries a valid session token."""
    container: AppContainer = request.app.state.container
    token = get_token_from_request(request)
    if not token:
        raise Unauthorized()
    return container.token_service.verify(token)


def set_session_cookie(response: Response, container: AppContainer, token: str) -> None:
    response.set_cookie(
        TOKEN_COOKIE_NAME,
        token,
        max_age=container.token_service.max_age_seconds,
        httponly=True,
        secure=container.settings.cookie_secure,
        samesite="lax",
        path="/",
    )


def clear_session_cookie(response: Response, container: AppContainer) -> None:
    response.delete_cookie(
        TOKEN_COOKIE_NAME,
        httponly=True,
        secure=container.settings.cookie_secure,
        samesite="lax",
        path="/",
    )
