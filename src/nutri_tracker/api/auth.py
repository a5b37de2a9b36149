"""Authentication endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, Request, Response

from nutri_tracker.api.models import LoginRequest, SignupRequest
from nutri_tracker.api.security import (
    clear_session_cookie,
    require_user,
    set_session_cookie,
)
from nutri_tracker.domain.models import TokenClaims  # noqa: TC001

if TYPE_CHECKING:
    from nutri_tracker.containers import AppContainer
    from nutri_tracker.services.auth import AuthResult

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/signup")
def signup(
    payload: SignupRequest, request: Request, response: Response
) -> dict[str, object]:
    """Create an account and start a session."""
    container: AppContainer = request.app.state.container
    result = container.auth_service.signup(
        name=payload.name or "",
        username=payload.username or "",
        password=payload.password or "",
    )
    set_session_cookie(response, container, result.token)
    return _auth_body("Signup successful", result)


@router.post("/login")
def login(
    payload: LoginRequest, request: Request, response: Response
) -> dict[str, object]:
    """Check credentials and start a session."""
    container: AppContainer = request.app.state.container
    result = container.auth_service.login(
        username=payload.username or "",
        password=payload.password or "",
    )
    set_session_cookie(response, container, result.token)
    return _auth_body("Login successful", result)


@router.post("/logout")
def logout(request: Request, response: Response) -> dict[str, object]:
    """Clear the session cookie. Issued tokens stay valid until they expire."""
    container: AppContainer = request.app.state.container
    clear_session_cookie(response, container)
    return {"success": True, "message": "Logout successful"}


@router.get("/profile")
def profile(
    request: Request, claims: TokenClaims = Depends(require_user)
) -> dict[str, object]:
    """Return the signed-in user."""
    container: AppContainer = request.app.state.container
    user = container.auth_service.profile(claims)
    return {"success": True, "user": user.public()}


def _auth_body(message: str, result: AuthResult) -> dict[str, object]:
    return {
        "success": True,
        "message": message,
        "token": result.token,
        "user": result.user.public(),
    }
