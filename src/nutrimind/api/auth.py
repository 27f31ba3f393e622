"""Authentication endpoints and the session dependency."""

from __future__ import annotations

from dataclasses import asdict
from typing import TYPE_CHECKING
from uuid import UUID

from fastapi import APIRouter, Depends, Header, HTTPException, Request, status

from nutrimind.api.models import LoginRequest, RegisterRequest
from nutrimind.domain.profile import Session

if TYPE_CHECKING:
    from nutrimind.containers import AppContainer

router = APIRouter(prefix="/auth", tags=["auth"])


def _parse_session_id(raw: str | None) -> UUID | None:
    if not raw:
        return None
    try:
        return UUID(raw)
    except ValueError:
        return None


async def require_session(
    request: Request, x_session_id: str | None = Header(default=None)
) -> Session:
    """Resolve the ``X-Session-Id`` header to an open session."""
    container: AppContainer = request.app.state.container
    session_id = _parse_session_id(x_session_id)
    session = (
        container.session_service.resume(session_id) if session_id else None
    )
    if session is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)
    return session


def _session_payload(container: AppContainer, session: Session) -> dict[str, object]:
    profile = container.profile_service.get_profile(session.user_id)
    return {"session_id": str(session.id), "profile": asdict(profile)}


@router.post("/register")
async def register(payload: RegisterRequest, request: Request) -> dict[str, object]:
    """Create an account and open a session."""
    container: AppContainer = request.app.state.container
    session = container.session_service.register(
        payload.name, payload.email, payload.password
    )
    return _session_payload(container, session)


@router.post("/login")
async def login(payload: LoginRequest, request: Request) -> dict[str, object]:
    """Open a session for an email address."""
    container: AppContainer = request.app.state.container
    session = container.session_service.login(payload.email, payload.password)
    return _session_payload(container, session)


@router.post("/logout")
async def logout(
    request: Request, x_session_id: str | None = Header(default=None)
) -> dict[str, str]:
    """Close the current session; closing twice is harmless."""
    container: AppContainer = request.app.state.container
    session_id = _parse_session_id(x_session_id)
    if session_id:
        container.session_service.logout(session_id)
    return {"status": "ok"}


@router.get("/me")
async def me(
    request: Request, session: Session = Depends(require_session)
) -> dict[str, object]:
    """Return the session and profile for the current user."""
    container: AppContainer = request.app.state.container
    return _session_payload(container, session)
