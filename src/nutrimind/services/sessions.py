"""Registration, login and session lifecycle."""

import logging
from dataclasses import dataclass, replace
from typing import Protocol
from uuid import UUID

from nutrimind.domain.profile import Session, UserRecord, default_profile
from nutrimind.errors import AuthenticationError
from nutrimind.services.profiles import ProfileService

_logger = logging.getLogger(__name__)


class UserRepository(Protocol):
    """Persistence interface for user accounts."""

    def get_by_email(self, email: str) -> UserRecord | None:
        """Return the user with this email, if present."""

    def create_user(self, email: str) -> UserRecord:
        """Create and return a new user record."""


class SessionRepository(Protocol):
    """Persistence interface for sessions."""

    def create_session(self, user_id: UUID, email: str) -> Session:
        """Create a session and return it."""

    def get_session(self, session_id: UUID) -> Session | None:
        """Return a session by id, if present."""

    def delete_session(self, session_id: UUID) -> None:
        """Delete a session; unknown ids are ignored."""


@dataclass
class SessionService:
    """Creates sessions on login or registration and clears them on logout.

    Passwords are required but not checked against anything: the session only
    gates which profile the UI shows.
    """

    user_repository: UserRepository
    session_repository: SessionRepository
    profile_service: ProfileService

    def register(self, name: str, email: str, password: str) -> Session:
        """Create or reset a user's profile with ``name`` and open a session."""
        if not name.strip() or not email.strip() or not password:
            raise AuthenticationError("All fields are required")
        user = self._ensure_user(_normalize_email(email))
        profile = replace(
            default_profile(user.id, email=user.email), name=name.strip()
        )
        self.profile_service.update_profile(profile)
        return self._open(user)

    def login(self, email: str, password: str) -> Session:
        """Open a session, creating the user with default metrics if needed."""
        if not email.strip() or not password:
            raise AuthenticationError("Email and password are required")
        user = self._ensure_user(_normalize_email(email))
        profile = self.profile_service.repository.get_profile(user.id)
        if profile is None:
            self.profile_service.update_profile(
                default_profile(user.id, email=user.email)
            )
        elif profile.email != user.email:
            self.profile_service.update_profile(replace(profile, email=user.email))
        return self._open(user)

    def logout(self, session_id: UUID) -> None:
        """Clear a session."""
        self.session_repository.delete_session(session_id)

    def resume(self, session_id: UUID) -> Session | None:
        """Return the session for an id handed out earlier, if still open."""
        return self.session_repository.get_session(session_id)

    def _ensure_user(self, email: str) -> UserRecord:
        existing = self.user_repository.get_by_email(email)
        if existing:
            return existing
        created = self.user_repository.create_user(email)
        _logger.info("Created user %s", created.id)
        return created

    def _open(self, user: UserRecord) -> Session:
        return self.session_repository.create_session(user.id, user.email)


def _normalize_email(email: str) -> str:
    return email.strip().lower()
