"""Supabase repository for login sessions."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from nutrimind.adapters.supabase_errors import execute
from nutrimind.domain.profile import Session
from nutrimind.errors import PersistenceError
from nutrimind.services.sessions import SessionRepository


@dataclass
class SupabaseSessionRepository(SessionRepository):
    """Supabase implementation for sessions."""

    client: Client

    def create_session(self, user_id: UUID, email: str) -> Session:
        """Insert a session row and return it."""
        response = execute(
            self.client.table("sessions").insert(
                {"user_id": str(user_id), "email": email}
            ),
            "create session",
        )
        if not response.data:
            raise PersistenceError("Failed to create session")
        return _parse_session(response.data[0])

    def get_session(self, session_id: UUID) -> Session | None:
        """Return a session by id."""
        response = execute(
            self.client.table("sessions")
            .select("id, user_id, email")
            .eq("id", str(session_id))
            .limit(1),
            "load session",
        )
        if not response.data:
            return None
        return _parse_session(response.data[0])

    def delete_session(self, session_id: UUID) -> None:
        """Delete a session row."""
        execute(
            self.client.table("sessions").delete().eq("id", str(session_id)),
            "delete session",
        )


def _parse_session(row: dict[str, object]) -> Session:
    return Session(
        id=UUID(str(row["id"])),
        user_id=UUID(str(row["user_id"])),
        email=str(row["email"]),
    )
