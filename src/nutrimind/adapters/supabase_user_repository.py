"""Supabase-backed user repository."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from nutrimind.adapters.supabase_errors import execute
from nutrimind.domain.profile import UserRecord
from nutrimind.errors import PersistenceError
from nutrimind.services.sessions import UserRepository


@dataclass
class SupabaseUserRepository(UserRepository):
    """Supabase implementation for user persistence."""

    client: Client

    def get_by_email(self, email: str) -> UserRecord | None:
        """Return the user with this email, if present."""
        response = execute(
            self.client.table("users").select("id, email").eq("email", email).limit(1),
            "load user",
        )
        if response.data:
            row = response.data[0]
            return UserRecord(id=UUID(str(row["id"])), email=str(row["email"]))
        return None

    def create_user(self, email: str) -> UserRecord:
        """Create a new user row and return it."""
        response = execute(
            self.client.table("users").insert({"email": email}), "create user"
        )
        if not response.data:
            raise PersistenceError("Failed to create user in Supabase")
        row = response.data[0]
        return UserRecord(id=UUID(str(row["id"])), email=str(row["email"]))
