"""Supabase repository for user profiles."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from nutrimind.adapters.supabase_errors import execute
from nutrimind.domain.profile import ActivityLevel, Gender, UserProfile
from nutrimind.services.profiles import ProfileRepository


@dataclass
class SupabaseProfileRepository(ProfileRepository):
    """Supabase implementation for profiles keyed by user id."""

    client: Client

    def get_profile(self, user_id: UUID) -> UserProfile | None:
        """Return the stored profile for a user."""
        response = execute(
            self.client.table("profiles")
            .select(
                "user_id, name, email, height_cm, weight_kg, age, gender, "
                "activity_level"
            )
            .eq("user_id", str(user_id))
            .limit(1),
            "load profile",
        )
        if not response.data:
            return None
        row = response.data[0]
        return UserProfile(
            user_id=UUID(str(row["user_id"])),
            name=str(row.get("name") or ""),
            email=row.get("email"),
            height_cm=float(row["height_cm"]),
            weight_kg=float(row["weight_kg"]),
            age=int(row["age"]),
            gender=Gender(row["gender"]),
            activity_level=ActivityLevel(row["activity_level"]),
        )

    def put_profile(self, profile: UserProfile) -> None:
        """Upsert the profile row for the user."""
        execute(
            self.client.table("profiles").upsert(
                {
                    "user_id": str(profile.user_id),
                    "name": profile.name,
                    "email": profile.email,
                    "height_cm": profile.height_cm,
                    "weight_kg": profile.weight_kg,
                    "age": profile.age,
                    "gender": profile.gender.value,
                    "activity_level": profile.activity_level.value,
                },
                on_conflict="user_id",
            ),
            "store profile",
        )
