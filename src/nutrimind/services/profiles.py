"""User profile service."""

from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from nutrimind.domain.profile import UserProfile, default_profile
from nutrimind.domain.stats import BmiReading, MetabolicProfile
from nutrimind.services.metabolism import calculate_bmi, calculate_metabolism


class ProfileRepository(Protocol):
    """Persistence interface for user profiles."""

    def get_profile(self, user_id: UUID) -> UserProfile | None:
        """Return the stored profile for a user, if present."""

    def put_profile(self, profile: UserProfile) -> None:
        """Insert or replace the profile for ``profile.user_id``."""


@dataclass
class ProfileService:
    """Service for reading and updating profiles."""

    repository: ProfileRepository

    def get_profile(self, user_id: UUID) -> UserProfile:
        """Return the user's profile or the defaults when none is stored."""
        return self.repository.get_profile(user_id) or default_profile(user_id)

    def update_profile(self, profile: UserProfile) -> UserProfile:
        """Persist a profile and return it."""
        self.repository.put_profile(profile)
        return profile

    def get_metabolism(self, user_id: UUID) -> MetabolicProfile:
        """Return BMR and TDEE for the user's current profile."""
        return calculate_metabolism(self.get_profile(user_id))

    def get_bmi(self, user_id: UUID) -> BmiReading:
        """Return BMI from the user's profile height and weight."""
        profile = self.get_profile(user_id)
        return calculate_bmi(profile.height_cm, profile.weight_kg)
