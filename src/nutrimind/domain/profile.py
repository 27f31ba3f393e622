"""Domain models for users, profiles and sessions."""

from dataclasses import dataclass
from enum import Enum
from uuid import UUID


class Gender(str, Enum):
    """Biological sex used by the BMR equation."""

    MALE = "male"
    FEMALE = "female"


class ActivityLevel(str, Enum):
    """Self-reported activity level."""

    SEDENTARY = "sedentary"
    LIGHT = "light"
    MODERATE = "moderate"
    ACTIVE = "active"


@dataclass(frozen=True)
class UserRecord:
    """Represents a user stored in the database."""

    id: UUID
    email: str


@dataclass(frozen=True)
class UserProfile:
    """Body metrics and preferences for a user."""

    user_id: UUID
    name: str
    height_cm: float
    weight_kg: float
    age: int
    gender: Gender
    activity_level: ActivityLevel
    email: str | None = None


@dataclass(frozen=True)
class Session:
    """An authenticated session for a user."""

    id: UUID
    user_id: UUID
    email: str


def default_profile(user_id: UUID, email: str | None = None) -> UserProfile:
    """Return the profile used before a user enters their own metrics."""
    return UserProfile(
        user_id=user_id,
        name="User",
        height_cm=175,
        weight_kg=75,
        age=30,
        gender=Gender.MALE,
        activity_level=ActivityLevel.MODERATE,
        email=email,
    )
