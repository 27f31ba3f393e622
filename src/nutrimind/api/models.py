"""Request bodies for the HTTP API."""

from datetime import date

from pydantic import BaseModel, Field

from nutrimind.domain.profile import ActivityLevel, Gender


class RegisterRequest(BaseModel):
    """New account details."""

    name: str = Field(min_length=1)
    email: str = Field(min_length=3)
    password: str = Field(min_length=1)


class LoginRequest(BaseModel):
    """Login credentials."""

    email: str = Field(min_length=3)
    password: str = Field(min_length=1)


class ProfileUpdate(BaseModel):
    """Editable profile fields."""

    name: str = Field(min_length=1)
    height_cm: float = Field(gt=0)
    weight_kg: float = Field(gt=0)
    age: int = Field(gt=0)
    gender: Gender
    activity_level: ActivityLevel


class LogTextRequest(BaseModel):
    """Free-text description of food eaten or exercise done."""

    text: str = Field(min_length=1)
    day: date | None = None


class WeightRequest(BaseModel):
    """A weight measurement for a day."""

    day: date
    weight_kg: float = Field(gt=0)
