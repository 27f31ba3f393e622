"""Metabolic rate and body mass index calculations."""

from nutrimind.domain.profile import ActivityLevel, Gender, UserProfile
from nutrimind.domain.stats import BmiReading, MetabolicProfile
from nutrimind.services.stats import round_half_up

ACTIVITY_MULTIPLIERS = {
    ActivityLevel.SEDENTARY: 1.2,
    ActivityLevel.LIGHT: 1.375,
    ActivityLevel.MODERATE: 1.55,
    ActivityLevel.ACTIVE: 1.725,
}

_BMI_CATEGORIES = (
    (18.5, "Underweight"),
    (25.0, "Normal weight"),
    (30.0, "Overweight"),
)


def calculate_metabolism(profile: UserProfile) -> MetabolicProfile:
    """Return BMR (Mifflin-St Jeor) and TDEE for a profile.

    Inputs are not validated; TDEE is derived from the unrounded BMR.
    """
    bmr = 10 * profile.weight_kg + 6.25 * profile.height_cm - 5 * profile.age
    bmr += 5 if profile.gender is Gender.MALE else -161
    tdee = bmr * ACTIVITY_MULTIPLIERS[profile.activity_level]
    return MetabolicProfile(bmr=round_half_up(bmr), tdee=round_half_up(tdee))


def calculate_bmi(height_cm: float, weight_kg: float) -> BmiReading:
    """Return BMI rounded to one decimal place with its category."""
    if height_cm <= 0:
        raise ValueError("Height must be positive")
    height_m = height_cm / 100
    value = round(weight_kg / (height_m * height_m), 1)
    category = "Obese"
    for upper_bound, label in _BMI_CATEGORIES:
        if value < upper_bound:
            category = label
            break
    return BmiReading(value=value, category=category)
