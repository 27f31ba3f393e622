"""Models for free-text extraction results."""

import math
from dataclasses import dataclass, field

from pydantic import AliasChoices, BaseModel, Field, field_validator

from nutrimind.domain.logs import EntryCandidate, LogKind, Macros
from nutrimind.domain.nutrients import canonical_key, normalize_micros


class ExtractedMacros(BaseModel):
    """Macronutrients reported for one item, in grams."""

    protein: float = Field(default=0.0, ge=0.0, allow_inf_nan=False)
    carbs: float = Field(default=0.0, ge=0.0, allow_inf_nan=False)
    fat: float = Field(default=0.0, ge=0.0, allow_inf_nan=False)


class ExtractedItem(BaseModel):
    """Single food or exercise item returned by the model."""

    kind: LogKind = Field(validation_alias=AliasChoices("kind", "type"))
    name: str = Field(min_length=1, validation_alias=AliasChoices("name", "item_name"))
    calories: float = Field(allow_inf_nan=False)
    macros: ExtractedMacros = Field(default_factory=ExtractedMacros)
    micros: dict[str, float] = Field(default_factory=dict)
    confidence_score: float | None = Field(
        default=None,
        ge=0.0,
        le=1.0,
        validation_alias=AliasChoices(
            "confidence_score", "confidenceScore", "confidence"
        ),
    )

    @field_validator("kind", mode="before")
    @classmethod
    def _normalize_kind(cls, value: object) -> object:
        if isinstance(value, str):
            return value.strip().upper()
        return value

    @field_validator("name", mode="before")
    @classmethod
    def _strip_name(cls, value: object) -> object:
        if isinstance(value, str):
            return value.strip()
        return value

    @field_validator("calories")
    @classmethod
    def _calories_magnitude(cls, value: float) -> float:
        # Exercise is sometimes reported as a negative number.
        return abs(value)

    @field_validator("micros", mode="before")
    @classmethod
    def _canonical_micros(cls, value: object) -> object:
        if value is None:
            return {}
        if not isinstance(value, dict):
            return value
        for raw_key, amount in value.items():
            if canonical_key(str(raw_key)) is None:
                continue
            if isinstance(amount, bool) or not isinstance(amount, int | float | str):
                raise ValueError(f"micronutrient {raw_key!r} is not a number")
            number = float(amount)
            if not math.isfinite(number) or number < 0:
                raise ValueError(f"micronutrient {raw_key!r} must be finite and >= 0")
        return normalize_micros(value)

    def to_candidate(self, source_urls: list[str]) -> EntryCandidate:
        """Convert to an entry candidate carrying the call's citations."""
        return EntryCandidate(
            kind=self.kind,
            description=self.name.strip(),
            calories=self.calories,
            macros=Macros(
                protein_g=self.macros.protein,
                carbs_g=self.macros.carbs,
                fat_g=self.macros.fat,
            ),
            micros=normalize_micros(self.micros),
            confidence=self.confidence_score,
            source_urls=list(source_urls),
        )


@dataclass(frozen=True)
class ExtractionReply:
    """Raw text reply from the model with any grounding citations."""

    text: str
    citation_urls: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class ExtractionResult:
    """Entries recognised in one submission."""

    entries: list[EntryCandidate]
    citation_urls: list[str]
