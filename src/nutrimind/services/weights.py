"""Weight tracking service."""

from dataclasses import dataclass
from datetime import date
from typing import Protocol
from uuid import UUID, uuid4

from nutrimind.domain.logs import WeightSample


class WeightRepository(Protocol):
    """Persistence interface for weight samples."""

    def list_samples(self, user_id: UUID) -> list[WeightSample]:
        """Return every weight sample for a user."""

    def put_sample(self, sample: WeightSample) -> None:
        """Insert or replace a weight sample by id."""

    def delete_sample(self, user_id: UUID, sample_id: UUID) -> None:
        """Delete a weight sample; unknown ids are ignored."""


@dataclass
class WeightService:
    """Service keeping at most one weight sample per day."""

    repository: WeightRepository

    def list_samples(self, user_id: UUID) -> list[WeightSample]:
        """Return samples ordered by day."""
        return sorted(self.repository.list_samples(user_id), key=lambda s: s.day)

    def add_sample(self, user_id: UUID, day: date, weight_kg: float) -> WeightSample:
        """Record a weight, overwriting any sample already stored for ``day``."""
        if weight_kg <= 0:
            raise ValueError("Weight must be positive")
        existing = next(
            (s for s in self.repository.list_samples(user_id) if s.day == day), None
        )
        sample = WeightSample(
            id=existing.id if existing else uuid4(),
            user_id=user_id,
            day=day,
            weight_kg=weight_kg,
        )
        self.repository.put_sample(sample)
        return sample

    def delete_sample(self, user_id: UUID, sample_id: UUID) -> list[WeightSample]:
        """Delete a sample and return the remaining samples."""
        self.repository.delete_sample(user_id, sample_id)
        return self.list_samples(user_id)

    def latest_sample(self, user_id: UUID) -> WeightSample | None:
        """Return the most recent sample, if any."""
        samples = self.list_samples(user_id)
        return samples[-1] if samples else None
