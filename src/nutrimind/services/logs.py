"""Nutrition log service: text submissions, listing and deletion."""

import logging
from dataclasses import dataclass
from datetime import UTC, date, datetime
from typing import Protocol
from uuid import UUID, uuid4

from nutrimind.domain.logs import NutritionEntry
from nutrimind.services.extraction import ExtractionService

_logger = logging.getLogger(__name__)


class LogRepository(Protocol):
    """Persistence interface for nutrition log entries."""

    def list_logs(self, user_id: UUID) -> list[NutritionEntry]:
        """Return every log entry for a user."""

    def put_log(self, entry: NutritionEntry) -> None:
        """Insert or replace a log entry by id."""

    def delete_log(self, user_id: UUID, entry_id: UUID) -> None:
        """Delete a log entry; unknown ids are ignored."""


@dataclass
class LogService:
    """Service that turns free text into stored log entries."""

    extraction_service: ExtractionService
    repository: LogRepository

    async def log_text(
        self,
        user_id: UUID,
        text: str,
        day: date,
        now: datetime | None = None,
    ) -> list[NutritionEntry]:
        """Extract entries from text and store them against ``day``.

        Entries are written one at a time. If a write fails the earlier
        entries of the batch stay stored.
        """
        result = await self.extraction_service.extract(text)
        created_at = now or datetime.now(tz=UTC)
        entries = [
            NutritionEntry(
                id=uuid4(),
                user_id=user_id,
                day=day,
                created_at=created_at,
                kind=candidate.kind,
                description=candidate.description,
                calories=candidate.calories,
                macros=candidate.macros,
                micros=candidate.micros,
                source_urls=list(candidate.source_urls),
            )
            for candidate in result.entries
        ]
        for entry in entries:
            self.repository.put_log(entry)
        _logger.info(
            "Logged %s entries for user=%s day=%s", len(entries), user_id, day
        )
        return entries

    def add_entry(self, entry: NutritionEntry) -> None:
        """Store a fully formed entry, replacing any entry with the same id."""
        self.repository.put_log(entry)

    def list_logs(self, user_id: UUID) -> list[NutritionEntry]:
        """Return all entries for a user, oldest first."""
        entries = self.repository.list_logs(user_id)
        return sorted(entries, key=lambda entry: (entry.day, entry.created_at))

    def list_day(self, user_id: UUID, day: date) -> list[NutritionEntry]:
        """Return the entries logged against a calendar day."""
        return [entry for entry in self.list_logs(user_id) if entry.day == day]

    def delete_entry(self, user_id: UUID, entry_id: UUID) -> list[NutritionEntry]:
        """Delete an entry and return the remaining entries."""
        self.repository.delete_log(user_id, entry_id)
        return self.list_logs(user_id)
