"""Supabase repository for nutrition log entries."""

from dataclasses import dataclass
from datetime import date, datetime
from uuid import UUID

from supabase import Client

from nutrimind.adapters.supabase_errors import execute
from nutrimind.domain.logs import LogKind, Macros, NutritionEntry
from nutrimind.domain.nutrients import normalize_micros
from nutrimind.services.logs import LogRepository

_COLUMNS = (
    "id, user_id, day, created_at, kind, description, calories, protein_g, "
    "carbs_g, fat_g, micros, source_urls"
)


@dataclass
class SupabaseLogRepository(LogRepository):
    """Supabase implementation for nutrition logs."""

    client: Client

    def list_logs(self, user_id: UUID) -> list[NutritionEntry]:
        """Return every log entry for a user."""
        response = execute(
            self.client.table("nutrition_logs")
            .select(_COLUMNS)
            .eq("user_id", str(user_id))
            .order("day", desc=False),
            "list nutrition logs",
        )
        return [_parse_row(row) for row in response.data or []]

    def put_log(self, entry: NutritionEntry) -> None:
        """Upsert a log entry by id."""
        execute(
            self.client.table("nutrition_logs").upsert(
                {
                    "id": str(entry.id),
                    "user_id": str(entry.user_id),
                    "day": entry.day.isoformat(),
                    "created_at": entry.created_at.isoformat(),
                    "kind": entry.kind.value,
                    "description": entry.description,
                    "calories": entry.calories,
                    "protein_g": entry.macros.protein_g,
                    "carbs_g": entry.macros.carbs_g,
                    "fat_g": entry.macros.fat_g,
                    "micros": entry.micros,
                    "source_urls": entry.source_urls,
                }
            ),
            "store nutrition log",
        )

    def delete_log(self, user_id: UUID, entry_id: UUID) -> None:
        """Delete a log entry owned by the user."""
        execute(
            self.client.table("nutrition_logs")
            .delete()
            .eq("id", str(entry_id))
            .eq("user_id", str(user_id)),
            "delete nutrition log",
        )


def _parse_row(row: dict[str, object]) -> NutritionEntry:
    micros = row.get("micros")
    source_urls = row.get("source_urls")
    return NutritionEntry(
        id=UUID(str(row["id"])),
        user_id=UUID(str(row["user_id"])),
        day=date.fromisoformat(str(row["day"])),
        created_at=datetime.fromisoformat(str(row["created_at"])),
        kind=LogKind(str(row["kind"])),
        description=str(row.get("description", "")),
        calories=float(row.get("calories") or 0.0),
        macros=Macros(
            protein_g=float(row.get("protein_g") or 0.0),
            carbs_g=float(row.get("carbs_g") or 0.0),
            fat_g=float(row.get("fat_g") or 0.0),
        ),
        micros=normalize_micros(micros if isinstance(micros, dict) else None),
        source_urls=[str(url) for url in source_urls]
        if isinstance(source_urls, list)
        else [],
    )
