"""Supabase repository for weight samples."""

from dataclasses import dataclass
from datetime import date
from uuid import UUID

from supabase import Client

from nutrimind.adapters.supabase_errors import execute
from nutrimind.domain.logs import WeightSample
from nutrimind.services.weights import WeightRepository


@dataclass
class SupabaseWeightRepository(WeightRepository):
    """Supabase implementation for weight samples."""

    client: Client

    def list_samples(self, user_id: UUID) -> list[WeightSample]:
        """Return weight samples ordered by day."""
        response = execute(
            self.client.table("weight_logs")
            .select("id, user_id, day, weight_kg")
            .eq("user_id", str(user_id))
            .order("day", desc=False),
            "list weight logs",
        )
        return [
            WeightSample(
                id=UUID(str(row["id"])),
                user_id=UUID(str(row["user_id"])),
                day=date.fromisoformat(str(row["day"])),
                weight_kg=float(row["weight_kg"]),
            )
            for row in response.data or []
        ]

    def put_sample(self, sample: WeightSample) -> None:
        """Upsert a weight sample by id."""
        execute(
            self.client.table("weight_logs").upsert(
                {
                    "id": str(sample.id),
                    "user_id": str(sample.user_id),
                    "day": sample.day.isoformat(),
                    "weight_kg": sample.weight_kg,
                }
            ),
            "store weight log",
        )

    def delete_sample(self, user_id: UUID, sample_id: UUID) -> None:
        """Delete a weight sample owned by the user."""
        execute(
            self.client.table("weight_logs")
            .delete()
            .eq("id", str(sample_id))
            .eq("user_id", str(user_id)),
            "delete weight log",
        )
