"""Supabase implementation for starters and feeding records."""

from dataclasses import dataclass
from datetime import UTC, datetime
from uuid import UUID

from supabase import Client

from bakery_ops.domain.starters import (
    FeedingFrequency,
    FeedingRecord,
    FeedingSchedule,
    Starter,
    StarterStatus,
)
from bakery_ops.services.starters import StarterRepository


@dataclass
class SupabaseStarterRepository(StarterRepository):
    """Supabase-backed repository for starters."""

    client: Client

    def list_starters(self, user_id: UUID) -> list[Starter]:
        """Return all starters owned by a user, without feeding history."""
        response = (
            self.client.table("starters")
            .select("*")
            .eq("user_id", str(user_id))
            .order("name", desc=False)
            .execute()
        )
        return [_parse_starter(row) for row in response.data or []]

    def get_starter(self, starter_id: UUID) -> Starter | None:
        """Return a starter with its feeding history, if present."""
        response = (
            self.client.table("starters")
            .select("*")
            .eq("id", str(starter_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_starter(
            response.data[0], history=self.list_feeding_records(starter_id)
        )

    def create_starter(self, user_id: UUID, payload: dict[str, object]) -> Starter:
        """Create a starter row and return it."""
        response = (
            self.client.table("starters")
            .insert({"user_id": str(user_id), **payload})
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create starter")
        return _parse_starter(response.data[0])

    def update_starter(self, starter_id: UUID, payload: dict[str, object]) -> Starter:
        """Update a starter row and return it."""
        response = (
            self.client.table("starters")
            .update(payload)
            .eq("id", str(starter_id))
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to update starter")
        return _parse_starter(response.data[0])

    def delete_starter(self, starter_id: UUID) -> None:
        """Delete a starter and its feeding records."""
        self.client.table("feeding_records").delete().eq(
            "starter_id", str(starter_id)
        ).execute()
        self.client.table("starters").delete().eq("id", str(starter_id)).execute()

    def add_feeding_record(
        self, starter_id: UUID, payload: dict[str, object]
    ) -> FeedingRecord:
        """Insert a feeding record and return it."""
        response = (
            self.client.table("feeding_records")
            .insert({"starter_id": str(starter_id), **payload})
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create feeding record")
        return _parse_record(response.data[0])

    def delete_feeding_record(self, starter_id: UUID, record_id: UUID) -> None:
        """Delete a feeding record of a starter."""
        self.client.table("feeding_records").delete().eq("id", str(record_id)).eq(
            "starter_id", str(starter_id)
        ).execute()

    def list_feeding_records(self, starter_id: UUID) -> list[FeedingRecord]:
        """Return feeding records, newest first."""
        response = (
            self.client.table("feeding_records")
            .select("*")
            .eq("starter_id", str(starter_id))
            .order("date", desc=True)
            .execute()
        )
        return [_parse_record(row) for row in response.data or []]


def _parse_starter(
    row: dict[str, object], history: list[FeedingRecord] | None = None
) -> Starter:
    """Parse a starter row into a domain model."""
    custom_hours = row.get("custom_hours")
    hydration = row.get("hydration")
    return Starter(
        id=UUID(row["id"]),
        user_id=UUID(row["user_id"]),
        name=str(row.get("name", "")),
        description=row.get("description"),
        notes=row.get("notes"),
        date_created=_parse_datetime(row.get("date_created")),
        last_feeding_date=_parse_datetime(row.get("last_feeding_date")),
        feeding_schedule=FeedingSchedule(
            frequency=FeedingFrequency(row.get("feeding_frequency") or "daily"),
            custom_hours=float(custom_hours) if custom_hours is not None else None,
        ),
        status=StarterStatus(row.get("status") or "active"),
        hydration=float(hydration) if hydration is not None else None,
        feeding_history=history or [],
    )


def _parse_record(row: dict[str, object]) -> FeedingRecord:
    """Parse a feeding record row into a domain model."""
    temperature = row.get("temperature")
    rating = row.get("activity_rating")
    return FeedingRecord(
        id=UUID(row["id"]),
        date=_parse_datetime(row.get("date")),
        flour_type=str(row.get("flour_type", "")),
        flour_amount=float(row.get("flour_amount", 0.0)),
        water_amount=float(row.get("water_amount", 0.0)),
        starter_amount=float(row.get("starter_amount", 0.0)),
        temperature=float(temperature) if temperature is not None else None,
        notes=row.get("notes"),
        activity_rating=int(rating) if rating is not None else None,
    )


def _parse_datetime(raw: object) -> datetime:
    """Parse a timestamp column, treating naive values as UTC."""
    if not isinstance(raw, str) or not raw:
        return datetime.min.replace(tzinfo=UTC)
    parsed = datetime.fromisoformat(raw)
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=UTC)
    return parsed
