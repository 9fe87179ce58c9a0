"""Services for managing sourdough starters and their feedings."""

import logging
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Protocol
from uuid import UUID

from bakery_ops.domain.starters import (
    FeedingRecord,
    FeedingSchedule,
    FeedingState,
    FeedingStatus,
    Starter,
    StarterStatus,
)
from bakery_ops.services.feeding import (
    calculate_next_feeding,
    format_feeding_frequency,
    get_feeding_status,
)

_logger = logging.getLogger(__name__)

MIN_ACTIVITY_RATING = 1
MAX_ACTIVITY_RATING = 5


class StarterNotFoundError(LookupError):
    """Raised when a starter id doesn't resolve to a stored starter."""

    def __init__(self, starter_id: UUID) -> None:
        self.starter_id = starter_id
        super().__init__(f"Starter not found: {starter_id}")


class StarterRepository(Protocol):
    """Persistence interface for starters and feeding records."""

    def list_starters(self, user_id: UUID) -> list[Starter]:
        """Return all starters owned by a user."""

    def get_starter(self, starter_id: UUID) -> Starter | None:
        """Return a starter with its feeding history, if present."""

    def create_starter(self, user_id: UUID, payload: dict[str, object]) -> Starter:
        """Create a starter and return it."""

    def update_starter(self, starter_id: UUID, payload: dict[str, object]) -> Starter:
        """Update starter fields and return the starter."""

    def delete_starter(self, starter_id: UUID) -> None:
        """Delete a starter and its feeding records."""

    def add_feeding_record(
        self, starter_id: UUID, payload: dict[str, object]
    ) -> FeedingRecord:
        """Store a feeding record for a starter and return it."""

    def delete_feeding_record(self, starter_id: UUID, record_id: UUID) -> None:
        """Delete a feeding record."""

    def list_feeding_records(self, starter_id: UUID) -> list[FeedingRecord]:
        """Return all feeding records of a starter."""


@dataclass(frozen=True)
class StarterFeedingView:
    """A starter together with its current feeding status."""

    starter: Starter
    feeding: FeedingStatus
    next_feeding: datetime
    frequency_label: str
    hydration: float


@dataclass
class StarterService:
    """Application service for starter lifecycle and feeding tracking."""

    repository: StarterRepository
    default_hydration: float = 75.0

    def list_starters(
        self,
        user_id: UUID,
        status: StarterStatus | None = None,
        search_term: str | None = None,
    ) -> list[Starter]:
        """List a user's starters filtered by status and search term."""
        starters = self.repository.list_starters(user_id)
        if status is not None:
            starters = [item for item in starters if item.status == status]
        if search_term:
            needle = search_term.lower()
            starters = [item for item in starters if _matches(item, needle)]
        return sorted(starters, key=lambda item: item.name.lower())

    def get_starter(self, starter_id: UUID) -> Starter:
        """Return a starter or raise StarterNotFoundError."""
        starter = self.repository.get_starter(starter_id)
        if starter is None:
            raise StarterNotFoundError(starter_id)
        return starter

    def create_starter(  # noqa: PLR0913
        self,
        user_id: UUID,
        name: str,
        feeding_schedule: FeedingSchedule,
        last_feeding_date: datetime,
        *,
        date_created: datetime | None = None,
        hydration: float | None = None,
        description: str | None = None,
        notes: str | None = None,
    ) -> Starter:
        """Create a starter after checking its feeding schedule."""
        errors = feeding_schedule.validation_errors()
        if errors:
            raise ValueError("; ".join(errors))
        payload: dict[str, object] = {
            "name": name,
            "description": description,
            "notes": notes,
            "hydration": hydration,
            "status": StarterStatus.ACTIVE.value,
            "feeding_frequency": feeding_schedule.frequency.value,
            "custom_hours": feeding_schedule.custom_hours,
            "date_created": (date_created or datetime.now(tz=UTC)).isoformat(),
            "last_feeding_date": last_feeding_date.isoformat(),
        }
        starter = self.repository.create_starter(user_id, payload)
        _logger.info("Created starter %s for user %s", starter.id, user_id)
        return starter

    def update_status(self, starter_id: UUID, status: StarterStatus) -> Starter:
        """Change a starter's status (active, dormant, archived)."""
        self.get_starter(starter_id)
        return self.repository.update_starter(starter_id, {"status": status.value})

    def delete_starter(self, starter_id: UUID) -> None:
        """Delete a starter and its feeding history."""
        self.get_starter(starter_id)
        self.repository.delete_starter(starter_id)
        _logger.info("Deleted starter %s", starter_id)

    def add_feeding(  # noqa: PLR0913
        self,
        starter_id: UUID,
        date: datetime,
        flour_type: str,
        flour_amount: float,
        water_amount: float,
        starter_amount: float,
        *,
        temperature: float | None = None,
        notes: str | None = None,
        activity_rating: int | None = None,
    ) -> FeedingRecord:
        """Record a feeding and move the starter's last feeding date."""
        if activity_rating is not None and not (
            MIN_ACTIVITY_RATING <= activity_rating <= MAX_ACTIVITY_RATING
        ):
            raise ValueError("activity_rating must be between 1 and 5")
        self.get_starter(starter_id)
        record = self.repository.add_feeding_record(
            starter_id,
            {
                "date": date.isoformat(),
                "flour_type": flour_type,
                "flour_amount": flour_amount,
                "water_amount": water_amount,
                "starter_amount": starter_amount,
                "temperature": temperature,
                "notes": notes,
                "activity_rating": activity_rating,
            },
        )
        self._sync_last_feeding_date(starter_id)
        return record

    def delete_feeding(self, starter_id: UUID, record_id: UUID) -> Starter:
        """Delete a feeding record and roll the last feeding date back."""
        self.get_starter(starter_id)
        self.repository.delete_feeding_record(starter_id, record_id)
        return self._sync_last_feeding_date(starter_id)

    def feeding_status(self, starter_id: UUID, now: datetime) -> StarterFeedingView:
        """Return the feeding status of one starter at ``now``."""
        return self._view(self.get_starter(starter_id), now)

    def feeding_overview(
        self, user_id: UUID, now: datetime
    ) -> list[StarterFeedingView]:
        """Return every active starter of a user with its feeding status."""
        starters = self.list_starters(user_id, status=StarterStatus.ACTIVE)
        return [self._view(starter, now) for starter in starters]

    def starters_needing_feeding(
        self, user_id: UUID, now: datetime
    ) -> list[StarterFeedingView]:
        """Return active starters that are due or overdue, most overdue first."""
        views = [
            view
            for view in self.feeding_overview(user_id, now)
            if view.feeding.status in {FeedingState.DUE, FeedingState.OVERDUE}
        ]
        if views:
            _logger.info(
                "User %s has %s starter(s) needing feeding", user_id, len(views)
            )
        return sorted(views, key=lambda view: view.feeding.hours_until_next)

    def _view(self, starter: Starter, now: datetime) -> StarterFeedingView:
        return StarterFeedingView(
            starter=starter,
            feeding=get_feeding_status(starter, now),
            next_feeding=calculate_next_feeding(
                starter.last_feeding_date, starter.feeding_schedule
            ),
            frequency_label=format_feeding_frequency(starter.feeding_schedule),
            hydration=(
                starter.hydration
                if starter.hydration is not None
                else self.default_hydration
            ),
        )

    def _sync_last_feeding_date(self, starter_id: UUID) -> Starter:
        """Point last_feeding_date at the most recent remaining feeding."""
        records = self.repository.list_feeding_records(starter_id)
        if not records:
            return self.get_starter(starter_id)
        latest = max(record.date for record in records)
        return self.repository.update_starter(
            starter_id, {"last_feeding_date": latest.isoformat()}
        )


def _matches(starter: Starter, needle: str) -> bool:
    fields = (starter.name, starter.description or "", starter.notes or "")
    return any(needle in value.lower() for value in fields)
