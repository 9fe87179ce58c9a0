"""Domain models for sourdough starters and their feedings."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from uuid import UUID


class FeedingFrequency(Enum):
    TWICE_DAILY = "twice_daily"
    DAILY = "daily"
    EVERY_OTHER_DAY = "every_other_day"
    WEEKLY = "weekly"
    CUSTOM = "custom"


class StarterStatus(Enum):
    ACTIVE = "active"
    DORMANT = "dormant"
    ARCHIVED = "archived"


class FeedingState(Enum):
    """Where a starter stands relative to its next scheduled feeding."""

    OK = "ok"
    DUE = "due"
    OVERDUE = "overdue"


@dataclass(frozen=True)
class FeedingSchedule:
    """How often a starter should be fed.

    ``custom_hours`` is only meaningful for ``FeedingFrequency.CUSTOM``. Rows
    read back from storage are not validated here; use ``validation_errors``
    at input boundaries.
    """

    frequency: FeedingFrequency
    custom_hours: float | None = None

    def validation_errors(self) -> list[str]:
        """Return problems with the frequency/custom_hours pairing."""
        errors: list[str] = []
        if self.frequency == FeedingFrequency.CUSTOM:
            if self.custom_hours is None or self.custom_hours <= 0:
                errors.append("custom_hours must be a positive number for custom")
        elif self.custom_hours is not None:
            errors.append("custom_hours is only allowed for custom frequency")
        return errors


@dataclass(frozen=True)
class FeedingStatus:
    """Feeding status derived from the schedule and the current time."""

    status: FeedingState
    hours_until_next: int


@dataclass(frozen=True)
class FeedingRecord:
    """A single feeding of a starter."""

    id: UUID
    date: datetime
    flour_type: str
    flour_amount: float
    water_amount: float
    starter_amount: float
    temperature: float | None = None
    notes: str | None = None
    activity_rating: int | None = None


@dataclass(frozen=True)
class Starter:
    """Represents a sourdough starter owned by a user."""

    id: UUID
    user_id: UUID
    name: str
    date_created: datetime
    last_feeding_date: datetime
    feeding_schedule: FeedingSchedule
    status: StarterStatus = StarterStatus.ACTIVE
    hydration: float | None = None
    description: str | None = None
    notes: str | None = None
    feeding_history: list[FeedingRecord] = field(default_factory=list)
