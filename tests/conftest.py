"""Shared test fixtures."""

import logging
from dataclasses import dataclass, field, replace
from datetime import UTC, datetime
from uuid import UUID, uuid4

import pytest

from bakery_ops.app_logging import LOGGER_NAME
from bakery_ops.config import Settings
from bakery_ops.containers import AppContainer
from bakery_ops.domain.starters import (
    FeedingFrequency,
    FeedingRecord,
    FeedingSchedule,
    Starter,
    StarterStatus,
)
from bakery_ops.services.starters import StarterRepository, StarterService

NOW = datetime(2024, 3, 10, 12, 0, tzinfo=UTC)
# JWT-shaped so the Supabase client accepts it.
SERVICE_KEY = "eyJhbGciOiJIUzI1NiJ9.eyJyb2xlIjoic2VydmljZV9yb2xlIn0.signature"


def make_starter(  # noqa: PLR0913
    *,
    user_id: UUID | None = None,
    name: str = "Levain",
    last_feeding_date: datetime = NOW,
    frequency: FeedingFrequency = FeedingFrequency.DAILY,
    custom_hours: float | None = None,
    status: StarterStatus = StarterStatus.ACTIVE,
    description: str | None = None,
    notes: str | None = None,
    hydration: float | None = None,
) -> Starter:
    return Starter(
        id=uuid4(),
        user_id=user_id or uuid4(),
        name=name,
        date_created=datetime(2024, 1, 1, tzinfo=UTC),
        last_feeding_date=last_feeding_date,
        feeding_schedule=FeedingSchedule(frequency=frequency, custom_hours=custom_hours),
        status=status,
        description=description,
        notes=notes,
        hydration=hydration,
    )


def _parse_date(raw: object) -> datetime:
    parsed = datetime.fromisoformat(str(raw))
    return parsed if parsed.tzinfo else parsed.replace(tzinfo=UTC)


@dataclass
class InMemoryStarterRepository(StarterRepository):
    """In-memory starter repository for tests."""

    starters: dict[UUID, Starter] = field(default_factory=dict)
    records: dict[UUID, list[FeedingRecord]] = field(default_factory=dict)

    def add(self, starter: Starter) -> Starter:
        self.starters[starter.id] = starter
        return starter

    def list_starters(self, user_id: UUID) -> list[Starter]:
        return [item for item in self.starters.values() if item.user_id == user_id]

    def get_starter(self, starter_id: UUID) -> Starter | None:
        starter = self.starters.get(starter_id)
        if starter is None:
            return None
        return replace(starter, feeding_history=self.list_feeding_records(starter_id))

    def create_starter(self, user_id: UUID, payload: dict[str, object]) -> Starter:
        custom_hours = payload.get("custom_hours")
        starter = Starter(
            id=uuid4(),
            user_id=user_id,
            name=str(payload["name"]),
            description=payload.get("description"),
            notes=payload.get("notes"),
            hydration=payload.get("hydration"),
            status=StarterStatus(payload.get("status", "active")),
            date_created=_parse_date(payload["date_created"]),
            last_feeding_date=_parse_date(payload["last_feeding_date"]),
            feeding_schedule=FeedingSchedule(
                frequency=FeedingFrequency(payload["feeding_frequency"]),
                custom_hours=float(custom_hours) if custom_hours else None,
            ),
        )
        return self.add(starter)

    def update_starter(self, starter_id: UUID, payload: dict[str, object]) -> Starter:
        current = self.starters[starter_id]
        updated = replace(
            current,
            status=StarterStatus(payload.get("status", current.status)),
            last_feeding_date=(
                _parse_date(payload["last_feeding_date"])
                if "last_feeding_date" in payload
                else current.last_feeding_date
            ),
        )
        self.starters[starter_id] = updated
        return updated

    def delete_starter(self, starter_id: UUID) -> None:
        self.starters.pop(starter_id, None)
        self.records.pop(starter_id, None)

    def add_feeding_record(
        self, starter_id: UUID, payload: dict[str, object]
    ) -> FeedingRecord:
        record = FeedingRecord(
            id=uuid4(),
            date=_parse_date(payload["date"]),
            flour_type=str(payload["flour_type"]),
            flour_amount=float(payload["flour_amount"]),
            water_amount=float(payload["water_amount"]),
            starter_amount=float(payload["starter_amount"]),
            temperature=payload.get("temperature"),
            notes=payload.get("notes"),
            activity_rating=payload.get("activity_rating"),
        )
        self.records.setdefault(starter_id, []).append(record)
        return record

    def delete_feeding_record(self, starter_id: UUID, record_id: UUID) -> None:
        self.records[starter_id] = [
            record
            for record in self.records.get(starter_id, [])
            if record.id != record_id
        ]

    def list_feeding_records(self, starter_id: UUID) -> list[FeedingRecord]:
        return sorted(
            self.records.get(starter_id, []),
            key=lambda record: record.date,
            reverse=True,
        )


@pytest.fixture
def captured_logs(
    caplog: pytest.LogCaptureFixture, monkeypatch: pytest.MonkeyPatch
) -> pytest.LogCaptureFixture:
    """Let caplog see app records even after configure_logging stopped propagation."""
    monkeypatch.setattr(logging.getLogger(LOGGER_NAME), "propagate", True)
    return caplog


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key=SERVICE_KEY,
    )


@pytest.fixture
def starter_repository() -> InMemoryStarterRepository:
    return InMemoryStarterRepository()


@pytest.fixture
def starter_service(starter_repository: InMemoryStarterRepository) -> StarterService:
    return StarterService(starter_repository)


@pytest.fixture
def container(settings: Settings, starter_service: StarterService) -> AppContainer:
    return AppContainer(settings=settings, starter_service=starter_service)
