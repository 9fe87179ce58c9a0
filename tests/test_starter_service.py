"""Tests for StarterService."""

import logging
from datetime import timedelta
from uuid import uuid4

import pytest

from bakery_ops.domain.starters import (
    FeedingFrequency,
    FeedingSchedule,
    FeedingState,
    StarterStatus,
)
from bakery_ops.services.starters import StarterNotFoundError, StarterService
from tests.conftest import NOW, InMemoryStarterRepository, make_starter


def _feed(service: StarterService, starter_id, hours_ago: float):  # noqa: ANN001, ANN202
    return service.add_feeding(
        starter_id,
        NOW - timedelta(hours=hours_ago),
        "whole wheat",
        50,
        50,
        25,
    )


def test_list_starters_filters_and_sorts(
    starter_service: StarterService, starter_repository: InMemoryStarterRepository
) -> None:
    user_id = uuid4()
    starter_repository.add(make_starter(user_id=user_id, name="rye mother"))
    starter_repository.add(
        make_starter(user_id=user_id, name="Bubbles", description="Rye and spelt")
    )
    starter_repository.add(
        make_starter(user_id=user_id, name="Old", status=StarterStatus.ARCHIVED)
    )
    starter_repository.add(make_starter(name="Someone else's"))

    names = [item.name for item in starter_service.list_starters(user_id)]
    active = starter_service.list_starters(user_id, status=StarterStatus.ACTIVE)
    rye = starter_service.list_starters(user_id, search_term="RYE")

    assert names == ["Bubbles", "Old", "rye mother"]
    assert [item.name for item in active] == ["Bubbles", "rye mother"]
    assert [item.name for item in rye] == ["Bubbles", "rye mother"]


def test_search_matches_notes(
    starter_service: StarterService, starter_repository: InMemoryStarterRepository
) -> None:
    user_id = uuid4()
    starter_repository.add(make_starter(user_id=user_id, notes="Kept in the fridge"))

    assert starter_service.list_starters(user_id, search_term="fridge")
    assert not starter_service.list_starters(user_id, search_term="counter")


def test_get_starter_missing_raises(starter_service: StarterService) -> None:
    missing = uuid4()

    with pytest.raises(StarterNotFoundError) as excinfo:
        starter_service.get_starter(missing)

    assert excinfo.value.starter_id == missing


def test_create_starter(starter_service: StarterService) -> None:
    user_id = uuid4()

    starter = starter_service.create_starter(
        user_id,
        "Levain",
        FeedingSchedule(frequency=FeedingFrequency.CUSTOM, custom_hours=36),
        NOW,
        date_created=NOW,
        hydration=100,
    )

    assert starter.user_id == user_id
    assert starter.status == StarterStatus.ACTIVE
    assert starter.feeding_schedule.custom_hours == 36
    assert starter.last_feeding_date == NOW
    assert starter_service.get_starter(starter.id).name == "Levain"


def test_create_starter_rejects_invalid_schedule(
    starter_service: StarterService,
    starter_repository: InMemoryStarterRepository,
) -> None:
    with pytest.raises(ValueError, match="custom_hours"):
        starter_service.create_starter(
            uuid4(),
            "Levain",
            FeedingSchedule(frequency=FeedingFrequency.CUSTOM),
            NOW,
        )

    assert starter_repository.starters == {}


def test_update_status(
    starter_service: StarterService, starter_repository: InMemoryStarterRepository
) -> None:
    starter = starter_repository.add(make_starter())

    updated = starter_service.update_status(starter.id, StarterStatus.DORMANT)

    assert updated.status == StarterStatus.DORMANT


def test_delete_starter(
    starter_service: StarterService, starter_repository: InMemoryStarterRepository
) -> None:
    starter = starter_repository.add(make_starter())
    _feed(starter_service, starter.id, hours_ago=1)

    starter_service.delete_starter(starter.id)

    assert starter.id not in starter_repository.starters
    assert starter.id not in starter_repository.records
    with pytest.raises(StarterNotFoundError):
        starter_service.delete_starter(starter.id)


def test_add_feeding_updates_last_feeding_date(
    starter_service: StarterService, starter_repository: InMemoryStarterRepository
) -> None:
    starter = starter_repository.add(
        make_starter(last_feeding_date=NOW - timedelta(hours=48))
    )

    record = _feed(starter_service, starter.id, hours_ago=2)

    assert record.flour_type == "whole wheat"
    stored = starter_service.get_starter(starter.id)
    assert stored.last_feeding_date == NOW - timedelta(hours=2)
    assert [item.id for item in stored.feeding_history] == [record.id]


def test_backdated_feeding_keeps_latest_date(
    starter_service: StarterService, starter_repository: InMemoryStarterRepository
) -> None:
    starter = starter_repository.add(make_starter())
    _feed(starter_service, starter.id, hours_ago=2)
    _feed(starter_service, starter.id, hours_ago=30)

    stored = starter_service.get_starter(starter.id)

    assert stored.last_feeding_date == NOW - timedelta(hours=2)


def test_add_feeding_rejects_bad_rating(
    starter_service: StarterService, starter_repository: InMemoryStarterRepository
) -> None:
    starter = starter_repository.add(make_starter())

    with pytest.raises(ValueError, match="activity_rating"):
        starter_service.add_feeding(
            starter.id, NOW, "rye", 50, 50, 25, activity_rating=6
        )

    assert starter_repository.records == {}


def test_add_feeding_missing_starter(starter_service: StarterService) -> None:
    with pytest.raises(StarterNotFoundError):
        _feed(starter_service, uuid4(), hours_ago=1)


def test_delete_feeding_rolls_back_last_feeding_date(
    starter_service: StarterService, starter_repository: InMemoryStarterRepository
) -> None:
    starter = starter_repository.add(make_starter())
    older = _feed(starter_service, starter.id, hours_ago=30)
    newer = _feed(starter_service, starter.id, hours_ago=2)

    updated = starter_service.delete_feeding(starter.id, newer.id)

    assert updated.last_feeding_date == older.date


def test_delete_last_feeding_keeps_date(
    starter_service: StarterService, starter_repository: InMemoryStarterRepository
) -> None:
    starter = starter_repository.add(make_starter())
    record = _feed(starter_service, starter.id, hours_ago=5)

    updated = starter_service.delete_feeding(starter.id, record.id)

    assert updated.last_feeding_date == record.date
    assert updated.feeding_history == []


def test_feeding_status_view(
    starter_service: StarterService, starter_repository: InMemoryStarterRepository
) -> None:
    starter = starter_repository.add(
        make_starter(last_feeding_date=NOW - timedelta(hours=20))
    )

    view = starter_service.feeding_status(starter.id, NOW)

    assert view.feeding.status == FeedingState.OK
    assert view.feeding.hours_until_next == 4
    assert view.next_feeding == NOW + timedelta(hours=4)
    assert view.frequency_label == "Daily"
    assert view.hydration == 75.0


def test_feeding_status_uses_starter_hydration(
    starter_repository: InMemoryStarterRepository,
) -> None:
    service = StarterService(starter_repository, default_hydration=80.0)
    plain = starter_repository.add(make_starter())
    stiff = starter_repository.add(make_starter(hydration=50))

    assert service.feeding_status(plain.id, NOW).hydration == 80.0
    assert service.feeding_status(stiff.id, NOW).hydration == 50


def test_starters_needing_feeding(
    starter_service: StarterService,
    starter_repository: InMemoryStarterRepository,
    captured_logs: pytest.LogCaptureFixture,
) -> None:
    user_id = uuid4()
    starter_repository.add(
        make_starter(user_id=user_id, name="Fed", last_feeding_date=NOW)
    )
    starter_repository.add(
        make_starter(
            user_id=user_id, name="Due", last_feeding_date=NOW - timedelta(hours=26)
        )
    )
    starter_repository.add(
        make_starter(
            user_id=user_id,
            name="Overdue",
            last_feeding_date=NOW - timedelta(hours=40),
        )
    )
    starter_repository.add(
        make_starter(
            user_id=user_id,
            name="Sleeping",
            last_feeding_date=NOW - timedelta(days=30),
            status=StarterStatus.DORMANT,
        )
    )

    with captured_logs.at_level(
        logging.INFO, logger="bakery_ops.services.starters"
    ):
        views = starter_service.starters_needing_feeding(user_id, NOW)

    assert [view.starter.name for view in views] == ["Overdue", "Due"]
    assert [view.feeding.status for view in views] == [
        FeedingState.OVERDUE,
        FeedingState.DUE,
    ]
    assert "2 starter(s) needing feeding" in captured_logs.text


def test_feeding_overview_only_active(
    starter_service: StarterService, starter_repository: InMemoryStarterRepository
) -> None:
    user_id = uuid4()
    starter_repository.add(make_starter(user_id=user_id, name="A"))
    starter_repository.add(
        make_starter(user_id=user_id, name="B", status=StarterStatus.ARCHIVED)
    )

    views = starter_service.feeding_overview(user_id, NOW)

    assert [view.starter.name for view in views] == ["A"]
