"""Starter feeding endpoints."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Request

from bakery_ops.api.models import FeedingIn  # noqa: TC001

if TYPE_CHECKING:
    from bakery_ops.containers import AppContainer
    from bakery_ops.domain.starters import FeedingRecord
    from bakery_ops.services.starters import StarterFeedingView

router = APIRouter(tags=["starters"])


@router.get("/users/{user_id}/starters")
async def list_starters(user_id: UUID, request: Request) -> dict[str, object]:
    """Return a user's active starters with their feeding status."""
    container: AppContainer = request.app.state.container
    views = container.starter_service.feeding_overview(user_id, datetime.now(tz=UTC))
    return {"starters": [_view_payload(view) for view in views]}


@router.get("/users/{user_id}/starters/reminders")
async def list_reminders(user_id: UUID, request: Request) -> dict[str, object]:
    """Return starters that are due or overdue for a feeding."""
    container: AppContainer = request.app.state.container
    views = container.starter_service.starters_needing_feeding(
        user_id, datetime.now(tz=UTC)
    )
    return {"starters": [_view_payload(view) for view in views]}


@router.get("/starters/{starter_id}/feeding-status")
async def feeding_status(starter_id: UUID, request: Request) -> dict[str, object]:
    """Return the feeding status of a single starter."""
    container: AppContainer = request.app.state.container
    view = container.starter_service.feeding_status(starter_id, datetime.now(tz=UTC))
    return _view_payload(view)


@router.post("/starters/{starter_id}/feedings")
async def add_feeding(
    starter_id: UUID, feeding: FeedingIn, request: Request
) -> dict[str, object]:
    """Record a feeding for a starter."""
    container: AppContainer = request.app.state.container
    record = container.starter_service.add_feeding(
        starter_id,
        date=feeding.date,
        flour_type=feeding.flour_type,
        flour_amount=feeding.flour_amount,
        water_amount=feeding.water_amount,
        starter_amount=feeding.starter_amount,
        temperature=feeding.temperature,
        notes=feeding.notes,
        activity_rating=feeding.activity_rating,
    )
    return _record_payload(record)


@router.delete("/starters/{starter_id}/feedings/{record_id}")
async def delete_feeding(
    starter_id: UUID, record_id: UUID, request: Request
) -> dict[str, object]:
    """Delete a feeding record and return the starter's last feeding date."""
    container: AppContainer = request.app.state.container
    starter = container.starter_service.delete_feeding(starter_id, record_id)
    return {
        "id": str(starter.id),
        "last_feeding_date": starter.last_feeding_date.isoformat(),
    }


def _view_payload(view: StarterFeedingView) -> dict[str, object]:
    starter = view.starter
    return {
        "id": str(starter.id),
        "name": starter.name,
        "status": starter.status.value,
        "hydration": view.hydration,
        "frequency": view.frequency_label,
        "last_feeding_date": starter.last_feeding_date.isoformat(),
        "next_feeding": view.next_feeding.isoformat(),
        "feeding_status": view.feeding.status.value,
        "hours_until_next": view.feeding.hours_until_next,
    }


def _record_payload(record: FeedingRecord) -> dict[str, object]:
    return {
        "id": str(record.id),
        "date": record.date.isoformat(),
        "flour_type": record.flour_type,
        "flour_amount": record.flour_amount,
        "water_amount": record.water_amount,
        "starter_amount": record.starter_amount,
        "temperature": record.temperature,
        "notes": record.notes,
        "activity_rating": record.activity_rating,
    }
