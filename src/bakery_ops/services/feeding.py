"""Starter feeding schedule calculations."""

import logging
from datetime import datetime, timedelta

from bakery_ops.domain.starters import (
    FeedingFrequency,
    FeedingSchedule,
    FeedingState,
    FeedingStatus,
    Starter,
)

_logger = logging.getLogger(__name__)

FEEDING_INTERVAL_HOURS: dict[FeedingFrequency, float] = {
    FeedingFrequency.TWICE_DAILY: 12,
    FeedingFrequency.DAILY: 24,
    FeedingFrequency.EVERY_OTHER_DAY: 48,
    FeedingFrequency.WEEKLY: 168,
}
DEFAULT_INTERVAL_HOURS = 24
# Hours after the scheduled time during which a feeding is "due", not "overdue".
GRACE_WINDOW_HOURS = 6

_FREQUENCY_LABELS = {
    FeedingFrequency.TWICE_DAILY: "Twice Daily",
    FeedingFrequency.DAILY: "Daily",
    FeedingFrequency.EVERY_OTHER_DAY: "Every Other Day",
    FeedingFrequency.WEEKLY: "Weekly",
}


def feeding_interval_hours(schedule: FeedingSchedule) -> float:
    """Return the number of hours between feedings for a schedule."""
    if schedule.frequency == FeedingFrequency.CUSTOM:
        if schedule.custom_hours:
            return schedule.custom_hours
        _logger.warning(
            "Custom feeding schedule without custom_hours, using %sh",
            DEFAULT_INTERVAL_HOURS,
        )
        return DEFAULT_INTERVAL_HOURS
    return FEEDING_INTERVAL_HOURS.get(schedule.frequency, DEFAULT_INTERVAL_HOURS)


def calculate_next_feeding(
    last_feeding_date: datetime, schedule: FeedingSchedule
) -> datetime:
    """Return when the starter should next be fed."""
    return last_feeding_date + timedelta(hours=feeding_interval_hours(schedule))


def get_feeding_status(starter: Starter, now: datetime) -> FeedingStatus:
    """Classify a starter as ok, due or overdue at ``now``.

    ``hours_until_next`` counts whole hours and goes negative once the
    scheduled time has passed.
    """
    next_feeding = calculate_next_feeding(
        starter.last_feeding_date, starter.feeding_schedule
    )
    if next_feeding > now:
        return FeedingStatus(
            status=FeedingState.OK,
            hours_until_next=_whole_hours(next_feeding - now),
        )

    hours_since = _whole_hours(now - next_feeding)
    if hours_since <= GRACE_WINDOW_HOURS:
        return FeedingStatus(status=FeedingState.DUE, hours_until_next=-hours_since)
    return FeedingStatus(status=FeedingState.OVERDUE, hours_until_next=-hours_since)


def format_feeding_frequency(schedule: FeedingSchedule) -> str:
    """Return a human label for a feeding schedule."""
    if schedule.frequency == FeedingFrequency.CUSTOM:
        hours = feeding_interval_hours(schedule)
        return f"Every {hours:g} hours"
    return _FREQUENCY_LABELS.get(schedule.frequency, "Daily")


def _whole_hours(delta: timedelta) -> int:
    return int(delta.total_seconds() / 3600)
