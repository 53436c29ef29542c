"""Expansion of weekly schedule patterns into candidate dates."""

from collections.abc import Iterator
from datetime import date, timedelta

from scheduling.domain.models import SchedulePattern

MONDAY, TUESDAY, WEDNESDAY, THURSDAY, FRIDAY, SATURDAY, SUNDAY = range(7)

PATTERN_WEEKDAYS: dict[SchedulePattern, frozenset[int]] = {
    SchedulePattern.MONDAY_WED_FRI: frozenset({MONDAY, WEDNESDAY, FRIDAY}),
    SchedulePattern.TUE_THU_SAT: frozenset({TUESDAY, THURSDAY, SATURDAY}),
    SchedulePattern.WEEKEND_ONLY: frozenset({SATURDAY, SUNDAY}),
}


def expand(start_date: date, end_date: date, pattern: SchedulePattern) -> Iterator[date]:
    """Return a lazy iterator over dates in ``[start_date, end_date]`` matching ``pattern``.

    Dates come out ascending. The iterator has no side effects; call
    ``expand`` again to restart it.

    Raises:
        ValueError: If ``pattern`` is manual, which has no weekly rule.
    """
    if pattern is SchedulePattern.MANUAL:
        raise ValueError("Manual schedules are not expanded from a pattern")
    return _walk(start_date, end_date, PATTERN_WEEKDAYS[pattern])


def _walk(start_date: date, end_date: date, weekdays: frozenset[int]) -> Iterator[date]:
    # Offsets from the start never step past end_date, which may be date.max.
    for offset in range((end_date - start_date).days + 1):
        current = start_date + timedelta(days=offset)
        if current.weekday() in weekdays:
            yield current
