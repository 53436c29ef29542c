"""Schedule generation: turns a batch draft into an ordered list of sessions."""

from collections.abc import Iterable
from datetime import date

from scheduling.domain.errors import (
    DuplicateDateError,
    InsufficientCapacityError,
    ScheduleDateOutOfRangeError,
    ScheduleHolidayConflictError,
    SessionCountMismatchError,
)
from scheduling.domain.holidays import HolidayResolver
from scheduling.domain.models import BatchDraft, SchedulePattern, SessionDraft, SessionOrigin
from scheduling.domain.patterns import expand


class ScheduleGenerator:
    """Builds session drafts for a batch.

    Pattern schedules pull candidate dates from the pattern expander and skip
    holidays until the target count is met. Manual schedules take the
    caller's dates as-is after validating them. Either way the result holds
    exactly ``target_session_count`` sessions or an error is raised.
    """

    def __init__(self, resolver: HolidayResolver, allow_same_day: bool = False) -> None:
        self._resolver = resolver
        self._allow_same_day = allow_same_day

    def generate(self, draft: BatchDraft) -> list[SessionDraft]:
        """Return session drafts numbered 1..N in date order.

        Raises:
            SessionCountMismatchError: Manual dates do not match the target count.
            ScheduleDateOutOfRangeError: A manual date lies outside the batch range.
            ScheduleHolidayConflictError: A manual date is a venue holiday.
            DuplicateDateError: A date repeats and same-day sessions are not allowed.
            InsufficientCapacityError: The pattern ran out of dates before the target.
        """
        if draft.pattern is SchedulePattern.MANUAL:
            dates = self._manual_dates(draft)
            origin = SessionOrigin.MANUAL
        else:
            dates = self._pattern_dates(draft)
            origin = SessionOrigin.GENERATED
            self._check_duplicates(dates)

        return [
            SessionDraft(
                sequence=sequence,
                date=session_date,
                start_time=draft.session_start_time,
                end_time=draft.session_end_time,
                origin=origin,
            )
            for sequence, session_date in enumerate(sorted(dates), start=1)
        ]

    def _manual_dates(self, draft: BatchDraft) -> list[date]:
        dates = list(draft.manual_dates)
        if len(dates) != draft.target_session_count:
            raise SessionCountMismatchError(draft.target_session_count, len(dates))
        for session_date in dates:
            if not draft.start_date <= session_date <= draft.end_date:
                raise ScheduleDateOutOfRangeError(session_date, draft.start_date, draft.end_date)
        self._check_duplicates(dates)
        for session_date in dates:
            holiday = self._resolver.blocking_holiday(session_date)
            if holiday is not None:
                raise ScheduleHolidayConflictError(
                    session_date, str(holiday.id) if holiday.id else None, holiday.name
                )
        return dates

    def _pattern_dates(self, draft: BatchDraft) -> list[date]:
        dates: list[date] = []
        if draft.target_session_count == 0:
            return dates
        for candidate in expand(draft.start_date, draft.end_date, draft.pattern):
            if self._resolver.is_blocked(candidate):
                continue
            dates.append(candidate)
            if len(dates) == draft.target_session_count:
                return dates
        raise InsufficientCapacityError(draft.target_session_count, len(dates))

    def _check_duplicates(self, dates: Iterable[date]) -> None:
        if self._allow_same_day:
            return
        seen: set[date] = set()
        for session_date in dates:
            if session_date in seen:
                raise DuplicateDateError(session_date)
            seen.add(session_date)
