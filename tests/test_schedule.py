"""Unit tests for pattern expansion, holiday resolution and schedule generation.

Run with: pytest tests/test_schedule.py -v
"""

from datetime import date, time
from uuid import uuid4

import pytest

from scheduling.domain import (
    HolidayId,
    RangeHoliday,
    RecurringHoliday,
    SchedulePattern,
    SessionOrigin,
    SpecificHoliday,
)
from scheduling.domain.errors import (
    DateOutOfRangeError,
    DuplicateDateError,
    ErrorCategory,
    HolidayConflictError,
    InsufficientCapacityError,
    SchedulingError,
    SessionCountMismatchError,
)
from scheduling.domain.holidays import HolidayResolver
from scheduling.domain.patterns import expand
from scheduling.domain.schedule import ScheduleGenerator

JANUARY_WEEKENDS = [
    date(2025, 1, 4),
    date(2025, 1, 5),
    date(2025, 1, 11),
    date(2025, 1, 12),
    date(2025, 1, 18),
    date(2025, 1, 19),
    date(2025, 1, 25),
    date(2025, 1, 26),
]


class TestExpand:
    def test_monday_wed_fri(self):
        dates = list(expand(date(2025, 1, 6), date(2025, 1, 12), SchedulePattern.MONDAY_WED_FRI))
        assert dates == [date(2025, 1, 6), date(2025, 1, 8), date(2025, 1, 10)]

    def test_tue_thu_sat(self):
        dates = list(expand(date(2025, 1, 6), date(2025, 1, 12), SchedulePattern.TUE_THU_SAT))
        assert dates == [date(2025, 1, 7), date(2025, 1, 9), date(2025, 1, 11)]

    def test_weekend_only_covers_january(self):
        dates = list(expand(date(2025, 1, 1), date(2025, 1, 31), SchedulePattern.WEEKEND_ONLY))
        assert dates == JANUARY_WEEKENDS

    def test_range_is_inclusive_at_both_ends(self):
        dates = list(expand(date(2025, 1, 4), date(2025, 1, 5), SchedulePattern.WEEKEND_ONLY))
        assert dates == [date(2025, 1, 4), date(2025, 1, 5)]

    def test_expand_is_lazy_and_restartable(self):
        first = expand(date(2025, 1, 1), date(2025, 1, 31), SchedulePattern.WEEKEND_ONLY)
        assert next(first) == date(2025, 1, 4)
        second = expand(date(2025, 1, 1), date(2025, 1, 31), SchedulePattern.WEEKEND_ONLY)
        assert next(second) == date(2025, 1, 4)

    def test_empty_when_range_has_no_matching_day(self):
        assert list(expand(date(2025, 1, 6), date(2025, 1, 6), SchedulePattern.WEEKEND_ONLY)) == []

    def test_window_ending_on_last_representable_date(self):
        dates = list(expand(date(9999, 12, 25), date.max, SchedulePattern.WEEKEND_ONLY))
        assert len(dates) == 2
        assert all(d.weekday() in (5, 6) for d in dates)

    def test_manual_is_not_expandable(self):
        with pytest.raises(ValueError):
            expand(date(2025, 1, 1), date(2025, 1, 31), SchedulePattern.MANUAL)


class TestHolidayResolver:
    def test_any_matching_holiday_blocks(self, venue_id):
        resolver = HolidayResolver(
            [
                SpecificHoliday(venue_id, "Republic Day", date(2025, 1, 26)),
                RecurringHoliday(venue_id, "Mondays", 0),
            ]
        )
        assert resolver.is_blocked(date(2025, 1, 26))
        assert resolver.is_blocked(date(2025, 1, 6))
        assert not resolver.is_blocked(date(2025, 1, 7))

    def test_no_holidays_blocks_nothing(self):
        assert not HolidayResolver([]).is_blocked(date(2025, 1, 1))

    def test_blocking_holiday_identifies_the_match(self, venue_id):
        holiday_id = HolidayId(uuid4())
        resolver = HolidayResolver(
            [RangeHoliday(venue_id, "Winter break", date(2025, 1, 10), date(2025, 1, 12), id=holiday_id)]
        )
        assert resolver.blocking_holiday(date(2025, 1, 11)).id == holiday_id
        assert resolver.blocking_holiday(date(2025, 1, 13)) is None

    def test_blocked_dates_lists_window(self, venue_id):
        resolver = HolidayResolver(
            [
                RangeHoliday(venue_id, "Winter break", date(2025, 1, 10), date(2025, 1, 12)),
                SpecificHoliday(venue_id, "Republic Day", date(2025, 1, 26)),
            ]
        )
        assert resolver.blocked_dates(date(2025, 1, 1), date(2025, 1, 31)) == [
            date(2025, 1, 10),
            date(2025, 1, 11),
            date(2025, 1, 12),
            date(2025, 1, 26),
        ]

    def test_blocked_dates_up_to_last_representable_date(self, venue_id):
        resolver = HolidayResolver([SpecificHoliday(venue_id, "Last day", date.max)])
        assert resolver.blocked_dates(date(9999, 12, 1), date.max) == [date.max]


class TestScheduleGenerator:
    def test_weekend_batch_in_january(self, make_draft):
        """Eight weekend days in January 2025 fill an eight-session batch."""
        sessions = ScheduleGenerator(HolidayResolver([])).generate(make_draft())

        assert [s.date for s in sessions] == JANUARY_WEEKENDS
        assert [s.sequence for s in sessions] == list(range(1, 9))
        assert all(s.origin is SessionOrigin.GENERATED for s in sessions)
        assert all(s.start_time == time(9, 0) and s.end_time == time(10, 0) for s in sessions)

    def test_recurring_saturday_holiday_leaves_too_few_dates(self, make_draft, venue_id):
        resolver = HolidayResolver([RecurringHoliday(venue_id, "Saturdays", 5)])

        with pytest.raises(InsufficientCapacityError) as excinfo:
            ScheduleGenerator(resolver).generate(make_draft())

        assert excinfo.value.details == {"target": 8, "achievable": 4}
        assert excinfo.value.category is ErrorCategory.CAPACITY

    def test_holidays_are_skipped_and_schedule_extends(self, make_draft, venue_id):
        resolver = HolidayResolver([SpecificHoliday(venue_id, "Republic Day", date(2025, 1, 26))])
        draft = make_draft(end_date=date(2025, 2, 28))

        sessions = ScheduleGenerator(resolver).generate(draft)

        assert [s.date for s in sessions] == JANUARY_WEEKENDS[:7] + [date(2025, 2, 1)]

    def test_stops_once_target_is_reached(self, make_draft):
        sessions = ScheduleGenerator(HolidayResolver([])).generate(make_draft(target_session_count=3))
        assert [s.date for s in sessions] == JANUARY_WEEKENDS[:3]

    def test_generation_is_idempotent(self, make_draft, venue_id):
        resolver = HolidayResolver([SpecificHoliday(venue_id, "Republic Day", date(2025, 1, 26))])
        draft = make_draft(pattern=SchedulePattern.MONDAY_WED_FRI, target_session_count=12)
        generator = ScheduleGenerator(resolver)

        assert generator.generate(draft) == generator.generate(draft)

    def test_zero_sessions_yields_empty_schedule(self, make_draft):
        assert ScheduleGenerator(HolidayResolver([])).generate(make_draft(target_session_count=0)) == []

    @pytest.mark.parametrize(
        "pattern",
        [SchedulePattern.MONDAY_WED_FRI, SchedulePattern.TUE_THU_SAT, SchedulePattern.WEEKEND_ONLY],
    )
    def test_generated_dates_ascend_and_avoid_holidays(self, make_draft, venue_id, pattern):
        resolver = HolidayResolver(
            [
                RangeHoliday(venue_id, "Break", date(2025, 1, 13), date(2025, 1, 19)),
                RecurringHoliday(venue_id, "Fridays", 4),
            ]
        )
        draft = make_draft(pattern=pattern, end_date=date(2025, 6, 30), target_session_count=20)

        dates = [s.date for s in ScheduleGenerator(resolver).generate(draft)]

        assert len(dates) == 20
        assert dates == sorted(set(dates))
        assert not any(resolver.is_blocked(d) for d in dates)


class TestManualSchedule:
    def test_manual_dates_are_sorted_and_numbered(self, make_draft):
        draft = make_draft(
            pattern=SchedulePattern.MANUAL,
            target_session_count=3,
            manual_dates=(date(2025, 1, 20), date(2025, 1, 2), date(2025, 1, 9)),
        )

        sessions = ScheduleGenerator(HolidayResolver([])).generate(draft)

        assert [(s.sequence, s.date) for s in sessions] == [
            (1, date(2025, 1, 2)),
            (2, date(2025, 1, 9)),
            (3, date(2025, 1, 20)),
        ]
        assert all(s.origin is SessionOrigin.MANUAL for s in sessions)

    def test_count_mismatch(self, make_draft):
        draft = make_draft(
            pattern=SchedulePattern.MANUAL,
            target_session_count=3,
            manual_dates=(date(2025, 1, 2), date(2025, 1, 9)),
        )

        with pytest.raises(SessionCountMismatchError) as excinfo:
            ScheduleGenerator(HolidayResolver([])).generate(draft)

        assert excinfo.value.details == {"expected": 3, "actual": 2}

    def test_date_out_of_range(self, make_draft):
        draft = make_draft(
            pattern=SchedulePattern.MANUAL,
            target_session_count=2,
            manual_dates=(date(2025, 1, 2), date(2025, 2, 1)),
        )

        with pytest.raises(DateOutOfRangeError) as excinfo:
            ScheduleGenerator(HolidayResolver([])).generate(draft)

        assert isinstance(excinfo.value, SchedulingError)
        assert excinfo.value.details["date"] == "2025-02-01"

    def test_duplicate_date(self, make_draft):
        draft = make_draft(
            pattern=SchedulePattern.MANUAL,
            target_session_count=2,
            manual_dates=(date(2025, 1, 2), date(2025, 1, 2)),
        )

        with pytest.raises(DuplicateDateError):
            ScheduleGenerator(HolidayResolver([])).generate(draft)

    def test_duplicate_date_allowed_by_policy(self, make_draft):
        draft = make_draft(
            pattern=SchedulePattern.MANUAL,
            target_session_count=2,
            manual_dates=(date(2025, 1, 2), date(2025, 1, 2)),
        )

        sessions = ScheduleGenerator(HolidayResolver([]), allow_same_day=True).generate(draft)

        assert [s.sequence for s in sessions] == [1, 2]

    def test_holiday_date_rejected(self, make_draft, venue_id):
        resolver = HolidayResolver([SpecificHoliday(venue_id, "Republic Day", date(2025, 1, 26))])
        draft = make_draft(
            pattern=SchedulePattern.MANUAL,
            target_session_count=1,
            manual_dates=(date(2025, 1, 26),),
        )

        with pytest.raises(HolidayConflictError) as excinfo:
            ScheduleGenerator(resolver).generate(draft)

        assert isinstance(excinfo.value, SchedulingError)
        assert excinfo.value.details["holiday_name"] == "Republic Day"
