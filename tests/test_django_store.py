"""Integration tests for the Django ORM stores.

Run with: pytest tests/test_django_store.py -v
"""

from datetime import date, datetime, time, timezone
from decimal import Decimal
from uuid import uuid4

import pytest
from django.core.exceptions import ValidationError
from django.db import IntegrityError, transaction

from scheduling import models
from scheduling.domain import (
    Batch,
    BatchId,
    Capacity,
    DiscountPercentage,
    Money,
    RangeHoliday,
    RecurringHoliday,
    SchedulePattern,
    Session,
    SessionId,
    SessionOrigin,
    SpecificHoliday,
    SpotId,
    VenueId,
)
from scheduling.stores import DjangoAuditSink, DjangoBatchStore, DjangoVenueStore

NOW = datetime(2025, 1, 1, 9, 0, tzinfo=timezone.utc)


@pytest.fixture
def venue() -> models.Venue:
    return models.Venue.objects.create(name="Riverside Arena")


@pytest.fixture
def stored_batch(venue, make_draft) -> Batch:
    batch = Batch(
        id=BatchId(uuid4()),
        draft=make_draft(
            venue_id=VenueId(venue.id),
            pattern=SchedulePattern.MANUAL,
            target_session_count=2,
            manual_dates=(date(2025, 1, 2), date(2025, 1, 9)),
            partner_ids=("coach-7",),
            fee=Money(Decimal("2500.50")),
            discount=DiscountPercentage(Decimal("12.5")),
        ),
        created_at=NOW,
        updated_at=NOW,
    )
    DjangoBatchStore().save_batch(batch)
    return batch


def _session(batch_id: BatchId, sequence: int, on: date) -> Session:
    return Session(
        id=SessionId(uuid4()),
        batch_id=batch_id,
        sequence=sequence,
        date=on,
        start_time=time(9, 0),
        end_time=time(10, 0),
        origin=SessionOrigin.MANUAL,
    )


@pytest.mark.django_db
class TestDjangoBatchStore:
    def test_batch_round_trip(self, stored_batch):
        loaded = DjangoBatchStore().get_batch(stored_batch.id)

        assert loaded.draft == stored_batch.draft

    def test_missing_batch_is_none(self):
        assert DjangoBatchStore().get_batch(BatchId(uuid4())) is None

    def test_save_sessions_replaces_previous_set(self, stored_batch):
        store = DjangoBatchStore()
        store.save_sessions(stored_batch.id, [_session(stored_batch.id, 1, date(2025, 1, 2))])
        replacement = [
            _session(stored_batch.id, 2, date(2025, 1, 9)),
            _session(stored_batch.id, 1, date(2025, 1, 2)),
        ]

        store.save_sessions(stored_batch.id, replacement)

        loaded = store.load_sessions(stored_batch.id)
        assert [s.sequence for s in loaded] == [1, 2]
        assert {s.id for s in loaded} == {s.id for s in replacement}

    def test_update_session_keeps_reschedule_fields(self, stored_batch):
        store = DjangoBatchStore()
        session = _session(stored_batch.id, 1, date(2025, 1, 2))
        store.save_sessions(stored_batch.id, [session])
        moved = Session(
            id=session.id,
            batch_id=session.batch_id,
            sequence=1,
            date=date(2025, 1, 3),
            start_time=time(11, 0),
            end_time=time(12, 0),
            origin=SessionOrigin.RESCHEDULED,
            original_date=session.date,
            original_start_time=session.start_time,
            original_end_time=session.end_time,
            reschedule_reason="Rain",
            rescheduled_by="admin-1",
            rescheduled_at=NOW,
        )

        store.update_session(moved)

        assert store.get_session(session.id) == moved

    def test_lock_batch_rolls_back_on_error(self, stored_batch):
        store = DjangoBatchStore()

        with pytest.raises(RuntimeError):
            with store.lock_batch(stored_batch.id):
                store.save_sessions(stored_batch.id, [_session(stored_batch.id, 1, date(2025, 1, 2))])
                raise RuntimeError("abort")

        assert store.load_sessions(stored_batch.id) == []


@pytest.mark.django_db
class TestDjangoVenueStore:
    def test_holiday_variants_are_mapped(self, venue):
        models.Holiday.objects.create(
            venue=venue,
            name="Republic Day",
            holiday_type=models.Holiday.HolidayType.SPECIFIC,
            date=date(2025, 1, 26),
        )
        models.Holiday.objects.create(
            venue=venue,
            name="Winter break",
            holiday_type=models.Holiday.HolidayType.RANGE,
            start_date=date(2025, 1, 10),
            end_date=date(2025, 1, 12),
        )
        models.Holiday.objects.create(
            venue=venue,
            name="Mondays",
            holiday_type=models.Holiday.HolidayType.RECURRING,
            recurring_day=0,
        )

        holidays = DjangoVenueStore().get_holidays(VenueId(venue.id))

        kinds = {type(holiday) for holiday in holidays}
        assert kinds == {SpecificHoliday, RangeHoliday, RecurringHoliday}
        assert all(holiday.id is not None for holiday in holidays)

    def test_holidays_are_scoped_to_venue(self, venue):
        other = models.Venue.objects.create(name="Hillside")
        models.Holiday.objects.create(
            venue=other,
            name="Elsewhere",
            holiday_type=models.Holiday.HolidayType.SPECIFIC,
            date=date(2025, 1, 26),
        )

        assert DjangoVenueStore().get_holidays(VenueId(venue.id)) == []

    def test_get_spot(self, venue):
        row = models.Spot.objects.create(
            venue=venue,
            name="Court 1",
            operating_days=[5, 6],
            start_time=time(8, 0),
            end_time=time(20, 0),
            capacity=12,
        )

        spot = DjangoVenueStore().get_spot(SpotId(row.id))

        assert spot.operating_days == frozenset({5, 6})
        assert spot.capacity == Capacity(12)

    def test_missing_spot_is_none(self):
        assert DjangoVenueStore().get_spot(SpotId(uuid4())) is None


@pytest.mark.django_db
class TestDjangoAuditSink:
    def test_record_writes_log_row(self):
        DjangoAuditSink().record(
            "session.rescheduled",
            "admin-1",
            before={"date": "2025-01-04"},
            after={"date": "2025-01-07", "reason": "Rain"},
            timestamp=NOW,
        )

        row = models.ScheduleAuditLog.objects.get()
        assert row.event_type == "session.rescheduled"
        assert row.after["reason"] == "Rain"
        assert row.timestamp == NOW


INVALID_HOLIDAYS = [
    pytest.param({"holiday_type": "range", "start_date": date(2025, 1, 10), "end_date": date(2025, 1, 10)}, id="range-one-day"),
    pytest.param({"holiday_type": "range", "start_date": date(2025, 1, 12), "end_date": date(2025, 1, 10)}, id="range-backwards"),
    pytest.param({"holiday_type": "range", "start_date": date(2025, 1, 10)}, id="range-open-ended"),
    pytest.param({"holiday_type": "specific"}, id="specific-without-date"),
    pytest.param({"holiday_type": "recurring"}, id="recurring-without-day"),
    pytest.param({"holiday_type": "recurring", "recurring_day": 7}, id="recurring-day-out-of-range"),
]


@pytest.mark.django_db
class TestHolidayRows:
    """Holiday rows the domain cannot represent never reach the table."""

    @pytest.mark.parametrize("fields", INVALID_HOLIDAYS)
    def test_database_rejects_invalid_holiday(self, venue, fields):
        with pytest.raises(IntegrityError), transaction.atomic():
            models.Holiday.objects.create(venue=venue, name="Closed", **fields)

    @pytest.mark.parametrize("fields", INVALID_HOLIDAYS)
    def test_validation_rejects_invalid_holiday(self, venue, fields):
        with pytest.raises(ValidationError):
            models.Holiday(venue=venue, name="Closed", **fields).full_clean()

    def test_valid_range_passes_validation(self, venue):
        holiday = models.Holiday(
            venue=venue,
            name="Winter break",
            holiday_type=models.Holiday.HolidayType.RANGE,
            start_date=date(2025, 1, 10),
            end_date=date(2025, 1, 11),
        )
        holiday.full_clean()
