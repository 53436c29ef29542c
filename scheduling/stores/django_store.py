"""Django ORM implementation of the scheduling stores."""

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import date, datetime
from typing import Any

from django.db import transaction

from scheduling import models
from scheduling.conf import get_settings
from scheduling.domain import (
    Batch,
    BatchDraft,
    BatchId,
    BatchStatus,
    Capacity,
    DiscountPercentage,
    Holiday,
    HolidayId,
    Money,
    RangeHoliday,
    RecurringHoliday,
    SchedulePattern,
    Session,
    SessionId,
    SessionOrigin,
    SpecificHoliday,
    Spot,
    SpotId,
    VenueId,
)
from scheduling.stores.interfaces import AuditSink, BatchStore, VenueStore

logger = logging.getLogger(__name__)


def _batch_to_domain(row: models.Batch) -> Batch:
    return Batch(
        id=BatchId(row.id),
        draft=BatchDraft(
            name=row.name,
            program_id=row.program_id,
            venue_id=VenueId(row.venue_id),
            spot_id=SpotId(row.spot_id) if row.spot_id else None,
            capacity=Capacity(row.capacity, ceiling=get_settings().max_capacity),
            partner_ids=tuple(row.partner_ids),
            start_date=row.start_date,
            end_date=row.end_date,
            session_start_time=row.session_start_time,
            session_end_time=row.session_end_time,
            target_session_count=row.target_session_count,
            pattern=SchedulePattern(row.pattern),
            manual_dates=tuple(date.fromisoformat(value) for value in row.manual_dates),
            status=BatchStatus(row.status),
            fee=Money(row.fee_amount, row.currency),
            discount=DiscountPercentage(row.discount_percentage),
        ),
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


def _session_to_domain(row: models.Session) -> Session:
    return Session(
        id=SessionId(row.id),
        batch_id=BatchId(row.batch_id),
        sequence=row.sequence,
        date=row.date,
        start_time=row.start_time,
        end_time=row.end_time,
        origin=SessionOrigin(row.origin),
        original_date=row.original_date,
        original_start_time=row.original_start_time,
        original_end_time=row.original_end_time,
        reschedule_reason=row.reschedule_reason,
        rescheduled_by=row.rescheduled_by,
        rescheduled_at=row.rescheduled_at,
    )


def _session_fields(session: Session) -> dict[str, Any]:
    return {
        "sequence": session.sequence,
        "date": session.date,
        "start_time": session.start_time,
        "end_time": session.end_time,
        "origin": session.origin.value,
        "original_date": session.original_date,
        "original_start_time": session.original_start_time,
        "original_end_time": session.original_end_time,
        "reschedule_reason": session.reschedule_reason,
        "rescheduled_by": session.rescheduled_by,
        "rescheduled_at": session.rescheduled_at,
    }


def _holiday_to_domain(row: models.Holiday) -> Holiday:
    venue_id = VenueId(row.venue_id)
    holiday_id = HolidayId(row.id)
    if row.holiday_type == models.Holiday.HolidayType.RECURRING:
        return RecurringHoliday(venue_id, row.name, row.recurring_day, id=holiday_id)
    if row.holiday_type == models.Holiday.HolidayType.RANGE:
        return RangeHoliday(venue_id, row.name, row.start_date, row.end_date, id=holiday_id)
    return SpecificHoliday(venue_id, row.name, row.date, id=holiday_id)


class DjangoBatchStore(BatchStore):
    """Relational batch store using Django ORM."""

    @contextmanager
    def lock_batch(self, batch_id: BatchId) -> Iterator[None]:
        with transaction.atomic():
            # Row lock held until the transaction ends; no-op for a batch
            # that is being created in this block.
            list(models.Batch.objects.select_for_update().filter(id=batch_id.value))
            yield

    def get_batch(self, batch_id: BatchId) -> Batch | None:
        row = models.Batch.objects.filter(id=batch_id.value).first()
        return _batch_to_domain(row) if row else None

    def save_batch(self, batch: Batch) -> None:
        draft = batch.draft
        models.Batch.objects.update_or_create(
            id=batch.id.value,
            defaults={
                "name": draft.name,
                "program_id": draft.program_id,
                "venue_id": draft.venue_id.value,
                "spot_id": draft.spot_id.value if draft.spot_id else None,
                "capacity": draft.capacity.value,
                "partner_ids": list(draft.partner_ids),
                "start_date": draft.start_date,
                "end_date": draft.end_date,
                "session_start_time": draft.session_start_time,
                "session_end_time": draft.session_end_time,
                "target_session_count": draft.target_session_count,
                "pattern": draft.pattern.value,
                "manual_dates": [value.isoformat() for value in draft.manual_dates],
                "status": draft.status.value,
                "fee_amount": draft.fee.amount,
                "currency": draft.fee.currency,
                "discount_percentage": draft.discount.value,
            },
        )

    def load_sessions(self, batch_id: BatchId) -> list[Session]:
        rows = models.Session.objects.filter(batch_id=batch_id.value).order_by("sequence")
        return [_session_to_domain(row) for row in rows]

    def save_sessions(self, batch_id: BatchId, sessions: list[Session]) -> None:
        deleted, _ = models.Session.objects.filter(batch_id=batch_id.value).delete()
        models.Session.objects.bulk_create(
            [
                models.Session(id=session.id.value, batch_id=batch_id.value, **_session_fields(session))
                for session in sessions
            ]
        )
        logger.debug(
            "sessions_replaced",
            extra={"batch_id": str(batch_id), "deleted": deleted, "session_count": len(sessions)},
        )

    def get_session(self, session_id: SessionId) -> Session | None:
        row = models.Session.objects.filter(id=session_id.value).first()
        return _session_to_domain(row) if row else None

    def update_session(self, session: Session) -> None:
        models.Session.objects.filter(id=session.id.value).update(**_session_fields(session))


class DjangoVenueStore(VenueStore):
    """Venue and holiday lookups using Django ORM."""

    def get_spot(self, spot_id: SpotId) -> Spot | None:
        row = models.Spot.objects.filter(id=spot_id.value).first()
        if row is None:
            return None
        return Spot(
            id=SpotId(row.id),
            venue_id=VenueId(row.venue_id),
            name=row.name,
            operating_days=frozenset(row.operating_days),
            start_time=row.start_time,
            end_time=row.end_time,
            capacity=Capacity(row.capacity),
        )

    def get_holidays(self, venue_id: VenueId) -> list[Holiday]:
        rows = models.Holiday.objects.filter(venue_id=venue_id.value)
        return [_holiday_to_domain(row) for row in rows]


class DjangoAuditSink(AuditSink):
    """Writes audit entries to the schedule audit log table."""

    def record(
        self,
        event_type: str,
        actor_id: str,
        before: dict[str, Any],
        after: dict[str, Any],
        timestamp: datetime,
    ) -> None:
        models.ScheduleAuditLog.objects.create(
            event_type=event_type,
            actor_id=actor_id,
            before=before,
            after=after,
            timestamp=timestamp,
        )
