"""Reschedule service - moves one session without touching the rest."""

import logging
from collections.abc import Callable
from dataclasses import replace
from datetime import date, datetime, time

from django.utils import timezone

from scheduling.conf import SchedulingSettings, get_settings
from scheduling.domain import Session, SessionId
from scheduling.domain.errors import (
    BatchNotFoundError,
    DomainError,
    InvalidIdError,
    SessionNotFoundError,
)
from scheduling.domain.holidays import HolidayResolver
from scheduling.domain.reschedule import RescheduleCoordinator, RescheduleRequest
from scheduling.services.schedule_service import session_snapshot
from scheduling.stores.interfaces import AuditSink, BatchStore, VenueStore

logger = logging.getLogger(__name__)


class RescheduleService:
    """Service for per-session reschedules."""

    def __init__(
        self,
        batches: BatchStore,
        venues: VenueStore,
        audit: AuditSink,
        settings: SchedulingSettings | None = None,
        now: Callable[[], datetime] = timezone.now,
        today: Callable[[], date] = timezone.localdate,
    ) -> None:
        self._batches = batches
        self._venues = venues
        self._audit = audit
        self._settings = settings
        self._now = now
        self._today = today

    def reschedule_session(
        self,
        session_id: str,
        new_date: date,
        new_start_time: time,
        new_end_time: time,
        reason: str,
        actor_id: str,
    ) -> Session:
        """Move a session to a new date and time.

        The batch's end date is pushed out when the new date falls after it.
        Nothing is written unless every check passes.

        Raises:
            InvalidIdError: If the session_id is not a valid UUID.
            SessionNotFoundError: If the session does not exist.
            RescheduleError: If the move breaks a scheduling rule.
        """
        try:
            parsed = SessionId.from_string(session_id)
        except (TypeError, ValueError) as exc:
            raise InvalidIdError() from exc

        located = self._batches.get_session(parsed)
        if located is None:
            raise SessionNotFoundError(session_id)

        request = RescheduleRequest(new_date, new_start_time, new_end_time, reason)
        with self._batches.lock_batch(located.batch_id):
            # Re-read under the lock; a regeneration may have replaced it.
            session = self._batches.get_session(parsed)
            if session is None:
                raise SessionNotFoundError(session_id)
            batch = self._batches.get_batch(session.batch_id)
            if batch is None:
                raise BatchNotFoundError(str(session.batch_id))

            draft = batch.draft
            coordinator = RescheduleCoordinator(
                HolidayResolver(self._venues.get_holidays(draft.venue_id)),
                spot=self._venues.get_spot(draft.spot_id) if draft.spot_id else None,
                allow_same_day=(self._settings or get_settings()).allow_same_day_sessions,
            )
            try:
                coordinator.validate(
                    draft,
                    session,
                    self._batches.load_sessions(session.batch_id),
                    request,
                    today=self._today(),
                )
            except DomainError as exc:
                logger.info(
                    "reschedule_rejected",
                    extra={"session_id": session_id, "code": exc.code.value, "details": exc.details},
                )
                raise

            now = self._now()
            moved = coordinator.apply(session, request, actor_id, now)
            self._batches.update_session(moved)

            if new_date > draft.end_date:
                self._batches.save_batch(
                    replace(batch, draft=replace(draft, end_date=new_date), updated_at=now)
                )
                self._audit.record(
                    "batch.end_date_extended",
                    actor_id,
                    before={"batch_id": str(batch.id), "end_date": draft.end_date.isoformat()},
                    after={"batch_id": str(batch.id), "end_date": new_date.isoformat()},
                    timestamp=now,
                )

            self._audit.record(
                "session.rescheduled",
                actor_id,
                before=session_snapshot(session),
                after={**session_snapshot(moved), "reason": moved.reschedule_reason},
                timestamp=now,
            )

        logger.info(
            "session_rescheduled",
            extra={
                "session_id": session_id,
                "batch_id": str(moved.batch_id),
                "from_date": session.date.isoformat(),
                "to_date": new_date.isoformat(),
                "actor_id": actor_id,
            },
        )
        return moved
