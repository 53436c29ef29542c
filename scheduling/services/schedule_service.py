"""Schedule service - batch creation, generation and regeneration.

Services:
- Depend only on interfaces (stores)
- Validate domain invariants
- Perform orchestration and error mapping
- Return domain models or domain errors
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass, replace
from datetime import date, datetime
from typing import Any
from uuid import uuid4

from django.utils import timezone

from scheduling.conf import SchedulingSettings, get_settings
from scheduling.domain import (
    Batch,
    BatchDraft,
    BatchId,
    BatchStatus,
    Capacity,
    Session,
    SessionDraft,
    SessionId,
    VenueId,
)
from scheduling.domain.errors import (
    BatchNotFoundError,
    DomainError,
    InvalidBatchError,
    InvalidIdError,
    RegenerationRequiredError,
)
from scheduling.domain.holidays import HolidayResolver
from scheduling.domain.schedule import ScheduleGenerator
from scheduling.stores.interfaces import AuditSink, BatchStore, VenueStore

logger = logging.getLogger(__name__)


def parse_batch_id(batch_id: str) -> BatchId:
    try:
        return BatchId.from_string(batch_id)
    except (TypeError, ValueError) as exc:
        raise InvalidIdError() from exc


def session_snapshot(session: Session) -> dict[str, Any]:
    """JSON-safe view of a session for audit entries."""
    return {
        "session_id": str(session.id),
        "batch_id": str(session.batch_id),
        "sequence": session.sequence,
        "date": session.date.isoformat(),
        "start_time": session.start_time.isoformat(),
        "end_time": session.end_time.isoformat(),
        "origin": session.origin.value,
    }


@dataclass(frozen=True)
class BatchProgress:
    total: int
    completed: int
    status: BatchStatus

    @property
    def percent(self) -> int:
        if self.total == 0:
            return 0
        return round(self.completed * 100 / self.total)


class ScheduleService:
    """Service for batch schedule operations."""

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

    @property
    def settings(self) -> SchedulingSettings:
        return self._settings or get_settings()

    def resolver_for(self, venue_id: VenueId) -> HolidayResolver:
        return HolidayResolver(self._venues.get_holidays(venue_id))

    def is_blocked(self, venue_id: VenueId, on: date) -> bool:
        """Return True if ``on`` is a holiday at the venue."""
        return self.resolver_for(venue_id).is_blocked(on)

    def blocked_dates(self, venue_id: VenueId, start_date: date, end_date: date) -> list[date]:
        return self.resolver_for(venue_id).blocked_dates(start_date, end_date)

    def preview_schedule(self, draft: BatchDraft) -> list[SessionDraft]:
        """Generate session drafts for ``draft`` without persisting anything.

        Raises:
            InvalidBatchError: If the draft's capacity exceeds the configured ceiling.
            SchedulingError: If the schedule cannot be generated.
        """
        self._check_capacity(draft)
        generator = ScheduleGenerator(
            self.resolver_for(draft.venue_id),
            allow_same_day=self.settings.allow_same_day_sessions,
        )
        return generator.generate(draft)

    def create_batch(self, draft: BatchDraft, actor_id: str) -> tuple[Batch, list[Session]]:
        """Create a batch and generate its sessions in one transaction."""
        now = self._now()
        batch = Batch(id=BatchId(uuid4()), draft=draft, created_at=now, updated_at=now)
        with self._batches.lock_batch(batch.id):
            drafts = self._preview_logged(batch.id, draft)
            self._batches.save_batch(batch)
            sessions = self._replace_sessions(batch.id, drafts, actor_id, previous=[])
        logger.info(
            "batch_created",
            extra={"batch_id": str(batch.id), "sessions": len(sessions), "actor_id": actor_id},
        )
        return batch, sessions

    def generate_schedule(self, batch_id: str, actor_id: str) -> list[Session]:
        """Regenerate every session of a stored batch from its draft.

        Destructive: existing sessions, reschedules included, are replaced.

        Raises:
            InvalidIdError: If the batch_id is not a valid UUID.
            BatchNotFoundError: If the batch does not exist.
            SchedulingError: If the schedule cannot be generated.
        """
        parsed = parse_batch_id(batch_id)
        with self._batches.lock_batch(parsed):
            batch = self._get_batch(parsed)
            drafts = self._preview_logged(parsed, batch.draft)
            previous = self._batches.load_sessions(parsed)
            return self._replace_sessions(parsed, drafts, actor_id, previous)

    def update_batch(
        self,
        batch_id: str,
        draft: BatchDraft,
        actor_id: str,
        regenerate: bool = False,
    ) -> tuple[Batch, list[Session], bool]:
        """Store new batch attributes.

        Edits that leave the pattern, date range, count and manual dates alone
        never touch sessions. Edits to any of those discard the schedule and
        generate a new one, which the caller must ask for explicitly.

        Returns:
            The updated batch, its sessions and whether they were regenerated.

        Raises:
            RegenerationRequiredError: If schedule fields changed and
                ``regenerate`` is False.
        """
        parsed = parse_batch_id(batch_id)
        with self._batches.lock_batch(parsed):
            current = self._get_batch(parsed)
            changed = draft.schedule_changes(current.draft)
            if changed and not regenerate:
                raise RegenerationRequiredError(changed)

            self._check_capacity(draft)
            updated = replace(current, draft=draft, updated_at=self._now())
            if changed:
                drafts = self._preview_logged(parsed, draft)
                previous = self._batches.load_sessions(parsed)
                self._batches.save_batch(updated)
                sessions = self._replace_sessions(parsed, drafts, actor_id, previous)
            else:
                self._batches.save_batch(updated)
                sessions = self._batches.load_sessions(parsed)

        logger.info(
            "batch_updated",
            extra={"batch_id": batch_id, "regenerated": bool(changed), "fields": changed},
        )
        return updated, sessions, bool(changed)

    def get_batch(self, batch_id: str) -> Batch:
        return self._get_batch(parse_batch_id(batch_id))

    def get_sessions(self, batch_id: str) -> list[Session]:
        """Return a batch's sessions ordered by sequence.

        Raises:
            InvalidIdError: If the batch_id is not a valid UUID.
            BatchNotFoundError: If the batch does not exist.
        """
        parsed = parse_batch_id(batch_id)
        self._get_batch(parsed)
        return self._batches.load_sessions(parsed)

    def get_progress(self, batch_id: str) -> BatchProgress:
        """Report how many sessions have already taken place."""
        parsed = parse_batch_id(batch_id)
        batch = self._get_batch(parsed)
        sessions = self._batches.load_sessions(parsed)
        today = self._today()
        completed = sum(1 for session in sessions if session.date < today)
        status = batch.draft.status
        if sessions and completed == len(sessions) and status is BatchStatus.ACTIVE:
            status = BatchStatus.COMPLETED
        return BatchProgress(total=len(sessions), completed=completed, status=status)

    def _get_batch(self, batch_id: BatchId) -> Batch:
        batch = self._batches.get_batch(batch_id)
        if batch is None:
            raise BatchNotFoundError(str(batch_id))
        return batch

    def _check_capacity(self, draft: BatchDraft) -> None:
        try:
            Capacity(draft.capacity.value, ceiling=self.settings.max_capacity)
        except ValueError as exc:
            raise InvalidBatchError(str(exc)) from exc

    def _preview_logged(self, batch_id: BatchId, draft: BatchDraft) -> list[SessionDraft]:
        try:
            return self.preview_schedule(draft)
        except DomainError as exc:
            logger.info(
                "schedule_rejected",
                extra={"batch_id": str(batch_id), "code": exc.code.value, "details": exc.details},
            )
            raise

    def _replace_sessions(
        self,
        batch_id: BatchId,
        drafts: list[SessionDraft],
        actor_id: str,
        previous: list[Session],
    ) -> list[Session]:
        sessions = [
            Session(
                id=SessionId(uuid4()),
                batch_id=batch_id,
                sequence=draft.sequence,
                date=draft.date,
                start_time=draft.start_time,
                end_time=draft.end_time,
                origin=draft.origin,
            )
            for draft in drafts
        ]
        self._batches.save_sessions(batch_id, sessions)
        if previous:
            logger.warning(
                "schedule_regenerated",
                extra={"batch_id": str(batch_id), "discarded": len(previous), "session_count": len(sessions)},
            )
        else:
            logger.info("schedule_generated", extra={"batch_id": str(batch_id), "session_count": len(sessions)})
        self._audit.record(
            "schedule.generated",
            actor_id,
            before={"sessions": [session_snapshot(session) for session in previous]},
            after={"sessions": [session_snapshot(session) for session in sessions]},
            timestamp=self._now(),
        )
        return sessions
