"""In-process implementation of the scheduling stores.

Holds everything in dictionaries. ``lock_batch`` takes a per-batch
``threading.Lock`` and restores the batch, its sessions and the audit log if
the block raises, so callers get the same all-or-nothing behaviour as the
Django store. A batch's lock is dropped once no caller holds or waits on it.
"""

import threading
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import datetime
from typing import Any

from scheduling.domain import (
    AuditEvent,
    Batch,
    BatchId,
    Holiday,
    Session,
    SessionId,
    Spot,
    SpotId,
    VenueId,
)
from scheduling.stores.interfaces import AuditSink, BatchStore, VenueStore


class InMemoryScheduleStore(BatchStore, VenueStore, AuditSink):
    """Dictionary-backed batch, venue and audit store."""

    def __init__(self) -> None:
        self._batches: dict[BatchId, Batch] = {}
        self._sessions: dict[BatchId, list[Session]] = {}
        self._spots: dict[SpotId, Spot] = {}
        self._holidays: dict[VenueId, list[Holiday]] = {}
        self.events: list[AuditEvent] = []
        # batch id -> [lock, callers holding or waiting]
        self._locks: dict[BatchId, list] = {}
        self._guard = threading.Lock()

    def add_spot(self, spot: Spot) -> None:
        self._spots[spot.id] = spot

    def add_holiday(self, holiday: Holiday) -> None:
        self._holidays.setdefault(holiday.venue_id, []).append(holiday)

    @contextmanager
    def lock_batch(self, batch_id: BatchId) -> Iterator[None]:
        with self._guard:
            entry = self._locks.setdefault(batch_id, [threading.Lock(), 0])
            entry[1] += 1
        try:
            with entry[0]:
                batch = self._batches.get(batch_id)
                sessions = self._sessions.get(batch_id)
                event_count = len(self.events)
                try:
                    yield
                except BaseException:
                    self._restore(batch_id, batch, sessions, event_count)
                    raise
        finally:
            with self._guard:
                entry[1] -= 1
                if entry[1] == 0:
                    del self._locks[batch_id]

    def _restore(
        self,
        batch_id: BatchId,
        batch: Batch | None,
        sessions: list[Session] | None,
        event_count: int,
    ) -> None:
        if batch is None:
            self._batches.pop(batch_id, None)
        else:
            self._batches[batch_id] = batch
        if sessions is None:
            self._sessions.pop(batch_id, None)
        else:
            self._sessions[batch_id] = sessions
        del self.events[event_count:]

    def get_batch(self, batch_id: BatchId) -> Batch | None:
        return self._batches.get(batch_id)

    def save_batch(self, batch: Batch) -> None:
        self._batches[batch.id] = batch

    def load_sessions(self, batch_id: BatchId) -> list[Session]:
        return sorted(self._sessions.get(batch_id, []), key=lambda s: s.sequence)

    def save_sessions(self, batch_id: BatchId, sessions: list[Session]) -> None:
        self._sessions[batch_id] = list(sessions)

    def get_session(self, session_id: SessionId) -> Session | None:
        for sessions in self._sessions.values():
            for session in sessions:
                if session.id == session_id:
                    return session
        return None

    def update_session(self, session: Session) -> None:
        sessions = self._sessions[session.batch_id]
        self._sessions[session.batch_id] = [
            session if existing.id == session.id else existing for existing in sessions
        ]

    def get_spot(self, spot_id: SpotId) -> Spot | None:
        return self._spots.get(spot_id)

    def get_holidays(self, venue_id: VenueId) -> list[Holiday]:
        return list(self._holidays.get(venue_id, []))

    def record(
        self,
        event_type: str,
        actor_id: str,
        before: dict[str, Any],
        after: dict[str, Any],
        timestamp: datetime,
    ) -> None:
        self.events.append(
            AuditEvent(
                event_type=event_type,
                actor_id=actor_id,
                before=before,
                after=after,
                timestamp=timestamp,
            )
        )
