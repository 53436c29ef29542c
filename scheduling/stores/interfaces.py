"""Store interfaces (repository pattern).

Stores must be swappable and return domain models.
"""

from abc import ABC, abstractmethod
from contextlib import AbstractContextManager
from datetime import datetime
from typing import Any

from scheduling.domain import Batch, BatchId, Holiday, Session, SessionId, Spot, SpotId, VenueId


class BatchStore(ABC):
    """Interface for batch and session persistence operations."""

    @abstractmethod
    def lock_batch(self, batch_id: BatchId) -> AbstractContextManager[None]:
        """Serialize writers of one batch.

        Everything done inside the block commits together or not at all.
        """
        ...

    @abstractmethod
    def get_batch(self, batch_id: BatchId) -> Batch | None:
        """Return a batch by ID, or None if not found."""
        ...

    @abstractmethod
    def save_batch(self, batch: Batch) -> None:
        """Insert or update a batch."""
        ...

    @abstractmethod
    def load_sessions(self, batch_id: BatchId) -> list[Session]:
        """Return all sessions for a batch, ordered by sequence ascending."""
        ...

    @abstractmethod
    def save_sessions(self, batch_id: BatchId, sessions: list[Session]) -> None:
        """Replace every session of a batch with ``sessions``."""
        ...

    @abstractmethod
    def get_session(self, session_id: SessionId) -> Session | None:
        """Return a session by ID, or None if not found."""
        ...

    @abstractmethod
    def update_session(self, session: Session) -> None:
        """Overwrite one existing session."""
        ...


class VenueStore(ABC):
    """Interface for venue lookups the scheduler depends on."""

    @abstractmethod
    def get_spot(self, spot_id: SpotId) -> Spot | None:
        """Return a spot with its operating days and hours, or None."""
        ...

    @abstractmethod
    def get_holidays(self, venue_id: VenueId) -> list[Holiday]:
        """Return every holiday registered for a venue."""
        ...


class AuditSink(ABC):
    """Interface for recording schedule changes."""

    @abstractmethod
    def record(
        self,
        event_type: str,
        actor_id: str,
        before: dict[str, Any],
        after: dict[str, Any],
        timestamp: datetime,
    ) -> None:
        """Persist one audit entry."""
        ...
