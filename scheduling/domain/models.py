"""Domain models representing persisted state.

These are pure domain objects with no API input rules.
Django ORM models are in scheduling/models.py (persistence layer).
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import date, datetime, time
from decimal import Decimal
from enum import Enum
from typing import Any

from scheduling.domain.value_objects import (
    BatchId,
    Capacity,
    DiscountPercentage,
    HolidayId,
    Money,
    SessionId,
    SpotId,
    VenueId,
)


class SchedulePattern(Enum):
    """Weekly recurrence rule a batch's sessions follow."""

    MONDAY_WED_FRI = "MWF"
    TUE_THU_SAT = "TTS"
    WEEKEND_ONLY = "weekend"
    MANUAL = "manual"


class BatchStatus(Enum):
    ACTIVE = "active"
    COMPLETED = "completed"
    INACTIVE = "inactive"


class SessionOrigin(Enum):
    GENERATED = "generated"
    MANUAL = "manual"
    RESCHEDULED = "rescheduled"


class ProrationMethod(Enum):
    DAILY = "daily"
    WEEKLY = "weekly"
    NONE = "none"


# Fields whose change invalidates a generated schedule.
SCHEDULE_FIELDS = ("pattern", "start_date", "end_date", "target_session_count", "manual_dates")


@dataclass(frozen=True)
class BatchDraft:
    """Everything the generator needs to know about a batch.

    Passed explicitly into generation; nothing is remembered between calls.
    """

    name: str
    program_id: str
    venue_id: VenueId
    start_date: date
    end_date: date
    session_start_time: time
    session_end_time: time
    target_session_count: int
    pattern: SchedulePattern
    capacity: Capacity = Capacity(0)
    spot_id: SpotId | None = None
    partner_ids: tuple[str, ...] = ()
    manual_dates: tuple[date, ...] = ()
    status: BatchStatus = BatchStatus.ACTIVE
    fee: Money = Money(Decimal("0"))
    discount: DiscountPercentage = DiscountPercentage()

    def __post_init__(self) -> None:
        if self.start_date > self.end_date:
            raise ValueError("Start date must not be after end date")
        if self.session_start_time >= self.session_end_time:
            raise ValueError("Session start time must be earlier than session end time")
        if self.target_session_count < 0:
            raise ValueError("Session count cannot be negative")

    def schedule_changes(self, other: "BatchDraft") -> list[str]:
        """Return the schedule-defining fields that differ from ``other``."""
        return [name for name in SCHEDULE_FIELDS if getattr(self, name) != getattr(other, name)]

    @property
    def effective_fee(self) -> Money:
        return Money(self.discount.apply(self.fee.amount), self.fee.currency)


@dataclass(frozen=True)
class Batch:
    """Domain representation of a persisted Batch."""

    id: BatchId
    draft: BatchDraft
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class SessionDraft:
    """A generated occurrence that has not been persisted yet."""

    sequence: int
    date: date
    start_time: time
    end_time: time
    origin: SessionOrigin = SessionOrigin.GENERATED


@dataclass(frozen=True)
class Session:
    """Domain representation of a Session."""

    id: SessionId
    batch_id: BatchId
    sequence: int
    date: date
    start_time: time
    end_time: time
    origin: SessionOrigin = SessionOrigin.GENERATED
    original_date: date | None = None
    original_start_time: time | None = None
    original_end_time: time | None = None
    reschedule_reason: str = ""
    rescheduled_by: str | None = None
    rescheduled_at: datetime | None = None

    def overlaps(self, on: date, start: time, end: time) -> bool:
        return self.date == on and start < self.end_time and end > self.start_time


@dataclass(frozen=True)
class Spot:
    """A bookable area inside a venue and the hours it is open."""

    id: SpotId
    venue_id: VenueId
    name: str
    operating_days: frozenset[int]
    start_time: time
    end_time: time
    capacity: Capacity = Capacity(0)

    def is_open(self, on: date, start: time, end: time) -> bool:
        return on.weekday() in self.operating_days and self.start_time <= start and end <= self.end_time


@dataclass(frozen=True)
class Holiday(ABC):
    """A venue closure. Use one of the concrete variants."""

    venue_id: VenueId
    name: str
    id: HolidayId | None = field(default=None, kw_only=True)

    @abstractmethod
    def blocks(self, on: date) -> bool:
        """Return True if the venue is closed on ``on``."""
        ...


@dataclass(frozen=True)
class SpecificHoliday(Holiday):
    date: date

    def blocks(self, on: date) -> bool:
        return on == self.date


@dataclass(frozen=True)
class RangeHoliday(Holiday):
    start_date: date
    end_date: date

    def __post_init__(self) -> None:
        if self.end_date < self.start_date:
            raise ValueError("Holiday end date cannot be before start date")
        if self.end_date == self.start_date:
            raise ValueError("A single-day holiday must be a specific holiday, not a range")

    def blocks(self, on: date) -> bool:
        return self.start_date <= on <= self.end_date


@dataclass(frozen=True)
class RecurringHoliday(Holiday):
    """Closed every week on ``weekday`` (Monday is 0, as ``date.weekday()``)."""

    weekday: int

    def __post_init__(self) -> None:
        if not 0 <= self.weekday <= 6:
            raise ValueError("Weekday must be between 0 (Monday) and 6 (Sunday)")

    def blocks(self, on: date) -> bool:
        return on.weekday() == self.weekday


@dataclass(frozen=True)
class AuditEvent:
    """One entry handed to the audit sink."""

    event_type: str
    actor_id: str
    before: dict[str, Any]
    after: dict[str, Any]
    timestamp: datetime


@dataclass(frozen=True)
class ProrationQuote:
    """Fee owed for the partial first cycle of a member joining mid-month."""

    join_date: date
    monthly_amount: Decimal
    days_in_month: int
    days_remaining: int
    owed: Decimal
    method: ProrationMethod = ProrationMethod.DAILY
    currency: str = "INR"

    @property
    def money(self) -> Money:
        return Money(self.owed, self.currency)
