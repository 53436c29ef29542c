from scheduling.domain.models import (
    AuditEvent,
    Batch,
    BatchDraft,
    BatchStatus,
    Holiday,
    ProrationMethod,
    ProrationQuote,
    RangeHoliday,
    RecurringHoliday,
    SchedulePattern,
    Session,
    SessionDraft,
    SessionOrigin,
    SpecificHoliday,
    Spot,
)
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

__all__ = [
    "AuditEvent",
    "Batch",
    "BatchDraft",
    "BatchStatus",
    "Holiday",
    "SpecificHoliday",
    "RangeHoliday",
    "RecurringHoliday",
    "ProrationMethod",
    "ProrationQuote",
    "SchedulePattern",
    "Session",
    "SessionDraft",
    "SessionOrigin",
    "Spot",
    "BatchId",
    "SessionId",
    "VenueId",
    "SpotId",
    "HolidayId",
    "Money",
    "Capacity",
    "DiscountPercentage",
]
