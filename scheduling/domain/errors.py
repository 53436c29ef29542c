"""Domain error codes for the scheduling module.

Every failure the engine can report is a ``DomainError`` subclass. Errors are
raised before any write happens, so callers always see the pre-operation
state when they catch one.
"""

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Any


class ErrorCode(Enum):
    """Domain error codes."""

    BATCH_NOT_FOUND = "BATCH_NOT_FOUND"
    SESSION_NOT_FOUND = "SESSION_NOT_FOUND"
    INVALID_ID = "INVALID_ID"
    INVALID_BATCH = "INVALID_BATCH"
    REGENERATION_REQUIRED = "REGENERATION_REQUIRED"
    SESSION_COUNT_MISMATCH = "SESSION_COUNT_MISMATCH"
    DATE_OUT_OF_RANGE = "DATE_OUT_OF_RANGE"
    DUPLICATE_DATE = "DUPLICATE_DATE"
    INVALID_TIME_RANGE = "INVALID_TIME_RANGE"
    MISSING_REASON = "MISSING_REASON"
    DATE_IN_PAST = "DATE_IN_PAST"
    HOLIDAY_CONFLICT = "HOLIDAY_CONFLICT"
    SPOT_UNAVAILABLE = "SPOT_UNAVAILABLE"
    SESSION_CONFLICT = "SESSION_CONFLICT"
    INSUFFICIENT_CAPACITY = "INSUFFICIENT_CAPACITY"


class ErrorCategory(Enum):
    """How a caller is expected to react to an error."""

    VALIDATION = "validation"
    CONFLICT = "conflict"
    CAPACITY = "capacity"
    NOT_FOUND = "not_found"


@dataclass(frozen=True, eq=False)
class DomainError(Exception):
    """Base domain error with code and user-safe message."""

    code: ErrorCode
    message: str
    category: ErrorCategory = ErrorCategory.VALIDATION
    details: dict[str, Any] = field(default_factory=dict)

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"


class SchedulingError(DomainError):
    """Raised when a schedule cannot be generated."""


class RescheduleError(DomainError):
    """Raised when a session move is rejected."""


class BatchNotFoundError(DomainError):
    """Raised when a batch is not found."""

    def __init__(self, batch_id: str) -> None:
        super().__init__(
            code=ErrorCode.BATCH_NOT_FOUND,
            message="Batch not found",
            category=ErrorCategory.NOT_FOUND,
            details={"batch_id": batch_id},
        )


class SessionNotFoundError(DomainError):
    """Raised when a session is not found."""

    def __init__(self, session_id: str) -> None:
        super().__init__(
            code=ErrorCode.SESSION_NOT_FOUND,
            message="Session not found",
            category=ErrorCategory.NOT_FOUND,
            details={"session_id": session_id},
        )


class InvalidIdError(DomainError):
    """Raised when an identifier is not a valid UUID."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.INVALID_ID,
            message="Invalid ID format",
        )


class InvalidBatchError(DomainError):
    """Raised when batch attributes break a batch invariant."""

    def __init__(self, reason: str) -> None:
        super().__init__(
            code=ErrorCode.INVALID_BATCH,
            message=reason,
        )


class RegenerationRequiredError(DomainError):
    """Raised when an update touches schedule fields without asking to regenerate."""

    def __init__(self, fields: list[str]) -> None:
        super().__init__(
            code=ErrorCode.REGENERATION_REQUIRED,
            message="Changing the schedule discards existing sessions; pass regenerate=true",
            details={"fields": fields},
        )


class SessionCountMismatchError(SchedulingError):
    def __init__(self, expected: int, actual: int) -> None:
        super().__init__(
            code=ErrorCode.SESSION_COUNT_MISMATCH,
            message=f"Expected {expected} session dates, got {actual}",
            details={"expected": expected, "actual": actual},
        )


class DateOutOfRangeError(DomainError):
    """Raised when a date falls outside the batch's date range."""

    def __init__(self, value: date, start_date: date, end_date: date) -> None:
        super().__init__(
            code=ErrorCode.DATE_OUT_OF_RANGE,
            message=f"{value.isoformat()} is outside {start_date.isoformat()}..{end_date.isoformat()}",
            details={
                "date": value.isoformat(),
                "start_date": start_date.isoformat(),
                "end_date": end_date.isoformat(),
            },
        )


class ScheduleDateOutOfRangeError(SchedulingError, DateOutOfRangeError):
    pass


class RescheduleDateOutOfRangeError(RescheduleError, DateOutOfRangeError):
    pass


class DuplicateDateError(SchedulingError):
    def __init__(self, value: date) -> None:
        super().__init__(
            code=ErrorCode.DUPLICATE_DATE,
            message=f"{value.isoformat()} appears more than once",
            details={"date": value.isoformat()},
        )


class InsufficientCapacityError(SchedulingError):
    """Raised when the pattern runs out of dates before the target count."""

    def __init__(self, target: int, achievable: int) -> None:
        super().__init__(
            code=ErrorCode.INSUFFICIENT_CAPACITY,
            message=f"Only {achievable} of {target} sessions fit the date range",
            category=ErrorCategory.CAPACITY,
            details={"target": target, "achievable": achievable},
        )


class MissingReasonError(RescheduleError):
    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.MISSING_REASON,
            message="A reason is required to reschedule a session",
        )


class InvalidTimeRangeError(RescheduleError):
    def __init__(self, start: Any, end: Any) -> None:
        super().__init__(
            code=ErrorCode.INVALID_TIME_RANGE,
            message="Start time must be earlier than end time",
            details={"start_time": str(start), "end_time": str(end)},
        )


class DateInPastError(RescheduleError):
    def __init__(self, value: date, today: date) -> None:
        super().__init__(
            code=ErrorCode.DATE_IN_PAST,
            message=f"{value.isoformat()} is in the past",
            details={"date": value.isoformat(), "today": today.isoformat()},
        )


class HolidayConflictError(DomainError):
    """Raised when the target date is closed at the venue."""

    def __init__(self, value: date, holiday_id: str | None, holiday_name: str) -> None:
        super().__init__(
            code=ErrorCode.HOLIDAY_CONFLICT,
            message=f"{value.isoformat()} is a venue holiday ({holiday_name})",
            category=ErrorCategory.CONFLICT,
            details={
                "date": value.isoformat(),
                "holiday_id": holiday_id,
                "holiday_name": holiday_name,
            },
        )


class ScheduleHolidayConflictError(SchedulingError, HolidayConflictError):
    pass


class RescheduleHolidayConflictError(RescheduleError, HolidayConflictError):
    pass


class SpotUnavailableError(RescheduleError):
    def __init__(self, spot_id: str, reason: str) -> None:
        super().__init__(
            code=ErrorCode.SPOT_UNAVAILABLE,
            message=reason,
            category=ErrorCategory.CONFLICT,
            details={"spot_id": spot_id},
        )


class SessionConflictError(RescheduleError):
    def __init__(self, session_id: str, sequence: int, value: date) -> None:
        super().__init__(
            code=ErrorCode.SESSION_CONFLICT,
            message=f"Session {sequence} already takes place on {value.isoformat()}",
            category=ErrorCategory.CONFLICT,
            details={
                "session_id": session_id,
                "sequence": sequence,
                "date": value.isoformat(),
            },
        )
