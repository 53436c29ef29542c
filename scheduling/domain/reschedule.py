"""Validation and application of single-session moves."""

from collections.abc import Iterable
from dataclasses import dataclass, replace
from datetime import date, datetime, time

from scheduling.domain.errors import (
    DateInPastError,
    InvalidTimeRangeError,
    MissingReasonError,
    RescheduleDateOutOfRangeError,
    RescheduleHolidayConflictError,
    SessionConflictError,
    SpotUnavailableError,
)
from scheduling.domain.holidays import HolidayResolver
from scheduling.domain.models import BatchDraft, Session, SessionOrigin, Spot
from scheduling.domain.value_objects import SpotId

WEEKDAY_NAMES = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")


@dataclass(frozen=True)
class RescheduleRequest:
    new_date: date
    new_start_time: time
    new_end_time: time
    reason: str


class RescheduleCoordinator:
    """Checks a requested move against one batch's calendar.

    Checks run in a fixed order and the first failure is raised. The session
    itself is never counted as a conflict with its own new slot.
    """

    def __init__(
        self,
        resolver: HolidayResolver,
        spot: Spot | None = None,
        allow_same_day: bool = False,
    ) -> None:
        self._resolver = resolver
        self._spot = spot
        self._allow_same_day = allow_same_day

    def validate(
        self,
        draft: BatchDraft,
        session: Session,
        siblings: Iterable[Session],
        request: RescheduleRequest,
        today: date,
    ) -> None:
        """Raise the first rule ``request`` breaks, or return None.

        Raises:
            MissingReasonError
            InvalidTimeRangeError
            DateInPastError
            RescheduleDateOutOfRangeError: The new date is before the batch starts.
            RescheduleHolidayConflictError
            SpotUnavailableError
            SessionConflictError
        """
        if not request.reason or not request.reason.strip():
            raise MissingReasonError()
        if request.new_start_time >= request.new_end_time:
            raise InvalidTimeRangeError(request.new_start_time, request.new_end_time)
        if request.new_date < today:
            raise DateInPastError(request.new_date, today)
        if request.new_date < draft.start_date:
            raise RescheduleDateOutOfRangeError(request.new_date, draft.start_date, draft.end_date)

        holiday = self._resolver.blocking_holiday(request.new_date)
        if holiday is not None:
            raise RescheduleHolidayConflictError(
                request.new_date, str(holiday.id) if holiday.id else None, holiday.name
            )

        if draft.spot_id is not None:
            self._check_spot(draft.spot_id, request)

        for other in siblings:
            if other.id == session.id:
                continue
            if self._collides(other, request):
                raise SessionConflictError(str(other.id), other.sequence, request.new_date)

    def apply(
        self,
        session: Session,
        request: RescheduleRequest,
        actor_id: str,
        now: datetime,
    ) -> Session:
        """Return ``session`` moved to the requested slot.

        The original slot is captured on the first move only.
        """
        first_move = session.original_date is None
        return replace(
            session,
            date=request.new_date,
            start_time=request.new_start_time,
            end_time=request.new_end_time,
            origin=SessionOrigin.RESCHEDULED,
            original_date=session.date if first_move else session.original_date,
            original_start_time=session.start_time if first_move else session.original_start_time,
            original_end_time=session.end_time if first_move else session.original_end_time,
            reschedule_reason=request.reason.strip(),
            rescheduled_by=actor_id,
            rescheduled_at=now,
        )

    def _check_spot(self, spot_id: SpotId, request: RescheduleRequest) -> None:
        spot = self._spot
        if spot is None:
            raise SpotUnavailableError(str(spot_id), "The batch's spot no longer exists")
        if request.new_date.weekday() not in spot.operating_days:
            raise SpotUnavailableError(
                str(spot.id),
                f"{spot.name} is closed on {WEEKDAY_NAMES[request.new_date.weekday()]}s",
            )
        if not spot.is_open(request.new_date, request.new_start_time, request.new_end_time):
            raise SpotUnavailableError(
                str(spot.id),
                f"{spot.name} is open {spot.start_time:%H:%M}-{spot.end_time:%H:%M}",
            )

    def _collides(self, other: Session, request: RescheduleRequest) -> bool:
        if not self._allow_same_day:
            return other.date == request.new_date
        return other.overlaps(request.new_date, request.new_start_time, request.new_end_time)
