"""Venue closure lookup."""

from collections.abc import Iterable
from datetime import date, timedelta

from scheduling.domain.models import Holiday


class HolidayResolver:
    """Answers whether a date is closed, given one venue's holidays.

    Any single matching holiday blocks the date; there is no precedence
    between specific, range and recurring closures.
    """

    def __init__(self, holidays: Iterable[Holiday]) -> None:
        self._holidays = tuple(holidays)

    def __len__(self) -> int:
        return len(self._holidays)

    def is_blocked(self, on: date) -> bool:
        return any(holiday.blocks(on) for holiday in self._holidays)

    def blocking_holiday(self, on: date) -> Holiday | None:
        """Return the first holiday that blocks ``on``, or None."""
        for holiday in self._holidays:
            if holiday.blocks(on):
                return holiday
        return None

    def blocked_dates(self, start_date: date, end_date: date) -> list[date]:
        """Return every blocked date in ``[start_date, end_date]``, ascending."""
        days = (start_date + timedelta(days=offset) for offset in range((end_date - start_date).days + 1))
        return [day for day in days if self.is_blocked(day)]
