"""Scheduling policy settings.

Read from the ``SCHEDULING`` dict in Django settings, falling back to the
defaults below for missing keys.
"""

from dataclasses import dataclass

from django.conf import settings

from scheduling.domain import ProrationMethod
from scheduling.domain.proration import ROUNDING_MODES
from scheduling.domain.value_objects import DEFAULT_MAX_CAPACITY

DEFAULTS = {
    "MAX_CAPACITY": DEFAULT_MAX_CAPACITY,
    "ALLOW_SAME_DAY_SESSIONS": False,
    "PRORATION_ROUNDING": "half_up",
    "PRORATION_METHOD": ProrationMethod.DAILY.value,
}


@dataclass(frozen=True)
class SchedulingSettings:
    max_capacity: int
    allow_same_day_sessions: bool
    proration_rounding: str
    proration_method: ProrationMethod

    def __post_init__(self) -> None:
        if self.proration_rounding not in ROUNDING_MODES:
            raise ValueError(f"Unknown PRORATION_ROUNDING {self.proration_rounding!r}")


def get_settings() -> SchedulingSettings:
    """Return the current scheduling settings.

    Resolved on every call so ``override_settings`` in tests takes effect.
    """
    values = {**DEFAULTS, **getattr(settings, "SCHEDULING", {})}
    return SchedulingSettings(
        max_capacity=int(values["MAX_CAPACITY"]),
        allow_same_day_sessions=bool(values["ALLOW_SAME_DAY_SESSIONS"]),
        proration_rounding=values["PRORATION_ROUNDING"],
        proration_method=ProrationMethod(values["PRORATION_METHOD"]),
    )
