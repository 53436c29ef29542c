"""Domain primitives that enforce validity at creation time."""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Self
from uuid import UUID

# Ceiling of the integer column capacity is stored in. Overridable through
# SCHEDULING["MAX_CAPACITY"]; see scheduling.conf.
DEFAULT_MAX_CAPACITY = 2_147_483_647


@dataclass(frozen=True)
class BatchId:
    """Unique identifier for a Batch."""

    value: UUID

    @classmethod
    def from_string(cls, value: str) -> Self:
        return cls(value=UUID(value))

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class SessionId:
    """Unique identifier for a Session."""

    value: UUID

    @classmethod
    def from_string(cls, value: str) -> Self:
        return cls(value=UUID(value))

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class VenueId:
    """Unique identifier for a Venue."""

    value: UUID

    @classmethod
    def from_string(cls, value: str) -> Self:
        return cls(value=UUID(value))

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class SpotId:
    """Unique identifier for a bookable spot inside a Venue."""

    value: UUID

    @classmethod
    def from_string(cls, value: str) -> Self:
        return cls(value=UUID(value))

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class HolidayId:
    """Unique identifier for a Holiday."""

    value: UUID

    @classmethod
    def from_string(cls, value: str) -> Self:
        return cls(value=UUID(value))

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class Money:
    """Price representation with validation."""

    amount: Decimal
    currency: str = "INR"

    def __post_init__(self) -> None:
        if self.amount < 0:
            raise ValueError("Money amount cannot be negative")

    def __str__(self) -> str:
        return f"{self.amount:.2f} {self.currency}"


@dataclass(frozen=True)
class Capacity:
    """Non-negative integer representing capacity."""

    value: int
    ceiling: int = field(default=DEFAULT_MAX_CAPACITY, compare=False)

    def __post_init__(self) -> None:
        if self.value < 0:
            raise ValueError("Capacity cannot be negative")
        if self.value > self.ceiling:
            raise ValueError(f"Capacity cannot exceed {self.ceiling}")


@dataclass(frozen=True)
class DiscountPercentage:
    """Percentage discount between 0 and 100 inclusive."""

    value: Decimal = Decimal("0")

    def __post_init__(self) -> None:
        if not Decimal("0") <= self.value <= Decimal("100"):
            raise ValueError("Discount percentage must be between 0 and 100")

    def apply(self, amount: Decimal) -> Decimal:
        return amount * (Decimal("100") - self.value) / Decimal("100")
