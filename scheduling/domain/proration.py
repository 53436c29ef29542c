"""Fee proration for members joining part way through a monthly cycle."""

import calendar
import math
from datetime import date
from decimal import ROUND_HALF_EVEN, ROUND_HALF_UP, Decimal

from scheduling.domain.models import ProrationMethod, ProrationQuote

ROUNDING_MODES = {
    "half_up": ROUND_HALF_UP,
    "half_even": ROUND_HALF_EVEN,
}


def days_in_month(on: date) -> int:
    return calendar.monthrange(on.year, on.month)[1]


def prorate(
    join_date: date,
    monthly_amount: Decimal | int | str,
    method: ProrationMethod = ProrationMethod.DAILY,
    rounding: str = "half_up",
    currency: str = "INR",
) -> ProrationQuote:
    """Quote the fee owed for the rest of ``join_date``'s month.

    The join day itself is billable. Amounts round to whole currency units.
    A zero or negative monthly amount owes nothing.

    >>> prorate(date(2025, 4, 24), 3000).owed
    Decimal('700')
    """
    amount = Decimal(monthly_amount)
    total_days = days_in_month(join_date)
    remaining = total_days - join_date.day + 1

    if amount <= 0:
        owed = Decimal("0")
    elif method is ProrationMethod.NONE:
        owed = amount
    elif method is ProrationMethod.WEEKLY:
        weeks_total = math.ceil(total_days / 7)
        weeks_remaining = math.ceil(remaining / 7)
        owed = min(amount, amount * weeks_remaining / weeks_total)
    else:
        owed = amount * remaining / total_days

    return ProrationQuote(
        join_date=join_date,
        monthly_amount=amount,
        days_in_month=total_days,
        days_remaining=remaining,
        owed=owed.quantize(Decimal("1"), rounding=ROUNDING_MODES[rounding]),
        method=method,
        currency=currency,
    )
