"""Unit tests for fee proration.

Run with: pytest tests/test_proration.py -v
"""

from datetime import date
from decimal import Decimal

import pytest

from scheduling.domain import ProrationMethod
from scheduling.domain.proration import days_in_month, prorate


class TestProrate:
    def test_late_april_join(self):
        """Joining on 24 April owes 7 of 30 days."""
        quote = prorate(date(2025, 4, 24), Decimal("3000"))

        assert quote.days_in_month == 30
        assert quote.days_remaining == 7
        assert quote.owed == Decimal("700")

    def test_first_of_february_owes_full_month(self):
        quote = prorate(date(2025, 2, 1), Decimal("2800"))

        assert quote.days_in_month == 28
        assert quote.days_remaining == 28
        assert quote.owed == Decimal("2800")

    def test_last_day_of_month_owes_one_day(self):
        assert prorate(date(2025, 1, 31), Decimal("3100")).owed == Decimal("100")

    def test_leap_february(self):
        assert days_in_month(date(2024, 2, 10)) == 29

    @pytest.mark.parametrize("amount", [Decimal("0"), Decimal("-100")])
    def test_non_positive_amount_owes_nothing(self, amount):
        assert prorate(date(2025, 4, 24), amount).owed == Decimal("0")

    def test_rounds_half_up_by_default(self):
        # 45 / 30 * 11 = 16.5
        assert prorate(date(2025, 4, 20), Decimal("45")).owed == Decimal("17")

    def test_rounds_half_even_when_configured(self):
        assert prorate(date(2025, 4, 20), Decimal("45"), rounding="half_even").owed == Decimal("16")

    def test_exact_half_unit_rounds_up(self):
        # 1250 * 21 / 28 = 937.5
        assert prorate(date(2025, 2, 8), Decimal("1250")).owed == Decimal("938")

    def test_exact_half_unit_rounds_to_even_when_configured(self):
        assert prorate(date(2025, 2, 8), Decimal("1250"), rounding="half_even").owed == Decimal("938")
        assert prorate(date(2025, 2, 8), Decimal("1258"), rounding="half_even").owed == Decimal("944")

    def test_accepts_integer_amount(self):
        assert prorate(date(2025, 4, 24), 3000).owed == Decimal("700")


class TestProrationMethods:
    def test_none_charges_full_amount(self):
        quote = prorate(date(2025, 4, 24), Decimal("3000"), method=ProrationMethod.NONE)
        assert quote.owed == Decimal("3000")

    def test_weekly_charges_started_weeks(self):
        # April: 5 billing weeks, 7 days left is 1 week.
        quote = prorate(date(2025, 4, 24), Decimal("3000"), method=ProrationMethod.WEEKLY)
        assert quote.owed == Decimal("600")

    def test_weekly_never_exceeds_monthly_amount(self):
        quote = prorate(date(2025, 2, 1), Decimal("2800"), method=ProrationMethod.WEEKLY)
        assert quote.owed == Decimal("2800")
