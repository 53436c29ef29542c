"""Billing service - proration quotes for mid-cycle joins."""

import logging
from datetime import date
from decimal import Decimal

from scheduling.conf import SchedulingSettings, get_settings
from scheduling.domain import ProrationMethod, ProrationQuote
from scheduling.domain.proration import prorate
from scheduling.services.schedule_service import ScheduleService

logger = logging.getLogger(__name__)


class BillingService:
    """Service for fee quotes."""

    def __init__(self, schedules: ScheduleService, settings: SchedulingSettings | None = None) -> None:
        self._schedules = schedules
        self._settings = settings

    @property
    def settings(self) -> SchedulingSettings:
        return self._settings or get_settings()

    def quote_proration(
        self,
        join_date: date,
        monthly_amount: Decimal,
        method: ProrationMethod | None = None,
        currency: str = "INR",
    ) -> ProrationQuote:
        """Quote the fee for the remainder of ``join_date``'s month."""
        return prorate(
            join_date,
            monthly_amount,
            method=method or self.settings.proration_method,
            rounding=self.settings.proration_rounding,
            currency=currency,
        )

    def quote_for_batch(
        self,
        batch_id: str,
        join_date: date,
        method: ProrationMethod | None = None,
    ) -> ProrationQuote:
        """Quote a batch's discounted monthly fee for a member joining on ``join_date``.

        Raises:
            InvalidIdError: If the batch_id is not a valid UUID.
            BatchNotFoundError: If the batch does not exist.
        """
        batch = self._schedules.get_batch(batch_id)
        fee = batch.draft.effective_fee
        quote = self.quote_proration(join_date, fee.amount, method=method, currency=fee.currency)
        logger.debug(
            "proration_quoted",
            extra={"batch_id": batch_id, "join_date": join_date.isoformat(), "owed": str(quote.owed)},
        )
        return quote
