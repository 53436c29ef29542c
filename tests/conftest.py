"""Pytest configuration and shared fixtures."""

from datetime import date, datetime, time, timezone
from decimal import Decimal
from uuid import uuid4

import pytest
from rest_framework.test import APIClient

from scheduling.conf import SchedulingSettings
from scheduling.domain import (
    BatchDraft,
    Capacity,
    DiscountPercentage,
    Money,
    ProrationMethod,
    SchedulePattern,
    VenueId,
)
from scheduling.services import BillingService, RescheduleService, ScheduleService
from scheduling.stores import InMemoryScheduleStore

TODAY = date(2025, 1, 1)
NOW = datetime(2025, 1, 1, 9, 0, tzinfo=timezone.utc)


@pytest.fixture
def api_client() -> APIClient:
    return APIClient()


@pytest.fixture
def scheduling_settings() -> SchedulingSettings:
    return SchedulingSettings(
        max_capacity=2_147_483_647,
        allow_same_day_sessions=False,
        proration_rounding="half_up",
        proration_method=ProrationMethod.DAILY,
    )


@pytest.fixture
def store() -> InMemoryScheduleStore:
    return InMemoryScheduleStore()


@pytest.fixture
def venue_id() -> VenueId:
    return VenueId(uuid4())


@pytest.fixture
def make_draft(venue_id):
    """Build a January 2025 weekend batch, overriding any field."""

    def _make(**overrides) -> BatchDraft:
        fields = {
            "name": "Weekend Football",
            "program_id": "football",
            "venue_id": venue_id,
            "start_date": date(2025, 1, 1),
            "end_date": date(2025, 1, 31),
            "session_start_time": time(9, 0),
            "session_end_time": time(10, 0),
            "target_session_count": 8,
            "pattern": SchedulePattern.WEEKEND_ONLY,
            "capacity": Capacity(20),
            "fee": Money(Decimal("3000")),
            "discount": DiscountPercentage(Decimal("0")),
        }
        fields.update(overrides)
        return BatchDraft(**fields)

    return _make


@pytest.fixture
def schedule_service(store, scheduling_settings) -> ScheduleService:
    return ScheduleService(
        store,
        store,
        store,
        settings=scheduling_settings,
        now=lambda: NOW,
        today=lambda: TODAY,
    )


@pytest.fixture
def reschedule_service(store, scheduling_settings) -> RescheduleService:
    return RescheduleService(
        store,
        store,
        store,
        settings=scheduling_settings,
        now=lambda: NOW,
        today=lambda: TODAY,
    )


@pytest.fixture
def billing_service(schedule_service, scheduling_settings) -> BillingService:
    return BillingService(schedule_service, settings=scheduling_settings)
