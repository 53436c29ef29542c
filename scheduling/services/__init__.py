"""Service wiring for the Django-backed stores."""

from scheduling.services.billing_service import BillingService
from scheduling.services.reschedule_service import RescheduleService
from scheduling.services.schedule_service import ScheduleService
from scheduling.stores import DjangoAuditSink, DjangoBatchStore, DjangoVenueStore


def get_schedule_service() -> ScheduleService:
    return ScheduleService(DjangoBatchStore(), DjangoVenueStore(), DjangoAuditSink())


def get_reschedule_service() -> RescheduleService:
    return RescheduleService(DjangoBatchStore(), DjangoVenueStore(), DjangoAuditSink())


def get_billing_service() -> BillingService:
    return BillingService(get_schedule_service())


__all__ = [
    "BillingService",
    "RescheduleService",
    "ScheduleService",
    "get_billing_service",
    "get_reschedule_service",
    "get_schedule_service",
]
