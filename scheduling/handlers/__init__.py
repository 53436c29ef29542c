from scheduling.handlers.views import (
    BatchDetailView,
    BatchListView,
    BatchProgressView,
    BatchProrationView,
    BlockedDatesView,
    ProrationQuoteView,
    ScheduleView,
    SessionListView,
    SessionRescheduleView,
)

__all__ = [
    "BatchDetailView",
    "BatchListView",
    "BatchProgressView",
    "BatchProrationView",
    "BlockedDatesView",
    "ProrationQuoteView",
    "ScheduleView",
    "SessionListView",
    "SessionRescheduleView",
]
