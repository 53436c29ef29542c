from django.urls import path

from scheduling.handlers import (
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

urlpatterns = [
    path("batches", BatchListView.as_view(), name="batch-list"),
    path("batches/<str:batch_id>", BatchDetailView.as_view(), name="batch-detail"),
    path("batches/<str:batch_id>/sessions", SessionListView.as_view(), name="session-list"),
    path("batches/<str:batch_id>/schedule", ScheduleView.as_view(), name="batch-schedule"),
    path("batches/<str:batch_id>/progress", BatchProgressView.as_view(), name="batch-progress"),
    path(
        "batches/<str:batch_id>/proration-quote",
        BatchProrationView.as_view(),
        name="batch-proration-quote",
    ),
    path(
        "sessions/<str:session_id>/reschedule",
        SessionRescheduleView.as_view(),
        name="session-reschedule",
    ),
    path("proration-quotes", ProrationQuoteView.as_view(), name="proration-quote"),
    path(
        "venues/<str:venue_id>/blocked-dates",
        BlockedDatesView.as_view(),
        name="venue-blocked-dates",
    ),
]
