"""Django ORM models (persistence layer).

These models handle database concerns. Domain logic lives in domain/models.py.
"""

import uuid

from django.core.exceptions import ValidationError
from django.db import models


class Venue(models.Model):
    """Persistence model for venues."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=255)
    created_at = models.DateTimeField(auto_now_add=True)

    def __str__(self) -> str:
        return self.name


class Spot(models.Model):
    """Persistence model for a bookable spot inside a venue."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    venue = models.ForeignKey(Venue, on_delete=models.CASCADE, related_name="spots")
    name = models.CharField(max_length=255)
    # Weekday numbers, Monday is 0.
    operating_days = models.JSONField(default=list)
    start_time = models.TimeField()
    end_time = models.TimeField()
    capacity = models.PositiveIntegerField(default=0)

    def __str__(self) -> str:
        return f"{self.venue.name} - {self.name}"


class Holiday(models.Model):
    """Persistence model for venue holidays."""

    class HolidayType(models.TextChoices):
        SPECIFIC = "specific"
        RANGE = "range"
        RECURRING = "recurring"

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    venue = models.ForeignKey(Venue, on_delete=models.CASCADE, related_name="holidays")
    name = models.CharField(max_length=255)
    holiday_type = models.CharField(max_length=16, choices=HolidayType.choices)
    date = models.DateField(null=True, blank=True)
    start_date = models.DateField(null=True, blank=True)
    end_date = models.DateField(null=True, blank=True)
    recurring_day = models.PositiveSmallIntegerField(null=True, blank=True)

    class Meta:
        indexes = [
            models.Index(fields=["venue"], name="scheduling__venue_i_7d2f41_idx"),
        ]
        constraints = [
            models.CheckConstraint(
                condition=~models.Q(holiday_type="specific") | models.Q(date__isnull=False),
                name="holiday_specific_has_date",
            ),
            # A single-day closure is a specific holiday.
            models.CheckConstraint(
                condition=~models.Q(holiday_type="range")
                | models.Q(
                    start_date__isnull=False,
                    end_date__isnull=False,
                    end_date__gt=models.F("start_date"),
                ),
                name="holiday_range_spans_days",
            ),
            models.CheckConstraint(
                condition=~models.Q(holiday_type="recurring")
                | models.Q(recurring_day__isnull=False, recurring_day__lte=6),
                name="holiday_recurring_weekday",
            ),
        ]

    def __str__(self) -> str:
        return self.name

    def clean(self) -> None:
        if self.holiday_type == self.HolidayType.SPECIFIC and self.date is None:
            raise ValidationError({"date": "A specific holiday needs a date."})
        if self.holiday_type == self.HolidayType.RANGE:
            if self.start_date is None or self.end_date is None:
                raise ValidationError("A range holiday needs a start and an end date.")
            if self.end_date <= self.start_date:
                raise ValidationError(
                    {"end_date": "End date must be after the start date; use a specific holiday for one day."}
                )
        if self.holiday_type == self.HolidayType.RECURRING and (
            self.recurring_day is None or self.recurring_day > 6
        ):
            raise ValidationError({"recurring_day": "Weekday must be between 0 (Monday) and 6 (Sunday)."})


class Batch(models.Model):
    """Persistence model for batches."""

    class Pattern(models.TextChoices):
        MONDAY_WED_FRI = "MWF"
        TUE_THU_SAT = "TTS"
        WEEKEND_ONLY = "weekend"
        MANUAL = "manual"

    class Status(models.TextChoices):
        ACTIVE = "active"
        COMPLETED = "completed"
        INACTIVE = "inactive"

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=255)
    program_id = models.CharField(max_length=64)
    venue = models.ForeignKey(Venue, on_delete=models.PROTECT, related_name="batches")
    spot = models.ForeignKey(
        Spot, on_delete=models.SET_NULL, related_name="batches", null=True, blank=True
    )
    capacity = models.PositiveIntegerField(default=0)
    partner_ids = models.JSONField(default=list)
    start_date = models.DateField()
    end_date = models.DateField()
    session_start_time = models.TimeField()
    session_end_time = models.TimeField()
    target_session_count = models.PositiveIntegerField()
    pattern = models.CharField(max_length=16, choices=Pattern.choices)
    manual_dates = models.JSONField(default=list)
    status = models.CharField(max_length=16, choices=Status.choices, default=Status.ACTIVE)
    fee_amount = models.DecimalField(max_digits=10, decimal_places=2, default=0)
    currency = models.CharField(max_length=3, default="INR")
    discount_percentage = models.DecimalField(max_digits=5, decimal_places=2, default=0)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]

    def __str__(self) -> str:
        return self.name


class Session(models.Model):
    """Persistence model for batch sessions."""

    class Origin(models.TextChoices):
        GENERATED = "generated"
        MANUAL = "manual"
        RESCHEDULED = "rescheduled"

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    batch = models.ForeignKey(Batch, on_delete=models.CASCADE, related_name="sessions")
    sequence = models.PositiveIntegerField()
    date = models.DateField()
    start_time = models.TimeField()
    end_time = models.TimeField()
    origin = models.CharField(max_length=16, choices=Origin.choices, default=Origin.GENERATED)
    original_date = models.DateField(null=True, blank=True)
    original_start_time = models.TimeField(null=True, blank=True)
    original_end_time = models.TimeField(null=True, blank=True)
    reschedule_reason = models.TextField(blank=True, default="")
    rescheduled_by = models.CharField(max_length=64, null=True, blank=True)
    rescheduled_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        ordering = ["sequence"]
        constraints = [
            models.UniqueConstraint(fields=["batch", "sequence"], name="unique_batch_sequence"),
        ]
        indexes = [
            models.Index(fields=["batch", "date"], name="scheduling__batch_i_5e8b20_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.batch.name} #{self.sequence} - {self.date}"


class ScheduleAuditLog(models.Model):
    """Append-only record of schedule changes."""

    id = models.BigAutoField(primary_key=True)
    event_type = models.CharField(max_length=64)
    actor_id = models.CharField(max_length=64)
    before = models.JSONField(default=dict)
    after = models.JSONField(default=dict)
    timestamp = models.DateTimeField()

    class Meta:
        ordering = ["timestamp"]
        indexes = [
            models.Index(fields=["event_type", "timestamp"], name="scheduling__event_t_3c1a9e_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.event_type} by {self.actor_id} at {self.timestamp}"
