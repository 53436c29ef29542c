"""Serializers for parsing requests and rendering domain models."""

from decimal import Decimal

from rest_framework import serializers

from scheduling.conf import get_settings
from scheduling.domain import (
    BatchDraft,
    BatchStatus,
    Capacity,
    DiscountPercentage,
    Money,
    ProrationMethod,
    SchedulePattern,
    SpotId,
    VenueId,
)


# Longest window a blocked-dates query may cover, in days.
MAX_BLOCKED_DATES_WINDOW = 366


def _choices(enum) -> list[str]:
    return [member.value for member in enum]


class BatchDraftSerializer(serializers.Serializer):
    """Input for creating or updating a batch."""

    name = serializers.CharField(max_length=255)
    program_id = serializers.CharField(max_length=64)
    venue_id = serializers.UUIDField()
    spot_id = serializers.UUIDField(required=False, allow_null=True, default=None)
    capacity = serializers.IntegerField(min_value=0, default=0)
    partner_ids = serializers.ListField(child=serializers.CharField(), default=list)
    start_date = serializers.DateField()
    end_date = serializers.DateField()
    session_start_time = serializers.TimeField()
    session_end_time = serializers.TimeField()
    target_session_count = serializers.IntegerField(min_value=0)
    pattern = serializers.ChoiceField(choices=_choices(SchedulePattern))
    manual_dates = serializers.ListField(child=serializers.DateField(), default=list)
    status = serializers.ChoiceField(choices=_choices(BatchStatus), default=BatchStatus.ACTIVE.value)
    fee_amount = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=Decimal("0"), default=Decimal("0"))
    currency = serializers.CharField(max_length=3, default="INR")
    discount_percentage = serializers.DecimalField(
        max_digits=5,
        decimal_places=2,
        min_value=Decimal("0"),
        max_value=Decimal("100"),
        default=Decimal("0"),
    )
    regenerate = serializers.BooleanField(default=False, write_only=True)

    def validate(self, attrs: dict) -> dict:
        try:
            attrs["draft"] = self._build_draft(attrs)
        except ValueError as exc:
            raise serializers.ValidationError(str(exc)) from exc
        return attrs

    @staticmethod
    def _build_draft(attrs: dict) -> BatchDraft:
        return BatchDraft(
            name=attrs["name"],
            program_id=attrs["program_id"],
            venue_id=VenueId(attrs["venue_id"]),
            spot_id=SpotId(attrs["spot_id"]) if attrs.get("spot_id") else None,
            capacity=Capacity(attrs["capacity"], ceiling=get_settings().max_capacity),
            partner_ids=tuple(attrs["partner_ids"]),
            start_date=attrs["start_date"],
            end_date=attrs["end_date"],
            session_start_time=attrs["session_start_time"],
            session_end_time=attrs["session_end_time"],
            target_session_count=attrs["target_session_count"],
            pattern=SchedulePattern(attrs["pattern"]),
            manual_dates=tuple(attrs["manual_dates"]),
            status=BatchStatus(attrs["status"]),
            fee=Money(attrs["fee_amount"], attrs["currency"]),
            discount=DiscountPercentage(attrs["discount_percentage"]),
        )


class BatchSerializer(serializers.Serializer):
    """Serializer for Batch domain model."""

    id = serializers.CharField()
    name = serializers.CharField(source="draft.name")
    program_id = serializers.CharField(source="draft.program_id")
    venue_id = serializers.CharField(source="draft.venue_id")
    spot_id = serializers.CharField(source="draft.spot_id", allow_null=True)
    capacity = serializers.IntegerField(source="draft.capacity.value")
    partner_ids = serializers.ListField(source="draft.partner_ids", child=serializers.CharField())
    start_date = serializers.DateField(source="draft.start_date")
    end_date = serializers.DateField(source="draft.end_date")
    session_start_time = serializers.TimeField(source="draft.session_start_time")
    session_end_time = serializers.TimeField(source="draft.session_end_time")
    target_session_count = serializers.IntegerField(source="draft.target_session_count")
    pattern = serializers.CharField(source="draft.pattern.value")
    status = serializers.CharField(source="draft.status.value")
    fee_amount = serializers.DecimalField(source="draft.fee.amount", max_digits=10, decimal_places=2)
    currency = serializers.CharField(source="draft.fee.currency")
    discount_percentage = serializers.DecimalField(
        source="draft.discount.value", max_digits=5, decimal_places=2
    )
    created_at = serializers.DateTimeField()
    updated_at = serializers.DateTimeField()


class SessionSerializer(serializers.Serializer):
    """Serializer for Session domain model."""

    id = serializers.CharField()
    batch_id = serializers.CharField()
    sequence = serializers.IntegerField()
    date = serializers.DateField()
    start_time = serializers.TimeField()
    end_time = serializers.TimeField()
    origin = serializers.CharField(source="origin.value")
    original_date = serializers.DateField(allow_null=True)
    original_start_time = serializers.TimeField(allow_null=True)
    original_end_time = serializers.TimeField(allow_null=True)
    reschedule_reason = serializers.CharField()
    rescheduled_by = serializers.CharField(allow_null=True)
    rescheduled_at = serializers.DateTimeField(allow_null=True)


class RescheduleSerializer(serializers.Serializer):
    """Input for moving one session.

    An empty reason is accepted here and rejected by the service, so the
    rule holds for every caller and not only this endpoint.
    """

    date = serializers.DateField()
    start_time = serializers.TimeField()
    end_time = serializers.TimeField()
    reason = serializers.CharField(allow_blank=True, default="", trim_whitespace=False)


class ProrationRequestSerializer(serializers.Serializer):
    join_date = serializers.DateField()
    monthly_amount = serializers.DecimalField(max_digits=12, decimal_places=2)
    method = serializers.ChoiceField(choices=_choices(ProrationMethod), required=False)
    currency = serializers.CharField(max_length=3, default="INR")


class BatchProrationRequestSerializer(serializers.Serializer):
    join_date = serializers.DateField()
    method = serializers.ChoiceField(choices=_choices(ProrationMethod), required=False)


class ProrationQuoteSerializer(serializers.Serializer):
    """Serializer for ProrationQuote domain model."""

    join_date = serializers.DateField()
    monthly_amount = serializers.DecimalField(max_digits=12, decimal_places=2)
    days_in_month = serializers.IntegerField()
    days_remaining = serializers.IntegerField()
    owed = serializers.DecimalField(max_digits=12, decimal_places=0)
    method = serializers.CharField(source="method.value")
    currency = serializers.CharField()


class BatchProgressSerializer(serializers.Serializer):
    total = serializers.IntegerField()
    completed = serializers.IntegerField()
    percent = serializers.IntegerField()
    status = serializers.CharField(source="status.value")


class BlockedDatesQuerySerializer(serializers.Serializer):
    start = serializers.DateField()
    end = serializers.DateField()

    def validate(self, attrs: dict) -> dict:
        if attrs["end"] < attrs["start"]:
            raise serializers.ValidationError("end must not be before start")
        if (attrs["end"] - attrs["start"]).days >= MAX_BLOCKED_DATES_WINDOW:
            raise serializers.ValidationError(f"window cannot exceed {MAX_BLOCKED_DATES_WINDOW} days")
        return attrs
