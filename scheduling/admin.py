from django.contrib import admin

from scheduling.models import Batch, Holiday, ScheduleAuditLog, Session, Spot, Venue


class SpotInline(admin.TabularInline):
    model = Spot
    extra = 1


class HolidayInline(admin.TabularInline):
    model = Holiday
    extra = 1


class SessionInline(admin.TabularInline):
    model = Session
    extra = 0
    fields = ["sequence", "date", "start_time", "end_time", "origin"]
    readonly_fields = fields
    can_delete = False


@admin.register(Venue)
class VenueAdmin(admin.ModelAdmin):
    list_display = ["name", "created_at"]
    search_fields = ["name"]
    inlines = [SpotInline, HolidayInline]


@admin.register(Holiday)
class HolidayAdmin(admin.ModelAdmin):
    list_display = ["name", "venue", "holiday_type", "date", "start_date", "end_date", "recurring_day"]
    list_filter = ["venue", "holiday_type"]


@admin.register(Batch)
class BatchAdmin(admin.ModelAdmin):
    list_display = ["name", "venue", "pattern", "start_date", "end_date", "target_session_count", "status"]
    list_filter = ["status", "pattern", "venue"]
    search_fields = ["name"]
    # Sessions change only through the scheduling services.
    inlines = [SessionInline]


@admin.register(ScheduleAuditLog)
class ScheduleAuditLogAdmin(admin.ModelAdmin):
    list_display = ["event_type", "actor_id", "timestamp"]
    list_filter = ["event_type"]

    def has_change_permission(self, request, obj=None):
        return False
