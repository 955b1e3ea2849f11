from django.contrib import admin

from events.models import Attendance, Event, EventSpeaker, Registration, Speaker


class RegistrationInline(admin.TabularInline):
    model = Registration
    extra = 0
    readonly_fields = ["user", "status", "registered_at", "confirmation_sent_at"]
    can_delete = False


class EventSpeakerInline(admin.TabularInline):
    model = EventSpeaker
    extra = 0


@admin.register(Event)
class EventAdmin(admin.ModelAdmin):
    list_display = ["title", "category", "event_date", "capacity", "registered_count", "is_active"]
    list_filter = ["is_active", "category"]
    search_fields = ["title", "category", "venue"]
    # The counter is maintained by the registration service only.
    readonly_fields = ["registered_count"]
    inlines = [EventSpeakerInline, RegistrationInline]


@admin.register(Registration)
class RegistrationAdmin(admin.ModelAdmin):
    list_display = ["event", "user", "status", "registered_at"]
    list_filter = ["status", "event"]
    readonly_fields = ["status"]


@admin.register(Attendance)
class AttendanceAdmin(admin.ModelAdmin):
    list_display = ["event", "user", "checked_in_at"]
    list_filter = ["event"]


@admin.register(Speaker)
class SpeakerAdmin(admin.ModelAdmin):
    list_display = ["name", "expertise", "email"]
    search_fields = ["name", "expertise"]
