"""Django ORM models (persistence layer).

These models handle database concerns. Domain logic lives in domain/models.py.
"""

from django.db import models


class Event(models.Model):
    """Persistence model for events."""

    title = models.CharField(max_length=255)
    description = models.TextField(blank=True)
    event_date = models.DateTimeField()
    venue = models.CharField(max_length=255)
    category = models.CharField(max_length=100)
    capacity = models.PositiveIntegerField()
    registered_count = models.PositiveIntegerField(default=0)
    owner = models.ForeignKey("accounts.User", on_delete=models.PROTECT, related_name="owned_events")
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["event_date"]
        indexes = [
            models.Index(fields=["is_active", "event_date"]),
            models.Index(fields=["category"]),
        ]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(registered_count__lte=models.F("capacity")),
                name="registered_count_within_capacity",
            ),
        ]

    def __str__(self) -> str:
        return self.title


class Registration(models.Model):
    """Persistence model for event registrations."""

    class Status(models.TextChoices):
        REGISTERED = "REGISTERED", "Registered"
        CANCELLED = "CANCELLED", "Cancelled"
        ATTENDED = "ATTENDED", "Attended"

    event = models.ForeignKey(Event, on_delete=models.CASCADE, related_name="registrations")
    user = models.ForeignKey("accounts.User", on_delete=models.CASCADE, related_name="registrations")
    status = models.CharField(max_length=20, choices=Status.choices, default=Status.REGISTERED)
    registered_at = models.DateTimeField()
    confirmation_sent_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        ordering = ["registered_at"]
        constraints = [
            models.UniqueConstraint(fields=["event", "user"], name="unique_registration_per_event_user"),
        ]
        indexes = [
            models.Index(fields=["event", "status"]),
        ]

    def __str__(self) -> str:
        return f"{self.user_id} @ {self.event_id} ({self.status})"


class Attendance(models.Model):
    """Persistence model for event check-ins."""

    event = models.ForeignKey(Event, on_delete=models.CASCADE, related_name="attendances")
    user = models.ForeignKey("accounts.User", on_delete=models.CASCADE, related_name="attendances")
    checked_in_at = models.DateTimeField()

    class Meta:
        ordering = ["checked_in_at"]
        constraints = [
            models.UniqueConstraint(fields=["event", "user"], name="unique_attendance_per_event_user"),
        ]

    def __str__(self) -> str:
        return f"{self.user_id} @ {self.event_id}"


class Speaker(models.Model):
    """Persistence model for speakers."""

    name = models.CharField(max_length=255)
    bio = models.TextField(blank=True)
    expertise = models.CharField(max_length=255, blank=True)
    email = models.EmailField(blank=True)

    class Meta:
        ordering = ["name"]

    def __str__(self) -> str:
        return self.name


class EventSpeaker(models.Model):
    """Assignment of a speaker to an event."""

    event = models.ForeignKey(Event, on_delete=models.CASCADE, related_name="speaker_assignments")
    speaker = models.ForeignKey(Speaker, on_delete=models.CASCADE, related_name="event_assignments")

    class Meta:
        constraints = [
            models.UniqueConstraint(fields=["event", "speaker"], name="unique_speaker_per_event"),
        ]

    def __str__(self) -> str:
        return f"{self.speaker_id} @ {self.event_id}"
