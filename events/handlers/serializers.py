"""Serializers for transforming domain models to API responses and parsing input."""

from rest_framework import serializers

from events.domain import EventRequest, SpeakerRequest


class EventRequestSerializer(serializers.Serializer):
    """Input for creating or replacing an event.

    ``event_date`` stays a string; the service owns date parsing and validation.
    """

    title = serializers.CharField(max_length=255)
    description = serializers.CharField(allow_blank=True, required=False, default="")
    event_date = serializers.CharField()
    venue = serializers.CharField(max_length=255)
    category = serializers.CharField(max_length=100)
    capacity = serializers.IntegerField(min_value=1, max_value=2**31 - 1)

    def to_request(self) -> EventRequest:
        return EventRequest(**self.validated_data)


class SpeakerRequestSerializer(serializers.Serializer):
    """Input for adding a speaker to an event."""

    name = serializers.CharField(max_length=255)
    bio = serializers.CharField(allow_blank=True, required=False, default="")
    expertise = serializers.CharField(max_length=255, allow_blank=True, required=False, default="")
    email = serializers.EmailField(allow_blank=True, required=False, default="")

    def to_request(self) -> SpeakerRequest:
        return SpeakerRequest(**self.validated_data)


class SpeakerSerializer(serializers.Serializer):
    """Serializer for Speaker domain model."""

    id = serializers.IntegerField()
    name = serializers.CharField()
    bio = serializers.CharField()
    expertise = serializers.CharField()
    email = serializers.CharField()


class EventSerializer(serializers.Serializer):
    """Serializer for the EventView projection."""

    id = serializers.IntegerField(source="event.id")
    title = serializers.CharField(source="event.title")
    description = serializers.CharField(source="event.description")
    event_date = serializers.DateTimeField(source="event.event_date")
    venue = serializers.CharField(source="event.venue")
    category = serializers.CharField(source="event.category")
    capacity = serializers.IntegerField(source="event.capacity")
    registered_count = serializers.IntegerField(source="event.registered_count")
    owner_id = serializers.IntegerField(source="event.owner_id")
    created_by_name = serializers.CharField()
    is_active = serializers.BooleanField(source="event.is_active")
    is_registered = serializers.BooleanField()
    created_at = serializers.DateTimeField(source="event.created_at")
    speakers = SpeakerSerializer(many=True)


class RegistrationSerializer(serializers.Serializer):
    """Serializer for Registration domain model."""

    id = serializers.IntegerField()
    event_id = serializers.IntegerField()
    user_id = serializers.IntegerField()
    status = serializers.CharField(source="status.value")
    registered_at = serializers.DateTimeField()
    confirmation_sent_at = serializers.DateTimeField(allow_null=True)


class AttendanceSerializer(serializers.Serializer):
    """Serializer for Attendance domain model."""

    id = serializers.IntegerField()
    event_id = serializers.IntegerField()
    user_id = serializers.IntegerField()
    checked_in_at = serializers.DateTimeField()
