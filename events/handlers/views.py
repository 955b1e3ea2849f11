"""HTTP handlers (views) - handle HTTP concerns only.

Handlers:
- Parse requests and validate input format
- Call services for business logic
- Never contain business logic
- Never expose internal error details (common.exception_handler maps domain errors)
"""

from rest_framework import status
from rest_framework.permissions import BasePermission
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from common.authentication import IsAuthenticatedIdentity, caller_of
from events.handlers.dependencies import get_event_service, get_registration_service
from events.handlers.serializers import (
    AttendanceSerializer,
    EventRequestSerializer,
    EventSerializer,
    RegistrationSerializer,
    SpeakerRequestSerializer,
)

SAFE_METHODS = ("GET", "HEAD", "OPTIONS")


class PublicReadView(APIView):
    """Reads are open to anonymous callers; writes need a verified identity."""

    def get_permissions(self) -> list[BasePermission]:
        if self.request.method in SAFE_METHODS:
            return []
        return [IsAuthenticatedIdentity()]


class AuthenticatedView(APIView):
    permission_classes = [IsAuthenticatedIdentity]


class EventListView(PublicReadView):
    """Handler for GET/POST /api/events"""

    def get(self, request: Request) -> Response:
        events = get_event_service().list_events(caller_of(request))
        return Response(EventSerializer(events, many=True).data)

    def post(self, request: Request) -> Response:
        serializer = EventRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        event = get_event_service().create_event(serializer.to_request(), request.user)
        return Response(EventSerializer(event).data, status=status.HTTP_201_CREATED)


class UpcomingEventListView(PublicReadView):
    """Handler for GET /api/events/upcoming"""

    def get(self, request: Request) -> Response:
        events = get_event_service().list_upcoming(caller_of(request))
        return Response(EventSerializer(events, many=True).data)


class OwnedEventListView(AuthenticatedView):
    """Handler for GET /api/events/mine"""

    def get(self, request: Request) -> Response:
        events = get_event_service().list_owned(request.user)
        return Response(EventSerializer(events, many=True).data)


class EventSearchView(PublicReadView):
    """Handler for GET /api/events/search?q=<term>"""

    def get(self, request: Request) -> Response:
        term = request.query_params.get("q", "")
        events = get_event_service().search_events(term, caller_of(request))
        return Response(EventSerializer(events, many=True).data)


class EventCategoryListView(PublicReadView):
    """Handler for GET /api/events/category/{category}"""

    def get(self, request: Request, category: str) -> Response:
        events = get_event_service().list_by_category(category, caller_of(request))
        return Response(EventSerializer(events, many=True).data)


class EventDetailView(PublicReadView):
    """Handler for GET/PUT/DELETE /api/events/{event_id}"""

    def get(self, request: Request, event_id: int) -> Response:
        event = get_event_service().get_event(event_id, caller_of(request))
        return Response(EventSerializer(event).data)

    def put(self, request: Request, event_id: int) -> Response:
        serializer = EventRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        event = get_event_service().update_event(event_id, serializer.to_request(), request.user)
        return Response(EventSerializer(event).data)

    def delete(self, request: Request, event_id: int) -> Response:
        get_event_service().delete_event(event_id, request.user)
        return Response(status=status.HTTP_204_NO_CONTENT)


class EventSpeakerView(AuthenticatedView):
    """Handler for POST /api/events/{event_id}/speakers (owner or admin)"""

    def post(self, request: Request, event_id: int) -> Response:
        serializer = SpeakerRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        event = get_event_service().add_speaker(event_id, serializer.to_request(), request.user)
        return Response(EventSerializer(event).data, status=status.HTTP_201_CREATED)


class EventRegistrationView(AuthenticatedView):
    """Handler for POST/DELETE /api/events/{event_id}/registration (the caller's own seat)"""

    def post(self, request: Request, event_id: int) -> Response:
        registration = get_registration_service().register(event_id, request.user.user_id)
        return Response(RegistrationSerializer(registration).data, status=status.HTTP_201_CREATED)

    def delete(self, request: Request, event_id: int) -> Response:
        registration = get_registration_service().cancel(event_id, request.user.user_id)
        return Response(RegistrationSerializer(registration).data)


class EventRegistrationListView(AuthenticatedView):
    """Handler for GET /api/events/{event_id}/registrations (owner or admin)"""

    def get(self, request: Request, event_id: int) -> Response:
        get_event_service().ensure_can_manage(event_id, request.user)
        registrations = get_registration_service().list_for_event(event_id)
        return Response(RegistrationSerializer(registrations, many=True).data)


class AttendanceView(AuthenticatedView):
    """Handler for POST /api/events/{event_id}/attendance/{user_id} (owner or admin)"""

    def post(self, request: Request, event_id: int, user_id: int) -> Response:
        get_event_service().ensure_can_manage(event_id, request.user)
        attendance = get_registration_service().mark_attended(event_id, user_id)
        return Response(AttendanceSerializer(attendance).data, status=status.HTTP_201_CREATED)


class ReminderView(AuthenticatedView):
    """Handler for POST /api/events/{event_id}/reminders (owner or admin)"""

    def post(self, request: Request, event_id: int) -> Response:
        get_event_service().ensure_can_manage(event_id, request.user)
        sent = get_registration_service().send_reminders(event_id)
        return Response({"sent": sent})


class MyRegistrationListView(AuthenticatedView):
    """Handler for GET /api/registrations/mine"""

    def get(self, request: Request) -> Response:
        registrations = get_registration_service().list_for_user(request.user.user_id)
        return Response(RegistrationSerializer(registrations, many=True).data)
