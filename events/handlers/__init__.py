from events.handlers.views import (
    AttendanceView,
    EventCategoryListView,
    EventDetailView,
    EventListView,
    EventRegistrationListView,
    EventRegistrationView,
    EventSearchView,
    EventSpeakerView,
    MyRegistrationListView,
    OwnedEventListView,
    ReminderView,
    UpcomingEventListView,
)

__all__ = [
    "AttendanceView",
    "EventCategoryListView",
    "EventDetailView",
    "EventListView",
    "EventRegistrationListView",
    "EventRegistrationView",
    "EventSearchView",
    "EventSpeakerView",
    "MyRegistrationListView",
    "OwnedEventListView",
    "ReminderView",
    "UpcomingEventListView",
]
