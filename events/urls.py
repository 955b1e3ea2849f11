from django.urls import path

from events.handlers import (
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

urlpatterns = [
    path("events", EventListView.as_view(), name="event-list"),
    path("events/upcoming", UpcomingEventListView.as_view(), name="event-upcoming"),
    path("events/mine", OwnedEventListView.as_view(), name="event-owned"),
    path("events/search", EventSearchView.as_view(), name="event-search"),
    path("events/category/<str:category>", EventCategoryListView.as_view(), name="event-category"),
    path("events/<int:event_id>", EventDetailView.as_view(), name="event-detail"),
    path("events/<int:event_id>/registration", EventRegistrationView.as_view(), name="event-registration"),
    path("events/<int:event_id>/registrations", EventRegistrationListView.as_view(), name="event-registrations"),
    path(
        "events/<int:event_id>/attendance/<int:user_id>",
        AttendanceView.as_view(),
        name="event-attendance",
    ),
    path("events/<int:event_id>/speakers", EventSpeakerView.as_view(), name="event-speakers"),
    path("events/<int:event_id>/reminders", ReminderView.as_view(), name="event-reminders"),
    path("registrations/mine", MyRegistrationListView.as_view(), name="registration-mine"),
]
