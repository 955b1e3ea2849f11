"""Notifier that queues email delivery on Celery workers."""

from datetime import datetime

from notifications import tasks
from notifications.interfaces import Notifier


class CeleryNotifier(Notifier):
    """Hands each notification to a Celery task.

    ``delay`` may still raise when the broker is unreachable; callers treat
    that as a dropped notification.
    """

    def notify_welcome(self, email: str, first_name: str) -> None:
        tasks.send_welcome_email.delay(email, first_name)

    def notify_registration_confirmed(self, email: str, first_name: str, event_title: str) -> None:
        tasks.send_registration_confirmation.delay(email, first_name, event_title)

    def notify_event_reminder(self, email: str, first_name: str, event_title: str, event_date: datetime) -> None:
        tasks.send_event_reminder.delay(email, first_name, event_title, event_date.isoformat())
