"""Celery tasks that deliver notification emails.

Delivery is best-effort: failures are logged and never re-raised.
"""

import structlog
from celery import shared_task
from django.conf import settings
from django.core.mail import send_mail

logger = structlog.get_logger(__name__)

SIGNATURE = "Best regards,\nEvent Desk Team"


def _deliver(kind: str, to: str, subject: str, body: str) -> bool:
    try:
        send_mail(
            subject=subject,
            message=body,
            from_email=settings.DEFAULT_FROM_EMAIL,
            recipient_list=[to],
        )
    except Exception as e:
        logger.warning("notification_delivery_failed", kind=kind, error=str(e))
        return False
    logger.info("notification_delivered", kind=kind)
    return True


@shared_task
def send_welcome_email(to: str, first_name: str) -> bool:
    body = (
        f"Hi {first_name},\n\n"
        "Welcome to Event Desk!\n"
        "You can now browse and register for events.\n\n"
        f"{SIGNATURE}"
    )
    return _deliver("welcome", to, "Welcome to Event Desk!", body)


@shared_task
def send_registration_confirmation(to: str, first_name: str, event_title: str) -> bool:
    body = (
        f"Hi {first_name},\n\n"
        f"Thank you for registering for: {event_title}\n"
        "Your registration is confirmed.\n"
        "We will send you a reminder before the event.\n\n"
        f"{SIGNATURE}"
    )
    return _deliver("registration_confirmation", to, "Event Registration Confirmation", body)


@shared_task
def send_event_reminder(to: str, first_name: str, event_title: str, event_date: str) -> bool:
    body = (
        f"Hi {first_name},\n\n"
        "This is a reminder about the upcoming event:\n"
        f"Event: {event_title}\n"
        f"Date: {event_date}\n"
        "Please make sure to attend!\n\n"
        f"{SIGNATURE}"
    )
    return _deliver("event_reminder", to, f"Reminder: {event_title}", body)
