"""Notification sink used by the services.

Every method is fire-and-forget: implementations hand the message off for
out-of-band delivery and return nothing the caller depends on.
"""

from abc import ABC, abstractmethod
from datetime import datetime


class Notifier(ABC):
    """Best-effort notification interface."""

    @abstractmethod
    def notify_welcome(self, email: str, first_name: str) -> None:
        ...

    @abstractmethod
    def notify_registration_confirmed(self, email: str, first_name: str, event_title: str) -> None:
        ...

    @abstractmethod
    def notify_event_reminder(self, email: str, first_name: str, event_title: str, event_date: datetime) -> None:
        ...
