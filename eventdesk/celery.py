"""Celery setup for eventdesk."""

import os
import typing as t

import structlog
from celery import Celery
from celery.signals import task_postrun, task_prerun

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "eventdesk.settings")

app = Celery("eventdesk")

# All celery-related configuration keys carry a `CELERY_` prefix in settings.
app.config_from_object("django.conf:settings", namespace="CELERY")

app.autodiscover_tasks()


@task_prerun.connect
def celery_task_prerun(task_id: str, task: t.Any, *args: t.Any, **kwargs: t.Any) -> None:
    """Bind the task identity to structlog for the duration of the task."""
    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(task_id=task_id, task_name=task.name)


@task_postrun.connect
def celery_task_postrun(*args: t.Any, **kwargs: t.Any) -> None:
    """Clear structlog context after task execution."""
    structlog.contextvars.clear_contextvars()


# run:
# celery -A eventdesk worker -l INFO
