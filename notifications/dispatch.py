"""Fire-and-forget dispatch of notifications."""

import typing as t

import structlog

logger = structlog.get_logger(__name__)


def fire_and_forget(send: t.Callable[..., None], *args: t.Any, **context: t.Any) -> bool:
    """Call ``send(*args)``; log and drop any failure.

    Keyword arguments are log context only. Returns whether the hand-off succeeded.
    """
    try:
        send(*args)
    except Exception as e:
        logger.warning("notification_dispatch_failed", notification=getattr(send, "__name__", repr(send)), error=str(e), **context)
        return False
    return True
