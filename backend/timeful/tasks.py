"""Celery app used as the background task dispatcher."""

import logging

from celery import Celery

from timeful.config import Settings

logger = logging.getLogger(__name__)


def create_task_queue(settings: Settings) -> Celery:
    """Build the Celery app feature routers use to enqueue background work.

    Creating the app does not connect to the broker; connections are opened
    lazily on the first send.
    """
    celery_app = Celery(
        "timeful",
        broker=settings.CELERY_BROKER_URL,
        backend=settings.CELERY_RESULT_BACKEND,
    )
    celery_app.conf.update(
        task_serializer="json",
        result_serializer="json",
        accept_content=["json"],
        enable_utc=True,
        task_track_started=True,
        task_acks_late=True,
        worker_prefetch_multiplier=1,
        result_expires=3600,
    )
    logger.debug(f"Task queue configured with broker {settings.CELERY_BROKER_URL}")
    return celery_app
