"""
Celery application configuration for background tasks.
"""
from celery import Celery
from daydiary.core.config import settings

# Create Celery app instance
celery_app = Celery(
    "daydiary",
    include=[
        "daydiary.tasks.media_cleanup_tasks",
    ],
)

# Configure Celery from settings
celery_app.conf.update(
    broker_url=settings.celery_broker_url,
    result_backend=settings.celery_result_backend,
    task_serializer=settings.celery_task_serializer,
    result_serializer=settings.celery_result_serializer,
    accept_content=settings.celery_accept_content,
    timezone=settings.celery_timezone,
    enable_utc=settings.celery_enable_utc,
    task_track_started=True,
    task_time_limit=300,
    task_soft_time_limit=240,
    worker_prefetch_multiplier=1,
    task_acks_late=True,
    broker_connection_retry_on_startup=True,
)
