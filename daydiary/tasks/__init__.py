"""
Background tasks for the diary service.
"""

# Ensure Celery registers task modules on worker startup.
from daydiary.tasks import media_cleanup_tasks  # noqa: F401
