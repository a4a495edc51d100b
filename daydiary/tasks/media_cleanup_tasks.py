"""
Best-effort removal of remote files after a gallery item is deleted.

The HTTP caller never waits for or learns about the outcome: every result,
including failures, ends up in the ``app.tasks`` log. Nothing is retried.
"""
import asyncio
import logging
from typing import Optional

import httpx

from daydiary.core.celery_app import celery_app
from daydiary.core.config import settings
from daydiary.core.exceptions import MediaHostError
from daydiary.core.logging_config import LogCategory
from daydiary.integrations.media_host import MediaHostClient, public_id_from_url, resource_type_for

logger = logging.getLogger(LogCategory.TASKS.value)


async def delete_remote_asset(url: str, mime_type: Optional[str], client: Optional[MediaHostClient] = None) -> bool:
    """Delete the remote object behind ``url``. Returns True only on confirmed removal."""
    public_id = public_id_from_url(url)
    if not public_id:
        logger.warning("Remote cleanup skipped: no identifier in url=%s", url)
        return False

    if client is None:
        if not settings.media_host_delete_enabled:
            logger.warning(
                "Remote cleanup skipped: media host credentials not configured (public_id=%s)",
                public_id,
            )
            return False
        client = MediaHostClient()

    try:
        deleted = await client.delete(public_id, resource_type_for(mime_type))
    except MediaHostError as exc:
        logger.error("Remote cleanup failed for public_id=%s: %s", public_id, exc)
        return False
    except Exception:
        logger.exception("Remote cleanup crashed for public_id=%s", public_id)
        return False

    if deleted:
        logger.info("Remote cleanup removed public_id=%s", public_id)
    else:
        logger.warning("Remote cleanup found nothing to remove for public_id=%s", public_id)
    return deleted


async def _delete_with_private_client(url: str, mime_type: Optional[str]) -> bool:
    # Worker processes run each task in a fresh event loop, so they cannot
    # share the web process's pooled client.
    async with httpx.AsyncClient(timeout=settings.http_timeout_seconds) as http_client:
        return await delete_remote_asset(url, mime_type, MediaHostClient(http_client=http_client))


@celery_app.task(name="daydiary.tasks.media_cleanup.delete_remote_media")
def delete_remote_media(url: str, mime_type: Optional[str] = None) -> bool:
    """Celery entry point for remote cleanup."""
    logger.info("Starting background task: delete_remote_media (url=%s)", url)
    return asyncio.run(_delete_with_private_client(url, mime_type))


async def schedule_remote_cleanup(url: str, mime_type: Optional[str]) -> None:
    """Hand remote cleanup to the Celery queue, or run it here when no broker is configured."""
    if settings.celery_enabled:
        try:
            delete_remote_media.delay(url, mime_type)
            logger.info("Queued remote cleanup for url=%s", url)
            return
        except Exception as exc:
            logger.error("Could not queue remote cleanup for url=%s, running inline: %s", url, exc)
    await delete_remote_asset(url, mime_type)
