"""
Gallery endpoints.
"""
from typing import Annotated, List

from fastapi import APIRouter, BackgroundTasks, Depends, status

from daydiary.api.dependencies import get_media_service, get_request_id
from daydiary.core.logging_config import log_media_action
from daydiary.schemas.media import (
    MediaCreate,
    MediaDeleteResponse,
    MediaFavoriteUpdate,
    MediaResponse,
)
from daydiary.services.media_service import MediaService, purge_media

router = APIRouter(prefix="/gallery", tags=["gallery"])


@router.get("", response_model=List[MediaResponse])
async def list_gallery(
    media_service: Annotated[MediaService, Depends(get_media_service)],
):
    """Get all media, newest first."""
    return media_service.list_media()


@router.post(
    "",
    response_model=MediaResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"description": "Missing name, type or url"},
    }
)
async def register_media(
    media_data: MediaCreate,
    media_service: Annotated[MediaService, Depends(get_media_service)],
):
    """
    Register a file that has already been uploaded to the media host.
    """
    return media_service.create_media(media_data)


@router.delete(
    "/{media_id}",
    response_model=MediaDeleteResponse,
    responses={
        404: {"description": "Media not found"},
    }
)
async def delete_media(
    media_id: int,
    background_tasks: BackgroundTasks,
    media_service: Annotated[MediaService, Depends(get_media_service)],
    request_id: Annotated[str, Depends(get_request_id)],
):
    """
    Delete a media item.

    The response is sent as soon as the item is known to exist. Removing the
    record and the remote file happens afterwards in the background; the
    outcome is only logged.
    """
    media_service.get_media(media_id)
    background_tasks.add_task(purge_media, media_id)
    log_media_action("delete scheduled", media_id, request_id=request_id)
    return MediaDeleteResponse()


@router.put(
    "/{media_id}",
    response_model=MediaResponse,
    responses={
        404: {"description": "Media not found"},
    }
)
async def update_media_favorite(
    media_id: int,
    update: MediaFavoriteUpdate,
    media_service: Annotated[MediaService, Depends(get_media_service)],
):
    """Mark or unmark a media item as favorite."""
    return media_service.update_favorite(media_id, update.favorite)
