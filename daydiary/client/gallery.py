"""
Gallery client: upload first, register second.
"""
from typing import Any, Dict, List, Optional

from daydiary.client.api import DiaryApiClient
from daydiary.core.logging_config import log_info
from daydiary.integrations.media_host import MediaHostClient, ProgressCallback


class GalleryClient:
    """Gallery operations built on the diary API and the media host."""

    def __init__(self, api: DiaryApiClient, media_host: MediaHostClient):
        self.api = api
        self.media_host = media_host

    async def list(self) -> List[Dict[str, Any]]:
        return await self.api.list_media()

    async def upload(
        self,
        filename: str,
        content: bytes,
        content_type: str,
        on_progress: Optional[ProgressCallback] = None,
    ) -> Dict[str, Any]:
        """
        Upload a file and register it in the gallery.

        A failed upload raises MediaHostError before anything is registered,
        so the gallery never points at a file the host does not have.
        """
        asset = await self.media_host.upload(filename, content, content_type, on_progress=on_progress)
        media = await self.api.create_media(filename, content_type, asset.url)
        log_info("Registered gallery media", media_id=media.get("id"), public_id=asset.public_id)
        return media

    async def delete(self, media_id: int) -> bool:
        result = await self.api.delete_media(media_id)
        return bool(result.get("success"))

    async def toggle_favorite(self, media: Dict[str, Any]) -> Dict[str, Any]:
        return await self.api.set_favorite(media["id"], not media.get("favorite", False))
