"""
Media host integration (Cloudinary REST API).

Uploads are unsigned and use an upload preset; deletions are signed with the
account's API secret. Remote assets are addressed by their public id, which
is the trailing path segment of the delivery URL without its extension.

API Documentation: https://cloudinary.com/documentation/image_upload_api_reference
"""
import hashlib
import io
import logging
import time
from dataclasses import dataclass
from typing import Callable, Dict, Optional
from urllib.parse import unquote, urlparse

import httpx

from daydiary.core.config import settings
from daydiary.core.exceptions import MediaHostError, MediaHostNotConfiguredError
from daydiary.core.http_client import get_http_client
from daydiary.core.logging_config import LogCategory

logger = logging.getLogger(LogCategory.MEDIA_HOST.value)

ProgressCallback = Callable[[int, int], None]


@dataclass
class UploadedAsset:
    """Result of a finished upload."""
    url: str
    public_id: str
    resource_type: str


def public_id_from_url(url: str) -> Optional[str]:
    """Derive the remote identifier from a delivery URL.

    Example:
        >>> public_id_from_url("https://res.cloudinary.com/demo/image/upload/v17/abc123.jpg")
        'abc123'
    """
    if not url:
        return None
    path = urlparse(url).path
    segment = unquote(path.rstrip("/").rsplit("/", 1)[-1])
    if not segment:
        return None
    stem = segment.rsplit(".", 1)[0] if "." in segment else segment
    return stem or None


def resource_type_for(mime_type: Optional[str]) -> str:
    """Map a mime type to the host's resource type (audio is stored as video)."""
    if not mime_type:
        return "raw"
    if mime_type.startswith("image/"):
        return "image"
    if mime_type.startswith(("video/", "audio/")):
        return "video"
    return "raw"


def _json_object(response: httpx.Response, action: str) -> Dict[str, object]:
    """Decode a 200 reply that must be a JSON object; anything else is a host error."""
    try:
        payload = response.json()
    except ValueError as exc:
        raise MediaHostError(f"{action} returned a body that is not JSON") from exc
    if not isinstance(payload, dict):
        raise MediaHostError(f"{action} returned unexpected JSON: {type(payload).__name__}")
    return payload


class _ProgressReader(io.BytesIO):
    """In-memory file that reports how many bytes the multipart encoder has read."""

    def __init__(self, content: bytes, on_progress: Optional[ProgressCallback]):
        super().__init__(content)
        self._total = len(content)
        self._sent = 0
        self._on_progress = on_progress

    def seek(self, offset: int, whence: int = io.SEEK_SET) -> int:
        position = super().seek(offset, whence)
        if whence == io.SEEK_SET and offset == 0:
            self._sent = 0
        return position

    def read(self, size: int = -1) -> bytes:
        chunk = super().read(size)
        if chunk and self._on_progress is not None:
            self._sent += len(chunk)
            self._on_progress(self._sent, self._total)
        return chunk


class MediaHostClient:
    """Thin async client for the external media host."""

    def __init__(
        self,
        *,
        cloud_name: Optional[str] = None,
        upload_preset: Optional[str] = None,
        api_key: Optional[str] = None,
        api_secret: Optional[str] = None,
        base_url: Optional[str] = None,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        self.cloud_name = cloud_name or settings.media_host_cloud_name
        self.upload_preset = upload_preset or settings.media_host_upload_preset
        self.api_key = api_key or settings.media_host_api_key
        self.api_secret = api_secret or settings.media_host_api_secret
        self.base_url = (base_url or settings.media_host_base_url).rstrip("/")
        self._http_client = http_client

    async def _client(self) -> httpx.AsyncClient:
        if self._http_client is not None:
            return self._http_client
        return await get_http_client()

    def _endpoint(self, resource_type: str, action: str) -> str:
        return f"{self.base_url}/{self.cloud_name}/{resource_type}/{action}"

    def _sign(self, params: Dict[str, object]) -> str:
        to_sign = "&".join(f"{key}={params[key]}" for key in sorted(params))
        return hashlib.sha1(f"{to_sign}{self.api_secret}".encode("utf-8")).hexdigest()

    async def upload(
        self,
        filename: str,
        content: bytes,
        content_type: str,
        on_progress: Optional[ProgressCallback] = None,
    ) -> UploadedAsset:
        """Upload one file and return its durable URL.

        Raises:
            MediaHostNotConfiguredError: cloud name or upload preset missing
            MediaHostError: transport failure, non-200 response or unreadable reply
        """
        if not self.cloud_name or not self.upload_preset:
            raise MediaHostNotConfiguredError("Media host cloud name and upload preset are required")

        client = await self._client()
        reader = _ProgressReader(content, on_progress)
        try:
            response = await client.post(
                self._endpoint("auto", "upload"),
                data={"upload_preset": self.upload_preset},
                files={"file": (filename, reader, content_type or "application/octet-stream")},
            )
        except httpx.HTTPError as exc:
            raise MediaHostError(f"Upload of {filename} failed: {exc}") from exc

        if response.status_code != 200:
            raise MediaHostError(
                f"Upload of {filename} rejected with status {response.status_code}",
                status_code=response.status_code,
            )

        payload = _json_object(response, f"Upload of {filename}")
        url = payload.get("secure_url") or payload.get("url")
        if not url or not isinstance(url, str):
            raise MediaHostError(f"Upload of {filename} returned no URL")

        asset = UploadedAsset(
            url=url,
            public_id=payload.get("public_id") or public_id_from_url(url),
            resource_type=payload.get("resource_type") or resource_type_for(content_type),
        )
        logger.info("Uploaded %s to media host as public_id=%s", filename, asset.public_id)
        return asset

    async def delete(self, public_id: str, resource_type: str = "image") -> bool:
        """Destroy a remote asset. Returns False when the host has no such asset.

        Raises:
            MediaHostNotConfiguredError: signing credentials missing
            MediaHostError: transport failure, non-200 response or unreadable reply
        """
        if not (self.cloud_name and self.api_key and self.api_secret):
            raise MediaHostNotConfiguredError("Media host API key and secret are required to delete assets")

        params = {"public_id": public_id, "timestamp": int(time.time())}
        data = {**params, "api_key": self.api_key, "signature": self._sign(params)}

        client = await self._client()
        try:
            response = await client.post(self._endpoint(resource_type, "destroy"), data=data)
        except httpx.HTTPError as exc:
            raise MediaHostError(f"Delete of {public_id} failed: {exc}") from exc

        if response.status_code != 200:
            raise MediaHostError(
                f"Delete of {public_id} rejected with status {response.status_code}",
                status_code=response.status_code,
            )

        result = _json_object(response, f"Delete of {public_id}").get("result")
        if result != "ok":
            logger.warning("Media host did not delete public_id=%s (result=%s)", public_id, result)
            return False
        return True
