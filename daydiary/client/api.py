"""
HTTP wrapper over the diary API.
"""
from typing import Any, Dict, List, Optional

import httpx

from daydiary.core.logging_config import log_debug


class DiaryApiError(Exception):
    """Raised for any non-2xx response from the diary API."""

    def __init__(self, status_code: int, message: str):
        super().__init__(f"{status_code}: {message}")
        self.status_code = status_code
        self.message = message


class DiaryApiClient:
    """Thin async client; every method returns decoded JSON."""

    def __init__(
        self,
        base_url: str = "http://localhost:8000/api",
        *,
        http_client: Optional[httpx.AsyncClient] = None,
        timeout: float = 10.0,
    ):
        self.base_url = base_url.rstrip("/")
        self._owns_client = http_client is None
        self._http = http_client or httpx.AsyncClient(timeout=timeout)

    async def __aenter__(self) -> "DiaryApiClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._http.aclose()

    async def _request(self, method: str, path: str, **kwargs) -> Any:
        url = f"{self.base_url}{path}"
        log_debug("Diary API request", method=method, url=url)
        response = await self._http.request(method, url, **kwargs)
        if not response.is_success:
            try:
                message = response.json().get("message") or response.text
            except ValueError:
                message = response.text
            raise DiaryApiError(response.status_code, str(message))
        return response.json()

    # Entries
    async def get_entry(self, entry_date: str) -> Optional[Dict[str, Any]]:
        """The entry for ``entry_date`` or None."""
        return await self._request("GET", "/entries", params={"date": entry_date})

    async def list_entries(self) -> List[Dict[str, Any]]:
        return await self._request("GET", "/entries")

    async def upsert_entry(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        return await self._request("POST", "/entries", json=payload)

    async def get_entry_detail(self, entry_date: str) -> Dict[str, Any]:
        return await self._request("GET", f"/entries/{entry_date}/detail")

    async def get_calendar(self, year: int, month: int) -> Dict[str, Any]:
        return await self._request("GET", f"/calendar/{year}/{month}")

    # Gallery
    async def list_media(self) -> List[Dict[str, Any]]:
        return await self._request("GET", "/gallery")

    async def create_media(self, name: str, type: str, url: str) -> Dict[str, Any]:
        return await self._request("POST", "/gallery", json={"name": name, "type": type, "url": url})

    async def delete_media(self, media_id: int) -> Dict[str, Any]:
        return await self._request("DELETE", f"/gallery/{media_id}")

    async def set_favorite(self, media_id: int, favorite: bool) -> Dict[str, Any]:
        return await self._request("PUT", f"/gallery/{media_id}", json={"favorite": favorite})

    # Chat
    async def chat(self, messages: List[Dict[str, Any]]) -> str:
        data = await self._request("POST", "/chat", json={"messages": messages})
        return data["reply"]

    async def quote(self) -> str:
        data = await self._request("GET", "/quote")
        return data["quote"]
