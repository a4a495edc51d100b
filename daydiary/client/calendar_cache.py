"""
Client-side cache of the entry index used to mark calendar days.
"""
import asyncio
from typing import Dict, Optional

from daydiary.client.api import DiaryApiClient
from daydiary.core.calendar_utils import month_cells, format_date_key


class CalendarCache:
    """
    Holds ``{date: mood}`` for every saved entry.

    The index is fetched once and reused until ``invalidate()`` is called,
    which the entry editor does after each successful save so the next
    calendar render reflects the new entry.
    """

    def __init__(self, api: DiaryApiClient):
        self.api = api
        self._index: Optional[Dict[str, Optional[str]]] = None
        self._lock = asyncio.Lock()
        self.fetch_count = 0
        self._generation = 0

    @property
    def is_stale(self) -> bool:
        return self._index is None

    def invalidate(self, saved_entry: Optional[dict] = None) -> None:
        """Drop the index; usable directly as an ``EntryEditor.on_saved`` callback."""
        self._generation += 1
        self._index = None

    async def entries_index(self) -> Dict[str, Optional[str]]:
        async with self._lock:
            if self._index is not None:
                return self._index
            generation = self._generation
            entries = await self.api.list_entries()
            self.fetch_count += 1
            index = {entry["date"]: entry.get("mood") for entry in entries}
            # A fetch that started before the latest invalidate() is not cached
            if generation == self._generation:
                self._index = index
            return index

    async def has_entry(self, entry_date: str) -> bool:
        return entry_date in await self.entries_index()

    async def marked_days(self, year: int, month: int) -> Dict[int, Optional[str]]:
        """Day number to mood for each day of the month that has an entry."""
        index = await self.entries_index()
        marked = {}
        for day in month_cells(year, month):
            if day is None:
                continue
            key = format_date_key(year, month, day)
            if key in index:
                marked[day] = index[key]
        return marked
