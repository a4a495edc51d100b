"""
Sticky notes pinned to a bounded wall.
"""
import random
import uuid
from dataclasses import asdict, dataclass
from typing import List, Optional

from daydiary.client.state_store import StateStore
from daydiary.models.enums import NoteColor

NOTE_WIDTH = 208
NOTE_HEIGHT = 160


@dataclass
class StickyNote:
    id: str
    text: str
    color: str
    x: float
    y: float


class StickyNoteBoard:
    """
    Notes placed on a ``width`` x ``height`` wall.

    Positions are clamped so a note always stays fully on the wall. Every
    mutation is written to the backing store.
    """

    def __init__(
        self,
        store: StateStore,
        width: float = 1200,
        height: float = 800,
        rng: Optional[random.Random] = None,
    ):
        self.store = store
        self.width = width
        self.height = height
        self._rng = rng or random.Random()
        self.notes: List[StickyNote] = [StickyNote(**raw) for raw in store.load() or []]

    def _persist(self) -> None:
        self.store.save([asdict(note) for note in self.notes])

    def _clamp(self, x: float, y: float) -> tuple:
        max_x = max(0, self.width - NOTE_WIDTH)
        max_y = max(0, self.height - NOTE_HEIGHT)
        return min(max(0, x), max_x), min(max(0, y), max_y)

    def get(self, note_id: str) -> StickyNote:
        for note in self.notes:
            if note.id == note_id:
                return note
        raise KeyError(note_id)

    def add(self, text: str, color: str = NoteColor.YELLOW.value, x: Optional[float] = None, y: Optional[float] = None) -> StickyNote:
        text = text.strip()
        if not text:
            raise ValueError("Note text must not be blank")
        color = NoteColor(color).value
        if x is None:
            x = self._rng.uniform(100, 400)
        if y is None:
            y = self._rng.uniform(100, 250)
        x, y = self._clamp(x, y)
        note = StickyNote(id=uuid.uuid4().hex, text=text, color=color, x=x, y=y)
        self.notes.append(note)
        self._persist()
        return note

    def edit(self, note_id: str, text: Optional[str] = None, color: Optional[str] = None) -> StickyNote:
        note = self.get(note_id)
        if text is not None:
            if not text.strip():
                raise ValueError("Note text must not be blank")
            note.text = text.strip()
        if color is not None:
            note.color = NoteColor(color).value
        self._persist()
        return note

    def move(self, note_id: str, x: float, y: float) -> StickyNote:
        note = self.get(note_id)
        note.x, note.y = self._clamp(x, y)
        self._persist()
        return note

    def delete(self, note_id: str) -> None:
        note = self.get(note_id)
        self.notes.remove(note)
        self._persist()
