# Import all models for easy access
from .base import BaseModel
from .entry import DiaryEntry
from .media import MediaItem

__all__ = [
    "BaseModel",
    "DiaryEntry",
    "MediaItem",
]
