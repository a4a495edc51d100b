"""
Diary entry model.
"""
from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import field_validator
from sqlalchemy import Column, DateTime, String, Text
from sqlalchemy.dialects.postgresql import JSONB
from sqlmodel import Field, Index, JSON, Column as SQLModelColumn

from daydiary.core.time_utils import utc_now
from .base import BaseModel


TITLE_MAX_LENGTH = 300
MOOD_MAX_LENGTH = 16


def JSONType():
    return JSONB().with_variant(JSON, "sqlite")


class DiaryEntry(BaseModel, table=True):
    """
    One diary page per calendar date.

    ``date`` is the entity's identity: a second save for the same date
    replaces every other column of the existing row.
    """
    __tablename__ = "diary_entry"

    date: str = Field(
        sa_column=Column(String(10), nullable=False, unique=True),
        description="Calendar date key in YYYY-MM-DD form",
    )
    title: Optional[str] = Field(default=None, max_length=TITLE_MAX_LENGTH)
    mood: Optional[str] = Field(default=None, max_length=MOOD_MAX_LENGTH)
    content: Optional[str] = Field(default=None, sa_column=Column(Text))
    files: List[Dict[str, Any]] = Field(
        default_factory=list,
        sa_column=SQLModelColumn(JSONType(), nullable=False),
        description="Ordered file references: [{name, type, url}]",
    )
    created_at: datetime = Field(
        default_factory=utc_now,
        sa_column=Column(DateTime(timezone=True), nullable=False),
    )
    updated_at: datetime = Field(
        default_factory=utc_now,
        sa_column=Column(DateTime(timezone=True), nullable=False),
    )

    __table_args__ = (
        Index('idx_diary_entry_updated_at', 'updated_at'),
    )

    @field_validator('title')
    @classmethod
    def validate_title(cls, v):
        if v and len(v.strip()) == 0:
            return None
        return v.strip() if v else v
