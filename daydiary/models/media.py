"""
Gallery media model.
"""
from datetime import datetime

from sqlalchemy import Column, DateTime, Boolean, String, false
from sqlmodel import Field, Index

from daydiary.core.time_utils import utc_now
from .base import BaseModel


class MediaItem(BaseModel, table=True):
    """
    Metadata for a file that already lives on the external media host.

    ``name``, ``type`` and ``url`` are written once at registration;
    only ``favorite`` changes afterwards.
    """
    __tablename__ = "media_item"

    name: str = Field(sa_column=Column(String(255), nullable=False))
    type: str = Field(sa_column=Column(String(100), nullable=False))
    url: str = Field(sa_column=Column(String(1024), nullable=False))
    favorite: bool = Field(
        default=False,
        sa_column=Column(Boolean, nullable=False, server_default=false(), default=False),
    )
    added_at: datetime = Field(
        default_factory=utc_now,
        sa_column=Column(DateTime(timezone=True), nullable=False),
    )

    __table_args__ = (
        Index('idx_media_item_added_at', 'added_at'),
    )
