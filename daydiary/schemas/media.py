"""
Gallery media schemas.
"""
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class MediaCreate(BaseModel):
    """
    Registration payload for an already uploaded file.

    Fields are optional here so that missing values are reported as a
    client error by the service.
    """
    name: Optional[str] = None
    type: Optional[str] = None
    url: Optional[str] = None


class MediaFavoriteUpdate(BaseModel):
    favorite: bool


class MediaResponse(BaseModel):
    """Media response schema."""
    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: int
    name: str
    type: str
    url: str
    favorite: bool = False
    added_at: datetime = Field(serialization_alias="addedAt")


class MediaDeleteResponse(BaseModel):
    success: bool = True
