"""
Base model shared by all tables.
"""
from typing import Optional

from sqlmodel import SQLModel, Field


class BaseModel(SQLModel):
    """Base model with an auto-incrementing integer primary key."""
    id: Optional[int] = Field(default=None, primary_key=True)
