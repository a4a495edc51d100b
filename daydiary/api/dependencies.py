"""
Shared API dependencies.
"""
from typing import Annotated

from fastapi import Depends
from sqlmodel import Session

from daydiary.core.database import get_session
from daydiary.middleware.request_logging import request_id_ctx
from daydiary.services.calendar_service import CalendarService
from daydiary.services.chat_service import ChatService
from daydiary.services.entry_service import EntryService
from daydiary.services.media_service import MediaService

# Alias for database session dependency
get_db = get_session


def get_request_id() -> str:
    """
    Dependency to get the current request ID from context.

    Returns:
        The current request ID, or 'unknown' if not in a request context.
    """
    return request_id_ctx.get()


def get_entry_service(session: Annotated[Session, Depends(get_db)]) -> EntryService:
    return EntryService(session)


def get_media_service(session: Annotated[Session, Depends(get_db)]) -> MediaService:
    return MediaService(session)


def get_calendar_service(session: Annotated[Session, Depends(get_db)]) -> CalendarService:
    return CalendarService(session)


def get_chat_service() -> ChatService:
    return ChatService()
