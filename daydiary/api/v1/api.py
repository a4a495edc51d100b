"""
API v1 router.
"""
from fastapi import APIRouter

from daydiary.api.v1.endpoints import calendar, chat, entries, gallery, health

api_router = APIRouter()

# Routers carry their own prefixes
api_router.include_router(entries.router)
api_router.include_router(gallery.router)
api_router.include_router(calendar.router)
api_router.include_router(chat.router)
api_router.include_router(health.router)
