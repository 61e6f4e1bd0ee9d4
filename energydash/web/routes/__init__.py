"""Web routes package."""

from fastapi import APIRouter

from energydash.web.routes import preferences

web_router = APIRouter()

web_router.include_router(preferences.router, prefix="/admin", tags=["web-admin"])
